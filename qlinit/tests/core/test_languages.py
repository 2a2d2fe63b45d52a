"""
test_languages.py - Tests for language resolution
"""

import pytest

from qlinit.core.errors import NoLanguagesError, UnknownLanguagesError
from qlinit.core.languages import (
    Language,
    RepositoryNwo,
    get_languages,
    is_scanned_language,
    is_traced_language,
    parse_language,
    parse_repository_nwo,
)
from qlinit.tests.conftest import FakeApiClient

REPOSITORY = RepositoryNwo(owner="github", repo="example")
GITHUB_URL = "https://github.example.com"


def test_parse_language():
    assert parse_language("javascript") is Language.JAVASCRIPT
    assert parse_language("Python") is Language.PYTHON
    assert parse_language(" go ") is Language.GO
    assert parse_language("typescript") is Language.JAVASCRIPT
    assert parse_language("C++") is Language.CPP
    assert parse_language("c") is Language.CPP
    assert parse_language("C#") is Language.CSHARP
    assert parse_language(Language.JAVA) is Language.JAVA
    assert parse_language("ruby") is None


def test_traced_and_scanned_languages():
    assert is_traced_language(Language.CPP)
    assert is_traced_language(Language.JAVA)
    assert is_traced_language(Language.CSHARP)
    assert is_scanned_language(Language.JAVASCRIPT)
    assert is_scanned_language(Language.PYTHON)
    assert is_scanned_language(Language.GO)


def test_languages_from_input(logger):
    client = FakeApiClient(languages={"Go": 100})

    languages = get_languages(
        "javascript, python,,typescript", REPOSITORY, "token", GITHUB_URL, logger, api_client=client
    )

    assert languages == [Language.JAVASCRIPT, Language.PYTHON]
    assert client.list_languages_calls == []


def test_languages_detected_from_repository(logger):
    client = FakeApiClient(languages={"Python": 3000, "Ruby": 2000, "C": 1000, "C++": 500})

    languages = get_languages(None, REPOSITORY, "token", GITHUB_URL, logger, api_client=client)

    assert languages == [Language.PYTHON, Language.CPP]
    assert client.list_languages_calls == [("github", "example")]


def test_no_detected_languages(logger):
    client = FakeApiClient(languages={})

    with pytest.raises(NoLanguagesError):
        get_languages(None, REPOSITORY, "token", GITHUB_URL, logger, api_client=client)


def test_no_languages_and_no_repository(logger):
    with pytest.raises(NoLanguagesError):
        get_languages("", None, "token", GITHUB_URL, logger)


def test_unknown_languages(logger):
    with pytest.raises(UnknownLanguagesError) as exc_info:
        get_languages("ruby,english", REPOSITORY, "token", GITHUB_URL, logger)

    assert exc_info.value == UnknownLanguagesError(["ruby", "english"])
    assert str(exc_info.value) == "Did not recognise the following languages: ruby, english"


def test_detection_uses_get_api_client(monkeypatch, logger):
    client = FakeApiClient(languages={"JavaScript": 1})
    monkeypatch.setattr("qlinit.utils.api_client.get_api_client", lambda auth, url: client)

    assert get_languages(None, REPOSITORY, "token", GITHUB_URL, logger) == [Language.JAVASCRIPT]


def test_parse_repository_nwo():
    assert parse_repository_nwo("github/example") == REPOSITORY
    assert str(REPOSITORY) == "github/example"

    for invalid in ["github", "github/", "/example", "a/b/c"]:
        with pytest.raises(ValueError):
            parse_repository_nwo(invalid)
