"""
languages.py - Language handling for qlinit

This module defines the languages the analysis tool supports and works out
which of them to analyze, either from explicit input or by asking the GitHub
API what the repository contains.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

from ..utils import api_client as api
from .errors import NoLanguagesError, UnknownLanguagesError

log = logging.getLogger(__name__)


class Language(Enum):
    """Enumeration of supported languages."""

    CSHARP = "csharp"
    CPP = "cpp"
    GO = "go"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    PYTHON = "python"


LANGUAGE_ALIASES = {
    "c": Language.CPP,
    "c++": Language.CPP,
    "c#": Language.CSHARP,
    "typescript": Language.JAVASCRIPT,
}

TRACED_LANGUAGES = (Language.CPP, Language.JAVA, Language.CSHARP)


@dataclass(frozen=True)
class RepositoryNwo:
    """Repository name with owner"""

    owner: str
    repo: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_repository_nwo(input_string: str) -> RepositoryNwo:
    """
    Parse an "owner/repo" string

    Raises:
        ValueError: If the string is not of the form owner/repo
    """
    parts = input_string.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f'"{input_string}" is not a valid repository name')
    return RepositoryNwo(owner=parts[0], repo=parts[1])


def parse_language(language: Union[str, Language]) -> Optional[Language]:
    """
    Parse a language name or alias

    Args:
        language: Language name as given by a user or the GitHub API

    Returns:
        The matching Language, or None if it is not supported
    """
    if isinstance(language, Language):
        return language

    name = language.strip().lower()
    try:
        return Language(name)
    except ValueError:
        return LANGUAGE_ALIASES.get(name)


def is_traced_language(language: Language) -> bool:
    return language in TRACED_LANGUAGES


def is_scanned_language(language: Language) -> bool:
    return not is_traced_language(language)


def parse_languages(languages: Iterable[Union[str, Language]]) -> List[Language]:
    """
    Normalize a list of language names, keeping first-seen order

    Raises:
        UnknownLanguagesError: If any of the names is not a supported language
    """
    parsed: List[Language] = []
    unknown: List[str] = []

    for language in languages:
        parsed_language = parse_language(language)
        if parsed_language is None:
            unknown.append(str(language))
        elif parsed_language not in parsed:
            parsed.append(parsed_language)

    if unknown:
        raise UnknownLanguagesError(unknown)

    return parsed


def get_languages_in_repo(
    repository: RepositoryNwo,
    github_auth: str,
    github_url: str,
    logger: Optional[logging.Logger] = None,
    api_client: Any = None,
) -> List[Language]:
    """
    List the supported languages GitHub detects in a repository

    The API returns languages ordered by number of bytes, and that order is
    preserved so the most popular language comes first.
    """
    logger = logger or log
    client = api_client or api.get_api_client(github_auth, github_url)

    logger.debug(f"GitHub repo {repository.owner} {repository.repo}")
    response = client.list_languages(repository.owner, repository.repo)
    logger.debug(f"Languages API response: {response}")

    languages: List[Language] = []
    for name in response:
        parsed_language = parse_language(name)
        if parsed_language is not None and parsed_language not in languages:
            languages.append(parsed_language)

    return languages


def get_languages(
    languages_input: Optional[str],
    repository: Optional[RepositoryNwo],
    github_auth: str,
    github_url: str,
    logger: Optional[logging.Logger] = None,
    api_client: Any = None,
) -> List[Language]:
    """
    Determine the languages to analyze

    Args:
        languages_input: Comma separated languages from the workflow, or None
        repository: Repository to auto-detect languages in, if any
        github_auth: Token for the GitHub API
        github_url: URL of the GitHub instance
        logger: Logger to report progress to
        api_client: GitHub API client, built from github_auth/github_url if None

    Returns:
        List of languages, without duplicates

    Raises:
        NoLanguagesError: If no languages were given and none were detected
        UnknownLanguagesError: If any given language is not supported
    """
    logger = logger or log

    languages = [x.strip() for x in (languages_input or "").split(",")]
    languages = [x for x in languages if x]
    logger.info(f"Languages from configuration: {languages}")

    if not languages and repository is not None:
        detected = get_languages_in_repo(
            repository, github_auth, github_url, logger=logger, api_client=api_client
        )
        languages = [language.value for language in detected]
        logger.info(f"Automatically detected languages: {languages}")

    # Not given and not detected is a workflow configuration error
    if not languages:
        raise NoLanguagesError()

    return parse_languages(languages)
