"""
test_settings.py - Tests for environment-derived settings
"""

import json
import os

import pytest

from qlinit.core.errors import InvalidSettingError
from qlinit.utils.settings import (
    UNKNOWN_JOB,
    ActionSettings,
    get_extra_options,
    get_extra_options_env_param,
    get_input,
    get_required_env_param,
    is_local_run,
    prepare_local_run_environment,
)


def test_get_input():
    environ = {"INPUT_CONFIG-FILE": " ./codeql.yml ", "INPUT_LANGUAGES": "go"}

    assert get_input("config-file", environ) == "./codeql.yml"
    assert get_input("languages", environ) == "go"
    assert get_input("queries", environ) == ""


def test_get_required_env_param():
    assert get_required_env_param("RUNNER_TEMP", {"RUNNER_TEMP": "/tmp/runner"}) == "/tmp/runner"

    with pytest.raises(InvalidSettingError) as exc_info:
        get_required_env_param("RUNNER_TEMP", {})

    assert "RUNNER_TEMP must be set" in str(exc_info.value)


@pytest.mark.parametrize(
    "value,expected",
    [("", False), ("false", False), ("0", False), ("true", True), ("1", True)],
)
def test_is_local_run(value, expected):
    assert is_local_run({"CODEQL_LOCAL_RUN": value}) is expected


def test_prepare_local_run_environment():
    environ = {"CODEQL_LOCAL_RUN": "true"}

    prepare_local_run_environment(environ)

    assert environ["GITHUB_JOB"] == UNKNOWN_JOB


def test_prepare_local_run_keeps_existing_job():
    environ = {"CODEQL_LOCAL_RUN": "true", "GITHUB_JOB": "analyze"}

    prepare_local_run_environment(environ)

    assert environ["GITHUB_JOB"] == "analyze"


def test_prepare_environment_outside_local_run():
    environ = {}

    prepare_local_run_environment(environ)

    assert "GITHUB_JOB" not in environ


def test_prepare_environment_uses_process_environment(monkeypatch):
    monkeypatch.setenv("CODEQL_LOCAL_RUN", "1")
    monkeypatch.delenv("GITHUB_JOB", raising=False)

    prepare_local_run_environment()

    assert os.environ["GITHUB_JOB"] == UNKNOWN_JOB


def test_extra_options_env_param():
    options = {"database": {"init": ["--foo"]}}

    assert get_extra_options_env_param({}) == {}
    assert get_extra_options_env_param({"CODEQL_ACTION_EXTRA_OPTIONS": json.dumps(options)}) == options


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]"])
def test_extra_options_env_param_invalid(raw):
    with pytest.raises(InvalidSettingError):
        get_extra_options_env_param({"CODEQL_ACTION_EXTRA_OPTIONS": raw})


def test_get_extra_options():
    options = {
        "*": ["--all"],
        "database": {
            "*": ["--any-database"],
            "init": ["--init", 42],
        },
    }

    assert get_extra_options(options, ["database", "init"]) == ["--all", "--any-database", "--init", "42"]
    assert get_extra_options(options, ["database", "finalize"]) == ["--all", "--any-database"]
    assert get_extra_options(options, ["resolve", "queries"]) == ["--all"]
    assert get_extra_options({}, ["database", "init"]) == []


def test_get_extra_options_not_an_array():
    with pytest.raises(InvalidSettingError) as exc_info:
        get_extra_options({"database": {"init": "--foo"}}, ["database", "init"])

    assert "'database.init' are not in an array" in str(exc_info.value)


def test_get_extra_options_not_strings():
    with pytest.raises(InvalidSettingError) as exc_info:
        get_extra_options({"*": [{"a": 1}]}, ["database"])

    assert "'*' are not all strings or numbers" in str(exc_info.value)


def test_settings_from_env():
    environ = {
        "INPUT_LANGUAGES": "python",
        "INPUT_QUERIES": "security-extended",
        "INPUT_CONFIG-FILE": "./.github/codeql.yml",
        "INPUT_RAM": "2048",
        "INPUT_THREADS": "2",
        "INPUT_TOKEN": "secret",
        "GITHUB_SERVER_URL": "https://ghe.example.com",
        "GITHUB_REPOSITORY": "octo-org/app",
        "GITHUB_WORKSPACE": "/work/app",
        "GITHUB_JOB": "analyze",
        "RUNNER_TEMP": "/runner/temp",
        "RUNNER_TOOL_CACHE": "/runner/cache",
        "CODEQL_ACTION_EXTRA_OPTIONS": '{"*": ["--verbose"]}',
    }

    settings = ActionSettings.from_env(environ)

    assert settings == ActionSettings(
        languages="python",
        queries="security-extended",
        config_file="./.github/codeql.yml",
        ram="2048",
        threads="2",
        token="secret",
        github_url="https://ghe.example.com",
        repository="octo-org/app",
        workspace="/work/app",
        temp_dir="/runner/temp",
        tool_cache_dir="/runner/cache",
        extra_options={"*": ["--verbose"]},
    )


def test_settings_from_empty_env():
    settings = ActionSettings.from_env({})

    assert settings.github_url == "https://github.com"
    assert settings.extra_options == {}
