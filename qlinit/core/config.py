"""
config.py - Configuration management for qlinit

This module resolves the languages, queries and path filters for an analysis
run into a Config, from the workflow inputs and an optional local or remote
YAML config file, and persists it for later steps of the run.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

import yaml

from ..utils import api_client as api
from ..utils.file_handler import atomic_write_file, is_path_within, read_text_file
from ..utils.yaml_handler import load_yaml
from .codeql import CodeQL
from .errors import (
    DISABLE_DEFAULT_QUERIES_PROPERTY,
    NAME_PROPERTY,
    PATHS_IGNORE_PROPERTY,
    PATHS_PROPERTY,
    QUERIES_PROPERTY,
    QUERIES_USES_PROPERTY,
    ConfigFileDirectoryGivenError,
    ConfigFileDoesNotExistError,
    ConfigFileFormatInvalidError,
    ConfigFileOutsideWorkspaceError,
    ConfigFileRepoFormatInvalidError,
    FieldInvalidError,
    FileContentInvalidError,
    FileIsADirectoryError,
    QueryUsesInvalidError,
)
from .languages import Language, parse_languages
from .paths import validate_and_sanitise_path
from .queries import QueriesByLanguage, resolve_query_uses, run_resolve_queries

log = logging.getLogger(__name__)

PARSED_CONFIG_FILE_NAME = "config"
DEFAULT_SUITE_SUFFIX = "-code-scanning.qls"

REMOTE_CONFIG_FORMAT = re.compile(r"(?P<owner>[^/]+)/(?P<repo>[^/]+)/(?P<path>[^@]+)@(?P<ref>.*)")


@dataclass(frozen=True)
class Config:
    """Resolved configuration for an analysis run"""

    languages: List[Language]
    queries: Dict[str, List[str]]
    paths_ignore: List[str]
    paths: List[str]
    original_user_input: Dict[str, Any]
    temp_dir: str
    tool_cache_dir: str
    codeql_cmd: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "languages": [language.value for language in self.languages],
            "queries": {language: list(paths) for language, paths in self.queries.items()},
            "pathsIgnore": list(self.paths_ignore),
            "paths": list(self.paths),
            "originalUserInput": self.original_user_input,
            "tempDir": self.temp_dir,
            "toolCacheDir": self.tool_cache_dir,
            "codeQLCmd": self.codeql_cmd,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        return cls(
            languages=[Language(language) for language in data["languages"]],
            queries={language: list(paths) for language, paths in data["queries"].items()},
            paths_ignore=list(data["pathsIgnore"]),
            paths=list(data["paths"]),
            original_user_input=data["originalUserInput"],
            temp_dir=data["tempDir"],
            tool_cache_dir=data["toolCacheDir"],
            codeql_cmd=data["codeQLCmd"],
        )


@dataclass(frozen=True)
class RemoteConfigReference:
    """Location of a config file in another repository"""

    owner: str
    repo: str
    path: str
    ref: str


def get_path_to_parsed_config_file(temp_dir: str) -> str:
    """Path the resolved config is persisted to"""
    return os.path.join(temp_dir, PARSED_CONFIG_FILE_NAME)


def is_local(config_path: str) -> bool:
    """Whether a config file reference names a file in the checkout"""
    if config_path.startswith("./"):
        return True
    return "@" not in config_path


def parse_remote_config_reference(config_file: str) -> RemoteConfigReference:
    """
    Parse an owner/repo/path@ref config file reference

    Raises:
        ConfigFileRepoFormatInvalidError: If any of the parts is missing
    """
    match = REMOTE_CONFIG_FORMAT.fullmatch(config_file)
    if match is None or not match.group("ref"):
        raise ConfigFileRepoFormatInvalidError(config_file)
    return RemoteConfigReference(**match.groupdict())


def _parse_config_document(content: str, config_file: str) -> Dict[str, Any]:
    try:
        parsed = load_yaml(content)
    except yaml.YAMLError as e:
        raise ConfigFileFormatInvalidError(config_file) from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigFileFormatInvalidError(config_file)
    return parsed


def _get_local_config(config_file: str, checkout_path: str) -> Dict[str, Any]:
    # The config file must live inside the workspace
    if not is_path_within(checkout_path, config_file):
        raise ConfigFileOutsideWorkspaceError(config_file)

    if not os.path.isfile(config_file):
        raise ConfigFileDoesNotExistError(config_file)

    return _parse_config_document(read_text_file(config_file), config_file)


def _get_remote_config(
    config_file: str, github_auth: str, github_url: str, api_client: Any = None
) -> Dict[str, Any]:
    reference = parse_remote_config_reference(config_file)
    client = api_client or api.get_api_client(github_auth, github_url)

    try:
        content = api.get_file_contents_using_api(
            reference.owner, reference.repo, reference.path, reference.ref, api_client=client
        )
    except FileIsADirectoryError as e:
        raise ConfigFileDirectoryGivenError(config_file) from e
    except FileContentInvalidError as e:
        raise ConfigFileFormatInvalidError(config_file) from e

    return _parse_config_document(content, config_file)


def _as_json_document(parsed: Dict[str, Any]) -> Dict[str, Any]:
    # Dates and non-string keys become strings, as they will be once persisted
    return dict(json.loads(json.dumps(parsed, default=str)))


def _add_default_queries(
    codeql: CodeQL, languages: Sequence[Language], result_map: QueriesByLanguage
) -> None:
    suites = [f"{language.value}{DEFAULT_SUITE_SUFFIX}" for language in languages]
    run_resolve_queries(codeql, result_map, suites, None)


def _add_queries_from_workflow(
    codeql: CodeQL,
    queries_input: str,
    result_map: QueriesByLanguage,
    checkout_path: str,
    logger: logging.Logger,
) -> None:
    for query in queries_input.split(","):
        resolve_query_uses(codeql, result_map, query, None, checkout_path, logger=logger)


def _validate_path_list(
    parsed: Dict[str, Any], prop: str, config_file: str, logger: logging.Logger
) -> List[str]:
    if prop not in parsed:
        return []

    entries = parsed[prop]
    if not isinstance(entries, list):
        raise FieldInvalidError(config_file, prop)

    result = []
    for entry in entries:
        if not isinstance(entry, str) or entry == "":
            raise FieldInvalidError(config_file, prop)
        result.append(validate_and_sanitise_path(entry, prop, config_file, logger))
    return result


def get_default_config(
    languages: Sequence[Union[str, Language]],
    queries_input: Optional[str],
    temp_dir: str,
    tool_cache_dir: str,
    codeql: CodeQL,
    checkout_path: str,
    logger: Optional[logging.Logger] = None,
) -> Config:
    """
    Get the configuration used when no config file is given

    Every language gets its default code scanning suite, followed by any
    queries from the workflow input.
    """
    logger = logger or log
    parsed_languages = parse_languages(languages)

    queries: QueriesByLanguage = {}
    _add_default_queries(codeql, parsed_languages, queries)
    if queries_input:
        _add_queries_from_workflow(codeql, queries_input, queries, checkout_path, logger)

    return Config(
        languages=parsed_languages,
        queries=queries,
        paths_ignore=[],
        paths=[],
        original_user_input={},
        temp_dir=temp_dir,
        tool_cache_dir=tool_cache_dir,
        codeql_cmd=codeql.get_path(),
    )


def load_config(
    languages: Sequence[Union[str, Language]],
    queries_input: Optional[str],
    config_file: str,
    temp_dir: str,
    tool_cache_dir: str,
    codeql: CodeQL,
    checkout_path: str,
    github_auth: str,
    github_url: str,
    logger: Optional[logging.Logger] = None,
    api_client: Any = None,
) -> Config:
    """
    Load and validate a config file, merging it with defaults and workflow input

    Args:
        languages: Languages to analyze
        queries_input: Comma separated queries from the workflow, or None
        config_file: Path relative to the checkout, or owner/repo/path@ref
        temp_dir: Working directory for this run
        tool_cache_dir: Tool cache directory
        codeql: CodeQL used to resolve queries
        checkout_path: Root of the repository checkout
        github_auth: Token for the GitHub API
        github_url: URL of the GitHub instance
        logger: Logger to report progress to
        api_client: GitHub API client, built from github_auth/github_url if None

    Returns:
        The resolved configuration

    Raises:
        ConfigurationError: If the config file cannot be read or is invalid
        FileDownloadError: If a remote config file cannot be downloaded
    """
    logger = logger or log
    parsed_languages = parse_languages(languages)

    if is_local(config_file):
        # Local config files are relative to the checkout
        config_file = os.path.normpath(os.path.join(checkout_path, config_file))
        parsed = _get_local_config(config_file, checkout_path)
        query_base_dir = os.path.dirname(config_file)
    else:
        parsed = _get_remote_config(config_file, github_auth, github_url, api_client)
        query_base_dir = checkout_path

    if NAME_PROPERTY in parsed:
        name = parsed[NAME_PROPERTY]
        if not isinstance(name, str) or not name:
            raise FieldInvalidError(config_file, NAME_PROPERTY)

    disable_default_queries = False
    if DISABLE_DEFAULT_QUERIES_PROPERTY in parsed:
        if not isinstance(parsed[DISABLE_DEFAULT_QUERIES_PROPERTY], bool):
            raise FieldInvalidError(config_file, DISABLE_DEFAULT_QUERIES_PROPERTY)
        disable_default_queries = parsed[DISABLE_DEFAULT_QUERIES_PROPERTY]

    queries: QueriesByLanguage = {}
    if not disable_default_queries:
        _add_default_queries(codeql, parsed_languages, queries)

    if QUERIES_PROPERTY in parsed:
        if not isinstance(parsed[QUERIES_PROPERTY], list):
            raise FieldInvalidError(config_file, QUERIES_PROPERTY)

        for query in parsed[QUERIES_PROPERTY]:
            if not isinstance(query, dict) or not isinstance(query.get(QUERIES_USES_PROPERTY), str):
                raise QueryUsesInvalidError(config_file)
            resolve_query_uses(
                codeql,
                queries,
                query[QUERIES_USES_PROPERTY],
                config_file,
                checkout_path,
                base_dir=query_base_dir,
                logger=logger,
            )

    # Workflow queries extend whatever the config file asked for
    if queries_input:
        _add_queries_from_workflow(codeql, queries_input, queries, checkout_path, logger)

    paths_ignore = _validate_path_list(parsed, PATHS_IGNORE_PROPERTY, config_file, logger)
    paths = _validate_path_list(parsed, PATHS_PROPERTY, config_file, logger)

    return Config(
        languages=parsed_languages,
        queries=queries,
        paths_ignore=paths_ignore,
        paths=paths,
        original_user_input=_as_json_document(parsed),
        temp_dir=temp_dir,
        tool_cache_dir=tool_cache_dir,
        codeql_cmd=codeql.get_path(),
    )


def save_config(config: Config, logger: Optional[logging.Logger] = None) -> str:
    """
    Persist a config to its temp directory, replacing any earlier one

    Returns:
        Path the config was written to
    """
    logger = logger or log
    config_path = get_path_to_parsed_config_file(config.temp_dir)
    content = json.dumps(config.to_dict(), indent=2, default=str)
    atomic_write_file(config_path, content)
    logger.debug(f"Saved config to {config_path}")
    return config_path


def init_config(
    languages: Sequence[Union[str, Language]],
    queries_input: Optional[str],
    config_file: Optional[str],
    temp_dir: str,
    tool_cache_dir: str,
    codeql: CodeQL,
    checkout_path: str,
    github_auth: str,
    github_url: str,
    logger: Optional[logging.Logger] = None,
    api_client: Any = None,
) -> Config:
    """
    Resolve the configuration for this run and persist it

    Uses the default configuration if no config file is given.

    Raises:
        ConfigurationError: If the inputs or the config file are invalid
        FileDownloadError: If a remote config file cannot be downloaded
    """
    logger = logger or log

    if not config_file:
        logger.debug("No configuration file was provided")
        config = get_default_config(
            languages, queries_input, temp_dir, tool_cache_dir, codeql, checkout_path, logger
        )
    else:
        config = load_config(
            languages,
            queries_input,
            config_file,
            temp_dir,
            tool_cache_dir,
            codeql,
            checkout_path,
            github_auth,
            github_url,
            logger,
            api_client,
        )

    save_config(config, logger)
    return config


def get_config(temp_dir: str, logger: Optional[logging.Logger] = None) -> Optional[Config]:
    """
    Read back the config persisted by init_config

    Returns:
        The config, or None if init_config has not run for this temp directory
    """
    logger = logger or log
    config_path = get_path_to_parsed_config_file(temp_dir)
    if not os.path.exists(config_path):
        return None

    data = json.loads(read_text_file(config_path))
    logger.debug(f"Loaded config: {data}")
    return Config.from_dict(data)
