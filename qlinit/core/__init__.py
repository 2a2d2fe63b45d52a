"""
core package for qlinit

This package contains configuration resolution: languages, query references,
path filters and the config loader itself.
"""

from .errors import (
    ErrorKind,
    QlinitError,
    ConfigurationError,
    UnknownLanguagesError,
    NoLanguagesError,
    ConfigFileOutsideWorkspaceError,
    ConfigFileRepoFormatInvalidError,
    ConfigFileDoesNotExistError,
    ConfigFileDirectoryGivenError,
    ConfigFileFormatInvalidError,
    FieldInvalidError,
    QueryUsesInvalidError,
    LocalPathDoesNotExistError,
    LocalPathOutsideOfRepositoryError,
    QueriesWithoutLanguageError,
    FileDownloadError,
    FileIsADirectoryError,
    FileContentInvalidError,
    InvalidSettingError,
)
from .codeql import CodeQL, CodeQLCommand, CodeQLError, make_codeql
from .languages import Language, RepositoryNwo, get_languages, parse_language, parse_repository_nwo
from .paths import validate_and_sanitise_path
from .queries import QueryReference, QueryReferenceKind, parse_query_uses
from .config import (
    Config,
    get_config,
    get_default_config,
    get_path_to_parsed_config_file,
    init_config,
    load_config,
    save_config,
)

__all__ = [
    "ErrorKind",
    "QlinitError",
    "ConfigurationError",
    "UnknownLanguagesError",
    "NoLanguagesError",
    "ConfigFileOutsideWorkspaceError",
    "ConfigFileRepoFormatInvalidError",
    "ConfigFileDoesNotExistError",
    "ConfigFileDirectoryGivenError",
    "ConfigFileFormatInvalidError",
    "FieldInvalidError",
    "QueryUsesInvalidError",
    "LocalPathDoesNotExistError",
    "LocalPathOutsideOfRepositoryError",
    "QueriesWithoutLanguageError",
    "FileDownloadError",
    "FileIsADirectoryError",
    "FileContentInvalidError",
    "InvalidSettingError",
    "CodeQL",
    "CodeQLCommand",
    "CodeQLError",
    "make_codeql",
    "Language",
    "RepositoryNwo",
    "get_languages",
    "parse_language",
    "parse_repository_nwo",
    "validate_and_sanitise_path",
    "QueryReference",
    "QueryReferenceKind",
    "parse_query_uses",
    "Config",
    "get_config",
    "get_default_config",
    "get_path_to_parsed_config_file",
    "init_config",
    "load_config",
    "save_config",
]
