"""
errors.py - Error taxonomy for qlinit

Every failure raised while resolving configuration or computing tool flags is a
QlinitError carrying an ErrorKind and the structured context it was raised
with. Messages are rendered from that context on demand.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

NAME_PROPERTY = "name"
DISABLE_DEFAULT_QUERIES_PROPERTY = "disable-default-queries"
QUERIES_PROPERTY = "queries"
QUERIES_USES_PROPERTY = "uses"
PATHS_IGNORE_PROPERTY = "paths-ignore"
PATHS_PROPERTY = "paths"

REMOTE_FORMAT_HINT = "<owner>/<repository>/<file-path>@<ref>"


class ErrorKind(Enum):
    """Enumeration of error kinds."""

    UNKNOWN_LANGUAGES = "UnknownLanguages"
    NO_LANGUAGES = "NoLanguages"
    CONFIG_FILE_OUTSIDE_WORKSPACE = "ConfigFileOutsideWorkspace"
    CONFIG_FILE_REPO_FORMAT_INVALID = "ConfigFileRepoFormatInvalid"
    CONFIG_FILE_DOES_NOT_EXIST = "ConfigFileDoesNotExist"
    CONFIG_FILE_DIRECTORY_GIVEN = "ConfigFileDirectoryGiven"
    CONFIG_FILE_FORMAT_INVALID = "ConfigFileFormatInvalid"
    FIELD_INVALID = "FieldInvalid"
    QUERY_USES_INVALID = "QueryUsesInvalid"
    LOCAL_PATH_DOES_NOT_EXIST = "LocalPathDoesNotExist"
    LOCAL_PATH_OUTSIDE_OF_REPOSITORY = "LocalPathOutsideOfRepository"
    QUERIES_WITHOUT_LANGUAGE = "QueriesWithoutLanguage"
    FILE_DOWNLOAD = "FileDownloadError"
    FILE_IS_A_DIRECTORY = "FileIsADirectoryError"
    FILE_CONTENT_INVALID = "FileContentInvalidError"
    INVALID_SETTING = "InvalidSetting"


# Reasons used when a config file field has the wrong type
FIELD_REASONS = {
    NAME_PROPERTY: "must be a non-empty string",
    DISABLE_DEFAULT_QUERIES_PROPERTY: "must be a boolean",
    QUERIES_PROPERTY: "must be an array",
    PATHS_IGNORE_PROPERTY: "must be an array of non-empty strings",
    PATHS_PROPERTY: "must be an array of non-empty strings",
}


def _property_error(config_file: Optional[str], prop: str, error: str) -> str:
    if config_file is None:
        return f'The workflow property "{prop}" is invalid: {error}'
    return f'The configuration file "{config_file}" is invalid: property "{prop}" {error}'


def _query_uses_message(context: Dict[str, Any]) -> str:
    error = (
        "must be a built-in suite, a relative path, "
        'or be of the form "owner/repo[/path]@ref"'
    )
    if context.get("query_uses") is not None:
        error += f"\n Found: {context['query_uses']}"
    return _property_error(
        context.get("config_file"), f"{QUERIES_PROPERTY}.{QUERIES_USES_PROPERTY}", error
    )


def _local_path_message(context: Dict[str, Any], problem: str) -> str:
    return _property_error(
        context.get("config_file"),
        f"{QUERIES_PROPERTY}.{QUERIES_USES_PROPERTY}",
        f'is invalid as the local path "{context["local_path"]}" {problem}',
    )


def render_message(kind: ErrorKind, context: Dict[str, Any]) -> str:
    """
    Render a human readable message for an error kind

    Args:
        kind: Kind of error
        context: Structured context the error was raised with

    Returns:
        Message identifying the offending file, field and value
    """
    config_file = context.get("config_file")

    if kind is ErrorKind.UNKNOWN_LANGUAGES:
        return "Did not recognise the following languages: " + ", ".join(context["languages"])
    if kind is ErrorKind.NO_LANGUAGES:
        return (
            "Did not detect any languages to analyze. Please update input in workflow "
            "or check that GitHub detects the correct languages in your repository."
        )
    if kind is ErrorKind.CONFIG_FILE_OUTSIDE_WORKSPACE:
        return f'The configuration file "{config_file}" is outside of the workspace'
    if kind is ErrorKind.CONFIG_FILE_REPO_FORMAT_INVALID:
        return (
            f'The configuration file "{config_file}" is not a supported remote file reference. '
            f"Expected format {REMOTE_FORMAT_HINT}"
        )
    if kind is ErrorKind.CONFIG_FILE_DOES_NOT_EXIST:
        return f'The configuration file "{config_file}" does not exist'
    if kind is ErrorKind.CONFIG_FILE_DIRECTORY_GIVEN:
        return f'The configuration file "{config_file}" looks like a directory, not a file'
    if kind is ErrorKind.CONFIG_FILE_FORMAT_INVALID:
        return f'The configuration file "{config_file}" could not be read'
    if kind is ErrorKind.FIELD_INVALID:
        return _property_error(config_file, context["field"], context["reason"])
    if kind is ErrorKind.QUERY_USES_INVALID:
        return _query_uses_message(context)
    if kind is ErrorKind.LOCAL_PATH_DOES_NOT_EXIST:
        return _local_path_message(context, "does not exist in the repository")
    if kind is ErrorKind.LOCAL_PATH_OUTSIDE_OF_REPOSITORY:
        return _local_path_message(context, "is outside of the repository")
    if kind is ErrorKind.QUERIES_WITHOUT_LANGUAGE:
        return (
            f"The following queries {context['problem']}. "
            "Their qlpack.yml files are either missing or invalid.\n"
            + "\n".join(context["queries"])
        )
    if kind is ErrorKind.FILE_DOWNLOAD:
        return f"Failed to download file {context['url']}"
    if kind is ErrorKind.FILE_IS_A_DIRECTORY:
        return f"The file {context['url']} is a directory"
    if kind is ErrorKind.FILE_CONTENT_INVALID:
        return f"The file {context['url']} has no readable content"
    if kind is ErrorKind.INVALID_SETTING:
        return f'Invalid {context["setting"]} setting "{context["value"]}", specified. {context["reason"]}'.rstrip()

    raise ValueError(f"Unknown error kind: {kind}")


class QlinitError(Exception):
    """Base class for all qlinit errors"""

    kind: ErrorKind

    def __init__(self, **context: Any) -> None:
        self.context = context
        super().__init__(render_message(self.kind, context))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QlinitError):
            return NotImplemented
        return self.kind is other.kind and self.context == other.context

    def __hash__(self) -> int:
        return hash((self.kind, str(self)))


class ConfigurationError(QlinitError):
    """Raised when the analysis configuration cannot be resolved"""


class UnknownLanguagesError(ConfigurationError):
    kind = ErrorKind.UNKNOWN_LANGUAGES

    def __init__(self, languages: List[str]) -> None:
        super().__init__(languages=list(languages))


class NoLanguagesError(ConfigurationError):
    kind = ErrorKind.NO_LANGUAGES

    def __init__(self) -> None:
        super().__init__()


class ConfigFileOutsideWorkspaceError(ConfigurationError):
    kind = ErrorKind.CONFIG_FILE_OUTSIDE_WORKSPACE

    def __init__(self, config_file: str) -> None:
        super().__init__(config_file=config_file)


class ConfigFileRepoFormatInvalidError(ConfigurationError):
    kind = ErrorKind.CONFIG_FILE_REPO_FORMAT_INVALID

    def __init__(self, config_file: str) -> None:
        super().__init__(config_file=config_file)


class ConfigFileDoesNotExistError(ConfigurationError):
    kind = ErrorKind.CONFIG_FILE_DOES_NOT_EXIST

    def __init__(self, config_file: str) -> None:
        super().__init__(config_file=config_file)


class ConfigFileDirectoryGivenError(ConfigurationError):
    kind = ErrorKind.CONFIG_FILE_DIRECTORY_GIVEN

    def __init__(self, config_file: str) -> None:
        super().__init__(config_file=config_file)


class ConfigFileFormatInvalidError(ConfigurationError):
    kind = ErrorKind.CONFIG_FILE_FORMAT_INVALID

    def __init__(self, config_file: str) -> None:
        super().__init__(config_file=config_file)


class FieldInvalidError(ConfigurationError):
    """A config file field has the wrong type or an unusable value"""

    kind = ErrorKind.FIELD_INVALID

    def __init__(self, config_file: Optional[str], field: str, reason: Optional[str] = None) -> None:
        if reason is None:
            reason = FIELD_REASONS.get(field, "is invalid")
        super().__init__(config_file=config_file, field=field, reason=reason)

    @property
    def field(self) -> str:
        return str(self.context["field"])


class QueryUsesInvalidError(ConfigurationError):
    kind = ErrorKind.QUERY_USES_INVALID

    def __init__(self, config_file: Optional[str], query_uses: Optional[str] = None) -> None:
        super().__init__(config_file=config_file, query_uses=query_uses)


class LocalPathDoesNotExistError(ConfigurationError):
    kind = ErrorKind.LOCAL_PATH_DOES_NOT_EXIST

    def __init__(self, config_file: Optional[str], local_path: str) -> None:
        super().__init__(config_file=config_file, local_path=local_path)


class LocalPathOutsideOfRepositoryError(ConfigurationError):
    kind = ErrorKind.LOCAL_PATH_OUTSIDE_OF_REPOSITORY

    def __init__(self, config_file: Optional[str], local_path: str) -> None:
        super().__init__(config_file=config_file, local_path=local_path)


class QueriesWithoutLanguageError(ConfigurationError):
    """The analysis tool resolved queries that do not map onto one language"""

    kind = ErrorKind.QUERIES_WITHOUT_LANGUAGE

    def __init__(self, queries: List[str], problem: str = "do not declare a language") -> None:
        super().__init__(queries=list(queries), problem=problem)


class FileDownloadError(QlinitError):
    kind = ErrorKind.FILE_DOWNLOAD

    def __init__(self, url: str) -> None:
        super().__init__(url=url)


class FileIsADirectoryError(QlinitError):
    kind = ErrorKind.FILE_IS_A_DIRECTORY

    def __init__(self, url: str) -> None:
        super().__init__(url=url)


class FileContentInvalidError(QlinitError):
    """The API returned a file without decodable content"""

    kind = ErrorKind.FILE_CONTENT_INVALID

    def __init__(self, url: str) -> None:
        super().__init__(url=url)


class InvalidSettingError(QlinitError):
    """An environment-derived setting could not be interpreted"""

    kind = ErrorKind.INVALID_SETTING

    def __init__(self, setting: str, value: Any, reason: str = "") -> None:
        super().__init__(setting=setting, value=value, reason=reason)
