"""
qlinit - CodeQL analysis initialization

Resolves the languages, queries and path filters for a CodeQL analysis run
from workflow inputs and an optional local or remote config file, and works
out the resource flags to run CodeQL with.
"""

from qlinit.utils.version import __version__, get_version

from .core import (
    Config,
    ConfigurationError,
    CodeQL,
    CodeQLCommand,
    Language,
    QlinitError,
    get_config,
    get_default_config,
    get_languages,
    init_config,
    make_codeql,
    validate_and_sanitise_path,
)
from .utils.api_client import get_file_contents_using_api
from .utils.resources import get_memory_flag, get_threads_flag
from .utils.settings import ActionSettings

__all__ = [
    "__version__",
    "get_version",
    "Config",
    "ConfigurationError",
    "CodeQL",
    "CodeQLCommand",
    "Language",
    "QlinitError",
    "get_config",
    "get_default_config",
    "get_languages",
    "init_config",
    "make_codeql",
    "validate_and_sanitise_path",
    "get_file_contents_using_api",
    "get_memory_flag",
    "get_threads_flag",
    "ActionSettings",
]


def main() -> int | None:
    """Main entry point for the qlinit CLI tool"""
    from typing import Optional, cast

    from .cli import cli

    return cast(Optional[int], cli())
