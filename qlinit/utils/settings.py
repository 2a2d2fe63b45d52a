"""
settings.py - Environment-derived settings

Everything qlinit takes from the environment is read once into an
ActionSettings object, which is then passed to whatever needs it.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

from ..core.errors import InvalidSettingError

LOCAL_RUN_ENV = "CODEQL_LOCAL_RUN"
EXTRA_OPTIONS_ENV = "CODEQL_ACTION_EXTRA_OPTIONS"
UNKNOWN_JOB = "UNKNOWN-JOB"
DEFAULT_GITHUB_URL = "https://github.com"


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read an action input

    Inputs are passed as INPUT_<NAME> variables, upper-cased with spaces
    replaced by underscores.
    """
    environ = os.environ if environ is None else environ
    return environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()


def get_required_env_param(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read an environment variable that must be set

    Raises:
        InvalidSettingError: If the variable is unset or empty
    """
    environ = os.environ if environ is None else environ
    value = environ.get(name, "")
    if not value:
        raise InvalidSettingError(name, value, f"{name} must be set.")
    return value


def is_local_run(environ: Optional[Mapping[str, str]] = None) -> bool:
    environ = os.environ if environ is None else environ
    value = environ.get(LOCAL_RUN_ENV, "")
    return bool(value) and value not in ("false", "0")


def prepare_local_run_environment(environ: Optional[MutableMapping[str, str]] = None) -> None:
    """
    Fill in variables the workflow platform would normally provide

    Only has an effect in local-run mode.
    """
    environ = os.environ if environ is None else environ
    if not is_local_run(environ):
        return

    if not environ.get("GITHUB_JOB"):
        environ["GITHUB_JOB"] = UNKNOWN_JOB


def get_extra_options_env_param(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Parse the extra CodeQL options passed through the environment

    Returns:
        Parsed options, or an empty dictionary if none were given

    Raises:
        InvalidSettingError: If the variable does not hold a JSON object
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(EXTRA_OPTIONS_ENV, "")
    if not raw:
        return {}

    try:
        options = json.loads(raw)
    except ValueError as e:
        raise InvalidSettingError(EXTRA_OPTIONS_ENV, raw, f"{EXTRA_OPTIONS_ENV} is not valid JSON: {e}")

    if not isinstance(options, dict):
        raise InvalidSettingError(EXTRA_OPTIONS_ENV, raw, f"{EXTRA_OPTIONS_ENV} must be a JSON object")
    return options


def _as_extra_options(options: Any, path_info: List[str]) -> List[str]:
    if options is None:
        return []

    location = ".".join(path_info)
    if not isinstance(options, list):
        raise InvalidSettingError(
            "extra options", json.dumps(options), f"The extra options for '{location}' are not in an array."
        )

    result = []
    for option in options:
        if isinstance(option, bool) or not isinstance(option, (str, int, float)):
            raise InvalidSettingError(
                "extra options",
                json.dumps(options),
                f"The extra options for '{location}' are not all strings or numbers.",
            )
        result.append(str(option))
    return result


def get_extra_options(options: Any, paths: List[str], path_info: Optional[List[str]] = None) -> List[str]:
    """
    Collect the extra options for a CodeQL subcommand

    Options under "*" apply at every level, so for the path
    ["database", "init"] the result is options["*"], then
    options["database"]["*"], then options["database"]["init"].

    Args:
        options: Parsed extra options
        paths: Subcommand path, e.g. ["database", "init"]

    Returns:
        Option strings, most general first

    Raises:
        InvalidSettingError: If an entry is not a list of strings or numbers
    """
    path_info = path_info or []
    node = options if isinstance(options, dict) else {}

    general = _as_extra_options(node.get("*"), path_info + ["*"])
    if not paths:
        specific = _as_extra_options(options, path_info)
    else:
        specific = get_extra_options(node.get(paths[0]), paths[1:], path_info + [paths[0]])
    return general + specific


@dataclass(frozen=True)
class ActionSettings:
    """Inputs and environment for one qlinit run"""

    languages: str = ""
    queries: str = ""
    config_file: str = ""
    ram: str = ""
    threads: str = ""
    token: str = ""
    github_url: str = DEFAULT_GITHUB_URL
    repository: str = ""
    workspace: str = ""
    temp_dir: str = ""
    tool_cache_dir: str = ""
    extra_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionSettings":
        """
        Read settings from the environment

        Raises:
            InvalidSettingError: If the extra options are not valid JSON
        """
        environ = os.environ if environ is None else environ
        return cls(
            languages=get_input("languages", environ),
            queries=get_input("queries", environ),
            config_file=get_input("config-file", environ),
            ram=get_input("ram", environ),
            threads=get_input("threads", environ),
            token=get_input("token", environ),
            github_url=environ.get("GITHUB_SERVER_URL") or DEFAULT_GITHUB_URL,
            repository=environ.get("GITHUB_REPOSITORY", ""),
            workspace=environ.get("GITHUB_WORKSPACE", ""),
            temp_dir=environ.get("RUNNER_TEMP", ""),
            tool_cache_dir=environ.get("RUNNER_TOOL_CACHE", ""),
            extra_options=get_extra_options_env_param(environ),
        )
