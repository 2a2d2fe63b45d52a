"""
codeql.py - Interface to the CodeQL command-line tool

The configuration loader never talks to the CodeQL binary directly. It is
handed a CodeQL object, either a CodeQLCommand wrapping the real executable
or a test double built with make_codeql().
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

log = logging.getLogger(__name__)

# Shape of `codeql resolve queries --format=bylanguage` output
ResolveQueriesOutput = Dict[str, Dict[str, Dict[str, Any]]]

DUMMY_CODEQL_PATH = "/tmp/dummy-path"


class CodeQLError(Exception):
    """Exception raised when the CodeQL binary fails or returns garbage"""

    pass


class CodeQL(ABC):
    """Operations the configuration loader needs from CodeQL"""

    @abstractmethod
    def get_path(self) -> str:
        """Path to the CodeQL executable"""

    @abstractmethod
    def resolve_queries(
        self, queries: Sequence[str], extra_search_path: Optional[str]
    ) -> ResolveQueriesOutput:
        """
        Resolve query suites, directories and files to concrete queries

        Args:
            queries: Suite names, paths or remote references to resolve
            extra_search_path: Extra directory for CodeQL to search for packs

        Returns:
            Mapping with "byLanguage", "noDeclaredLanguage" and
            "multipleDeclaredLanguages" entries
        """


class CodeQLCommand(CodeQL):
    """CodeQL backed by an executable on disk"""

    def __init__(self, cmd: str) -> None:
        self.cmd = cmd

    def get_path(self) -> str:
        return self.cmd

    def resolve_queries(
        self, queries: Sequence[str], extra_search_path: Optional[str]
    ) -> ResolveQueriesOutput:
        args: List[str] = [self.cmd, "resolve", "queries", *queries, "--format=bylanguage"]
        if extra_search_path is not None:
            args.extend(["--search-path", extra_search_path])

        log.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(args, capture_output=True, text=True, check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            stderr = getattr(e, "stderr", None) or ""
            raise CodeQLError(f"Failed to run {self.cmd} resolve queries: {e}\n{stderr}") from e

        try:
            output = json.loads(result.stdout)
        except ValueError as e:
            raise CodeQLError(f"Unexpected output from {self.cmd} resolve queries: {e}") from e

        if not isinstance(output, dict):
            raise CodeQLError(f"Unexpected output from {self.cmd} resolve queries")
        return output


class _PartialCodeQL(CodeQL):
    def __init__(self, methods: Dict[str, Callable[..., Any]]) -> None:
        self._methods = methods

    def _call(self, name: str, *args: Any) -> Any:
        if name not in self._methods:
            raise NotImplementedError(f"CodeQL.{name} is not implemented by this test double")
        return self._methods[name](*args)

    def get_path(self) -> str:
        if "get_path" not in self._methods:
            return DUMMY_CODEQL_PATH
        return str(self._call("get_path"))

    def resolve_queries(
        self, queries: Sequence[str], extra_search_path: Optional[str]
    ) -> ResolveQueriesOutput:
        return self._call("resolve_queries", list(queries), extra_search_path)  # type: ignore[no-any-return]


def make_codeql(**methods: Callable[..., Any]) -> CodeQL:
    """
    Build a CodeQL from a partial set of functions

    Methods that are not supplied raise NotImplementedError when called,
    except get_path which returns a fixed dummy path.

    Example:
        make_codeql(resolve_queries=lambda queries, extra_search_path: {...})
    """
    unknown = set(methods) - {"get_path", "resolve_queries"}
    if unknown:
        raise TypeError(f"Unknown CodeQL methods: {', '.join(sorted(unknown))}")
    return _PartialCodeQL(methods)
