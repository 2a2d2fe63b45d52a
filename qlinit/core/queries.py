"""
queries.py - Parsing and resolution of query references

A query reference is the value of a `uses` entry in a config file or one
comma separated item of the workflow `queries` input. It is one of:

- a local path starting with "./", relative to the referencing config file
- a bare suite name such as "security-extended"
- a remote reference of the form owner/repo[/path]@ref

References are handed to CodeQL, and the query files it resolves them to are
accumulated per language.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..utils.file_handler import is_path_within
from .codeql import CodeQL
from .errors import (
    LocalPathDoesNotExistError,
    LocalPathOutsideOfRepositoryError,
    QueriesWithoutLanguageError,
    QueryUsesInvalidError,
)

log = logging.getLogger(__name__)

# Resolved query paths keyed by language name
QueriesByLanguage = Dict[str, List[str]]


class QueryReferenceKind(Enum):
    """Enumeration of query reference forms."""

    LOCAL = "local"
    SUITE = "suite"
    REMOTE = "remote"


@dataclass(frozen=True)
class QueryReference:
    """A parsed query reference"""

    kind: QueryReferenceKind
    raw: str
    path: Optional[str] = None
    suite: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    subpath: Optional[str] = None
    ref: Optional[str] = None

    @property
    def target(self) -> str:
        """The string handed to CodeQL for this reference"""
        if self.kind is QueryReferenceKind.LOCAL:
            return str(self.path)
        if self.kind is QueryReferenceKind.SUITE:
            return str(self.suite)
        nwo = f"{self.owner}/{self.repo}"
        if self.subpath:
            nwo += f"/{self.subpath}"
        return f"{nwo}@{self.ref}"


def _parse_local(
    query_uses: str, config_file: Optional[str], checkout_path: str, base_dir: str
) -> QueryReference:
    local_path = query_uses[2:]
    absolute_path = os.path.realpath(os.path.join(base_dir, local_path))

    # Neither ".." nor symlinks may lead out of the checkout
    if not is_path_within(checkout_path, absolute_path, resolve_links=True):
        raise LocalPathOutsideOfRepositoryError(config_file, local_path)

    if not os.path.exists(absolute_path):
        raise LocalPathDoesNotExistError(config_file, local_path)

    return QueryReference(kind=QueryReferenceKind.LOCAL, raw=query_uses, path=absolute_path)


def _parse_remote(query_uses: str, config_file: Optional[str]) -> QueryReference:
    tok = query_uses.split("@")
    if len(tok) != 2:
        raise QueryUsesInvalidError(config_file, query_uses)
    location, ref = tok
    if "://" in location:
        raise QueryUsesInvalidError(config_file, query_uses)

    # owner/repo followed by an optional path inside the repository
    parts = location.split("/")
    if len(parts) < 2:
        raise QueryUsesInvalidError(config_file, query_uses)
    owner, repo = parts[0].strip(), parts[1].strip()
    if not owner or not repo or not ref.strip():
        raise QueryUsesInvalidError(config_file, query_uses)

    subpath = "/".join(p for p in parts[2:] if p) or None
    return QueryReference(
        kind=QueryReferenceKind.REMOTE,
        raw=query_uses,
        owner=owner,
        repo=repo,
        subpath=subpath,
        ref=ref.strip(),
    )


def parse_query_uses(
    query_uses: Optional[str],
    config_file: Optional[str],
    checkout_path: str,
    base_dir: Optional[str] = None,
) -> QueryReference:
    """
    Parse a query reference

    Args:
        query_uses: Raw reference
        config_file: Config file the reference came from, or None for workflow input
        checkout_path: Root of the repository checkout
        base_dir: Directory local paths are relative to, the checkout root if None

    Returns:
        Parsed reference

    Raises:
        QueryUsesInvalidError: If the reference is empty or malformed
        LocalPathOutsideOfRepositoryError: If a local path leaves the checkout
        LocalPathDoesNotExistError: If a local path does not exist
    """
    if query_uses is None or not query_uses.strip():
        raise QueryUsesInvalidError(config_file, None)
    query_uses = query_uses.strip()

    if query_uses.startswith("./"):
        return _parse_local(query_uses, config_file, checkout_path, base_dir or checkout_path)

    if "/" not in query_uses and "@" not in query_uses:
        return QueryReference(kind=QueryReferenceKind.SUITE, raw=query_uses, suite=query_uses)

    return _parse_remote(query_uses, config_file)


def run_resolve_queries(
    codeql: CodeQL,
    result_map: QueriesByLanguage,
    to_resolve: Sequence[str],
    extra_search_path: Optional[str],
) -> None:
    """
    Resolve queries with CodeQL and append the results to result_map

    Raises:
        QueriesWithoutLanguageError: If any resolved query has no single language
    """
    resolved = codeql.resolve_queries(list(to_resolve), extra_search_path)

    for language, queries in resolved.get("byLanguage", {}).items():
        result_map.setdefault(language, []).extend(queries.keys())

    no_language = list(resolved.get("noDeclaredLanguage", {}))
    if no_language:
        raise QueriesWithoutLanguageError(no_language)

    multiple_languages = list(resolved.get("multipleDeclaredLanguages", {}))
    if multiple_languages:
        raise QueriesWithoutLanguageError(multiple_languages, problem="declare multiple languages")


def resolve_query_uses(
    codeql: CodeQL,
    result_map: QueriesByLanguage,
    query_uses: Optional[str],
    config_file: Optional[str],
    checkout_path: str,
    base_dir: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> QueryReference:
    """
    Parse a query reference and add the queries it resolves to

    Local paths are resolved with the checkout as an extra search path so
    that packs inside the repository are found.

    Returns:
        The parsed reference
    """
    logger = logger or log
    reference = parse_query_uses(query_uses, config_file, checkout_path, base_dir)
    logger.debug(f"Resolving {reference.kind.value} query reference {reference.target}")

    extra_search_path = checkout_path if reference.kind is QueryReferenceKind.LOCAL else None
    run_resolve_queries(codeql, result_map, [reference.target], extra_search_path)
    return reference
