"""
conftest.py - Pytest fixtures for qlinit tests
"""

import base64
import logging
import os
import tempfile

import pytest

from qlinit.core.codeql import make_codeql
from qlinit.utils.api_client import ApiResponse


class FakeApiClient:
    """Stands in for GitHubApiClient, recording the calls made to it."""

    def __init__(self, contents=None, status=200, languages=None):
        self.contents = contents
        self.status = status
        self.languages = languages or {}
        self.get_contents_calls = []
        self.list_languages_calls = []

    def get_contents(self, owner, repo, path, ref):
        self.get_contents_calls.append((owner, repo, path, ref))
        return ApiResponse(data=self.contents, status=self.status)

    def list_languages(self, owner, repo):
        self.list_languages_calls.append((owner, repo))
        return dict(self.languages)


def encode_content(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def resolve_result(by_language=None, no_declared_language=None, multiple_declared_languages=None):
    return {
        "byLanguage": by_language or {},
        "noDeclaredLanguage": no_declared_language or {},
        "multipleDeclaredLanguages": multiple_declared_languages or {},
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory that is removed after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolved local query paths are compared against this directory
        yield os.path.realpath(tmpdir)


@pytest.fixture
def logger():
    return logging.getLogger("qlinit.tests")


@pytest.fixture
def empty_codeql():
    """CodeQL that resolves everything to nothing."""
    return make_codeql(resolve_queries=lambda queries, extra_search_path: resolve_result())


@pytest.fixture
def recording_codeql():
    """
    CodeQL that resolves each query to itself under javascript.

    The arguments of every call are kept in the `calls` attribute.
    """
    calls = []

    def resolve_queries(queries, extra_search_path):
        calls.append({"queries": list(queries), "extra_search_path": extra_search_path})
        return resolve_result({"javascript": {q: {} for q in queries}})

    codeql = make_codeql(resolve_queries=resolve_queries)
    codeql.calls = calls
    return codeql


@pytest.fixture
def fake_api_client():
    return FakeApiClient
