"""
api_client.py - Minimal GitHub REST API client

This module wraps the two GitHub endpoints qlinit needs: repository
contents (to fetch remote configuration files) and repository languages
(to auto-detect what to analyze).
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote, urlparse

import requests

from ..core.errors import FileContentInvalidError, FileDownloadError, FileIsADirectoryError
from .version import get_user_agent

log = logging.getLogger(__name__)

GITHUB_DOTCOM_URL = "https://github.com"
GITHUB_DOTCOM_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30


@dataclass
class ApiResponse:
    """Status and decoded JSON body of an API call"""

    data: Any
    status: int = 200

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def get_api_url(github_url: str) -> str:
    """
    Work out the REST API root for a GitHub instance

    Args:
        github_url: URL of github.com or a GitHub Enterprise Server instance

    Returns:
        API root URL without trailing slash
    """
    url = github_url.rstrip("/")
    host = urlparse(url).netloc.lower()
    if host in ("github.com", "www.github.com", "api.github.com"):
        return GITHUB_DOTCOM_API_URL
    if url.endswith("/api/v3"):
        return url
    return f"{url}/api/v3"


class GitHubApiClient:
    """GitHub REST client backed by a requests session"""

    def __init__(
        self,
        github_auth: str,
        github_url: str = GITHUB_DOTCOM_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_url = get_api_url(github_url)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": get_user_agent(),
            }
        )
        if github_auth:
            self.session.headers["Authorization"] = f"token {github_auth}"

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> requests.Response:
        url = f"{self.api_url}{path}"
        log.debug(f"GET {url} {params or ''}")
        return self.session.get(url, params=params, timeout=self.timeout)

    def get_contents(self, owner: str, repo: str, path: str, ref: str) -> ApiResponse:
        """
        Fetch a file or directory listing from a repository

        Returns:
            ApiResponse whose data is a dict for a file and a list for a directory
        """
        response = self._get(
            f"/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path.lstrip('/'))}",
            params={"ref": ref},
        )
        try:
            data = response.json()
        except ValueError:
            data = None
        return ApiResponse(data=data, status=response.status_code)

    def list_languages(self, owner: str, repo: str) -> Dict[str, int]:
        """
        List the languages GitHub detected in a repository

        Returns:
            Mapping of language name to bytes of code, most used first

        Raises:
            requests.HTTPError: If the request does not succeed
        """
        response = self._get(f"/repos/{quote(owner)}/{quote(repo)}/languages")
        response.raise_for_status()
        return dict(response.json())


def get_api_client(github_auth: str, github_url: str) -> GitHubApiClient:
    return GitHubApiClient(github_auth, github_url)


def decode_content(content: str) -> str:
    """
    Decode the base64 content of a contents API response

    Raises:
        ValueError: If the content is not base64 encoded UTF-8 text
    """
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Could not decode file content: {e}") from e


def get_file_contents_using_api(
    owner: str,
    repo: str,
    path: str,
    ref: str,
    github_auth: str = "",
    github_url: str = GITHUB_DOTCOM_URL,
    api_client: Any = None,
) -> str:
    """
    Download a single file from a repository

    Args:
        owner: Repository owner
        repo: Repository name
        path: Path of the file in the repository
        ref: Branch, tag or commit to read from
        github_auth: Token for the GitHub API
        github_url: URL of the GitHub instance
        api_client: Client to use instead of building one from github_auth/github_url

    Returns:
        Decoded file contents

    Raises:
        FileDownloadError: If the request fails
        FileIsADirectoryError: If the path refers to a directory
        FileContentInvalidError: If the response has no decodable file content
    """
    url = f"{owner}/{repo}/{path}@{ref}"
    client = api_client or get_api_client(github_auth, github_url)

    try:
        response = client.get_contents(owner, repo, path, ref)
    except requests.RequestException as e:
        raise FileDownloadError(url) from e

    if not response.ok:
        raise FileDownloadError(url)

    # Directories are returned as a list of entries
    if isinstance(response.data, list):
        raise FileIsADirectoryError(url)

    if not isinstance(response.data, dict) or response.data.get("content") is None:
        raise FileContentInvalidError(url)

    try:
        return decode_content(response.data["content"])
    except ValueError as e:
        raise FileContentInvalidError(url) from e
