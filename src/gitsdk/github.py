"""
GitHub API access

Thin wrapper around `requests` for the few GitHub endpoints this tool needs:
branch lookup, release lookup by tag, and streaming downloads of release
assets.
"""

import importlib.metadata
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests

from gitsdk.constants import (
    APP_NAME,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    GITHUB_API_BASE,
    GITHUB_API_TIMEOUT,
    GITHUB_API_VERSION,
)
from gitsdk.exceptions import (
    APIError,
    AuthenticationError,
    DownloadHTTPError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
)
from gitsdk.log_utils import logger

_USER_AGENT_CACHE: Optional[str] = None


def get_user_agent() -> str:
    """
    Return the User-Agent string used for HTTP requests.

    Returns:
        The string `git-sdk-fetch/{version}`, with `unknown` as version when the
        package metadata is unavailable.
    """
    global _USER_AGENT_CACHE

    if _USER_AGENT_CACHE is None:
        try:
            app_version = importlib.metadata.version(APP_NAME)
        except importlib.metadata.PackageNotFoundError:
            app_version = "unknown"
        _USER_AGENT_CACHE = f"{APP_NAME}/{app_version}"

    return _USER_AGENT_CACHE


def get_effective_github_token(
    github_token: Optional[str], allow_env_token: bool = True
) -> Optional[str]:
    """
    Determine the GitHub token to use, preferring the explicit argument over the environment.

    Parameters:
        github_token (Optional[str]): Explicit token; surrounding whitespace is ignored.
        allow_env_token (bool): Fall back to the `GITHUB_TOKEN` environment variable.

    Returns:
        Optional[str]: The chosen token, or `None` if no token is available.
    """
    candidate = (github_token or "").strip()
    if candidate:
        return candidate
    if not allow_env_token:
        return None
    env_token = os.environ.get("GITHUB_TOKEN")
    return env_token.strip() if env_token and env_token.strip() else None


@dataclass(frozen=True)
class ReleaseAsset:
    """A downloadable file attached to a GitHub release."""

    name: str
    """The filename of the asset"""

    updated_at: str
    """ISO 8601 timestamp of the last upload of this asset"""

    browser_download_url: str
    """Direct download URL"""

    size: Optional[int] = None

    content_type: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ReleaseAsset":
        return cls(
            name=data["name"],
            updated_at=str(data["updated_at"]),
            browser_download_url=data["browser_download_url"],
            size=data.get("size"),
            content_type=data.get("content_type"),
        )


@dataclass
class ApiResponse:
    """Status and decoded payload of one API call."""

    status: int
    data: Any = None
    assets: List[ReleaseAsset] = field(default_factory=list)


class GitHubClient:
    """
    Minimal GitHub REST client.

    Usage:
        client = GitHubClient(github_token="...")
        sha = client.get_branch("git-for-windows", "git-sdk-64", "main")
    """

    def __init__(
        self,
        github_token: Optional[str] = None,
        allow_env_token: bool = True,
        timeout: int = GITHUB_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.token = get_effective_github_token(github_token, allow_env_token)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": get_user_agent(),
            }
        )
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"
            logger.debug("Using GitHub token for API authentication")
        else:
            logger.debug("No GitHub token available - using unauthenticated API requests")

    def _get(self, url: str) -> requests.Response:
        logger.debug(f"Making GitHub API request: {url}")
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise APIError(
                f"GitHub API request failed: {url}", endpoint=url, details=str(e)
            ) from e

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str, what: str) -> None:
        status = response.status_code
        if response.ok:
            return
        if status == 401:
            raise AuthenticationError(
                f"GitHub API authentication failed for {what}",
                endpoint=url,
                status_code=status,
            )
        if status == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            raise RateLimitError(
                "GitHub API rate limit exceeded",
                endpoint=url,
                status_code=status,
                details=f"resets at {response.headers.get('X-RateLimit-Reset', 'unknown')}",
            )
        if status == 404:
            raise ResourceNotFoundError(
                f"{what} not found", endpoint=url, status_code=status
            )
        raise APIError(
            f"GitHub API request for {what} failed: {status}",
            endpoint=url,
            status_code=status,
            details=response.reason,
        )

    def get_branch(self, owner: str, repo: str, branch: str) -> str:
        """
        Return the tip commit SHA of `branch` in `owner/repo`.

        Raises:
            APIError: The branch cannot be resolved.
        """
        url = f"{GITHUB_API_BASE}/{owner}/{repo}/branches/{branch}"
        response = self._get(url)
        self._raise_for_status(response, url, f"branch {branch} of {owner}/{repo}")
        try:
            return response.json()["commit"]["sha"]
        except (ValueError, KeyError, TypeError) as e:
            raise APIError(
                f"Unexpected branch data for {owner}/{repo}",
                endpoint=url,
                status_code=response.status_code,
                details=str(e),
            ) from e

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> ApiResponse:
        """
        Look up the release tagged `tag`.

        Non-200 statuses are returned to the caller rather than raised, the
        caller decides how to report them. Transport failures still raise
        `APIError`.
        """
        url = f"{GITHUB_API_BASE}/{owner}/{repo}/releases/tags/{tag}"
        response = self._get(url)
        if response.status_code != 200:
            return ApiResponse(status=response.status_code)
        try:
            data = response.json()
            assets = [ReleaseAsset.from_api(a) for a in data.get("assets", [])]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise APIError(
                f"Unexpected release data for {owner}/{repo}",
                endpoint=url,
                status_code=response.status_code,
                details=str(e),
            ) from e
        return ApiResponse(status=response.status_code, data=data, assets=assets)


def download_file(
    url: str,
    destination: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = DEFAULT_REQUEST_TIMEOUT,
) -> None:
    """
    Stream `url` into `destination`.

    Only the given headers (plus User-Agent) are sent, so no API credentials
    leak into asset downloads. The function returns once the file has been
    flushed and closed.

    Raises:
        DownloadHTTPError: The server answered with a non-OK status.
        NetworkError: The transfer failed below the HTTP layer.
    """
    session = requests.Session()
    response = None
    request_headers = {"User-Agent": get_user_agent(), **(headers or {})}
    try:
        response = session.get(url, headers=request_headers, stream=True, timeout=timeout)
        logger.debug(f"Received HTTP response status code: {response.status_code} for URL: {url}")
        if not response.ok:
            raise DownloadHTTPError(
                f"Failed to fetch {url}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except requests.RequestException as e:
        raise NetworkError(f"Failed to fetch {url}", url=url, details=str(e)) from e
    finally:
        if response is not None:
            response.close()
        session.close()
