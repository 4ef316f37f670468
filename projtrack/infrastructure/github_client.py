"""Synchronous client for the GitHub REST API.

Only the read endpoints needed to mirror repository activity are exposed:
commits of a repository, its pull requests and the repositories of the
authenticated user. Every request is bounded by the configured timeout and
any transport error or non-2xx answer raises :class:`GitHubAPIError`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx

from projtrack.config import Settings
from projtrack.utils import ensure_utc

logger = logging.getLogger(__name__)

_REPOSITORY_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")
_USER_AGENT = "projtrack/0.1.0"


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub API cannot be reached or answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class RepositoryCoordinates:
    """Owner and name of a GitHub repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_repository_url(url: str) -> RepositoryCoordinates | None:
    """Extract owner and repository name from a ``github.com`` URL.

    A trailing ``.git`` is removed from the repository name. Returns ``None``
    when the URL does not point at GitHub.
    """

    match = _REPOSITORY_URL_PATTERN.search(url or "")
    if not match:
        return None
    owner, name = match.group(1), match.group(2)
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not owner or not name:
        return None
    return RepositoryCoordinates(owner=owner, name=name)


class GitHubClient:
    """Thin wrapper around :class:`httpx.Client` authenticated with a user token."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        page_size: int = 30,
    ) -> None:
        if not token:
            raise ValueError("A GitHub access token is required")

        self._page_size = page_size
        self._client = httpx.Client(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": _USER_AGENT,
            },
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, token: str, settings: Settings) -> "GitHubClient":
        return cls(
            token,
            base_url=settings.github_api_url,
            timeout=settings.github_request_timeout_seconds,
            page_size=settings.github_page_size,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def list_commits(
        self, repository: RepositoryCoordinates, *, since: datetime | None = None
    ) -> list[dict[str, Any]]:
        """Return the most recent commits of the default branch."""

        params: dict[str, Any] = {"per_page": self._page_size}
        if since is not None:
            params["since"] = ensure_utc(since).strftime("%Y-%m-%dT%H:%M:%SZ")
        return self._get_list(f"/repos/{repository.full_name}/commits", params=params)

    def list_pull_requests(
        self, repository: RepositoryCoordinates, *, state: str = "all"
    ) -> list[dict[str, Any]]:
        """Return pull requests in ``state``, most recently updated first.

        The endpoint has no time filter; callers filter by creation date.
        """

        params = {"state": state, "sort": "updated", "per_page": self._page_size}
        return self._get_list(f"/repos/{repository.full_name}/pulls", params=params)

    def list_user_repositories(self) -> list[dict[str, Any]]:
        """Return repositories visible to the token owner."""

        params = {"sort": "updated", "per_page": 100}
        return self._get_list("/user/repos", params=params)

    def _get_list(self, path: str, *, params: dict[str, Any]) -> list[dict[str, Any]]:
        data = self._request("GET", path, params=params)
        if not isinstance(data, list):
            raise GitHubAPIError(f"Unexpected response shape from {path}")
        return [item for item in data if isinstance(item, dict)]

    def _request(
        self, method: str, path: str, *, params: dict[str, Any] | None = None
    ) -> Any:
        try:
            response = self._client.request(method, path, params=params)
        except httpx.TimeoutException as exc:
            logger.error("GitHub API request %s %s timed out", method, path)
            raise GitHubAPIError(f"GitHub API request timed out: {path}") from exc
        except httpx.HTTPError as exc:
            logger.error("GitHub API request %s %s failed: %s", method, path, exc)
            raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc

        if response.status_code >= 400:
            logger.error(
                "GitHub API responded with status %s for %s %s",
                response.status_code,
                method,
                path,
            )
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json() if response.content else None
        except ValueError as exc:
            raise GitHubAPIError(f"GitHub API returned invalid JSON for {path}") from exc


__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "RepositoryCoordinates",
    "parse_repository_url",
]
