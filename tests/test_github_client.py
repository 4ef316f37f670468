"""Tests for the GitHub REST client."""

from __future__ import annotations

import re
from datetime import datetime, timezone

import httpx
import pytest
from pytest_httpx import HTTPXMock

from projtrack.infrastructure.github_client import (
    GitHubAPIError,
    GitHubClient,
    RepositoryCoordinates,
    parse_repository_url,
)

BASE_URL = "https://api.github.com"
REPOSITORY = RepositoryCoordinates(owner="acme", name="widgets")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://github.com/acme/widgets", ("acme", "widgets")),
        ("https://github.com/acme/widgets.git", ("acme", "widgets")),
        ("http://www.github.com/acme/widgets/tree/main", ("acme", "widgets")),
        ("https://gitlab.com/acme/widgets", None),
        ("https://github.com/acme", None),
        ("", None),
    ],
)
def test_parse_repository_url(url, expected) -> None:
    coordinates = parse_repository_url(url)

    if expected is None:
        assert coordinates is None
    else:
        assert (coordinates.owner, coordinates.name) == expected
        assert coordinates.full_name == "/".join(expected)


def test_list_commits_sends_window_and_token(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        url=(
            f"{BASE_URL}/repos/acme/widgets/commits"
            "?per_page=30&since=2024-02-01T00%3A00%3A00Z"
        ),
        json=[{"sha": "abc"}],
    )

    with GitHubClient("gh-token", base_url=BASE_URL) as client:
        commits = client.list_commits(
            REPOSITORY, since=datetime(2024, 2, 1, tzinfo=timezone.utc)
        )

    assert commits == [{"sha": "abc"}]
    request = httpx_mock.get_request()
    assert request.headers["Authorization"] == "Bearer gh-token"
    assert request.headers["Accept"] == "application/vnd.github+json"


def test_list_pull_requests_requests_all_states_by_update(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        url=f"{BASE_URL}/repos/acme/widgets/pulls?state=all&sort=updated&per_page=10",
        json=[{"id": 1}, "garbage"],
    )

    with GitHubClient("gh-token", base_url=BASE_URL, page_size=10) as client:
        pull_requests = client.list_pull_requests(REPOSITORY)

    assert pull_requests == [{"id": 1}]


def test_list_user_repositories(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        url=f"{BASE_URL}/user/repos?sort=updated&per_page=100",
        json=[{"id": 1, "full_name": "acme/widgets"}],
    )

    with GitHubClient("gh-token", base_url=BASE_URL) as client:
        repositories = client.list_user_repositories()

    assert repositories[0]["full_name"] == "acme/widgets"


@pytest.mark.parametrize("status_code", [401, 404, 500])
def test_error_status_raises(httpx_mock: HTTPXMock, status_code: int) -> None:
    httpx_mock.add_response(url=re.compile(r".*/user/repos.*"), status_code=status_code)

    with GitHubClient("gh-token", base_url=BASE_URL) as client:
        with pytest.raises(GitHubAPIError) as excinfo:
            client.list_user_repositories()

    assert excinfo.value.status_code == status_code


def test_timeout_raises(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

    with GitHubClient("gh-token", base_url=BASE_URL) as client:
        with pytest.raises(GitHubAPIError, match="timed out"):
            client.list_user_repositories()


def test_unexpected_shape_raises(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(url=re.compile(r".*/user/repos.*"), json={"message": "nope"})

    with GitHubClient("gh-token", base_url=BASE_URL) as client:
        with pytest.raises(GitHubAPIError):
            client.list_user_repositories()


def test_token_is_required() -> None:
    with pytest.raises(ValueError):
        GitHubClient("")
