"""Tests for the pull-style GitHub synchronization."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from projtrack.application.use_cases.github import (
    InvalidRepositoryUrlError,
    NoCredentialError,
    NoRepositoryLinkedError,
    ProjectNotFoundError,
    process_webhook_delivery,
    sync_project_activity,
)
from projtrack.infrastructure.github_client import GitHubAPIError
from projtrack.infrastructure.repositories import ActivityEventRepository

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _api_commit(sha: str, when: datetime, message: str = "Polled commit") -> dict:
    return {
        "sha": sha,
        "html_url": f"https://github.com/acme/widgets/commit/{sha}",
        "commit": {"message": message, "author": {"name": "Ada", "date": _iso(when)}},
        "author": {"login": "ada"},
    }


def _api_pull_request(pr_id: int, created: datetime, **overrides) -> dict:
    pull_request = {
        "id": pr_id,
        "number": pr_id,
        "title": f"PR {pr_id}",
        "state": "open",
        "html_url": f"https://github.com/acme/widgets/pull/{pr_id}",
        "created_at": _iso(created),
        "merged_at": None,
        "user": {"login": "grace"},
    }
    pull_request.update(overrides)
    return pull_request


class FakeGitHubClient:
    """In-memory stand-in recording the calls made by the sync."""

    def __init__(self, commits=None, pull_requests=None, error: Exception | None = None):
        self.commits = commits or []
        self.pull_requests = pull_requests or []
        self.error = error
        self.tokens: list[str] = []
        self.since: datetime | None = None
        self.closed = False

    def __call__(self, token: str) -> "FakeGitHubClient":
        self.tokens.append(token)
        return self

    def __enter__(self) -> "FakeGitHubClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.closed = True

    def list_commits(self, repository, *, since=None):
        self.since = since
        if self.error is not None:
            raise self.error
        return self.commits

    def list_pull_requests(self, repository, *, state="all"):
        return self.pull_requests


def test_pull_requests_outside_window_are_skipped(session, project) -> None:
    client = FakeGitHubClient(
        pull_requests=[
            _api_pull_request(1, NOW - timedelta(days=40)),
            _api_pull_request(2, NOW - timedelta(days=1)),
        ]
    )

    result = sync_project_activity(session, project.id, client_factory=client, now=NOW)

    assert result.pull_requests == 1
    repository = ActivityEventRepository(session)
    assert repository.get(project.id, "pr-1") is None
    assert repository.get(project.id, "pr-2") is not None
    assert client.since == NOW - timedelta(days=30)
    assert client.tokens == ["gh-test-token"]
    assert client.closed


def test_polled_pull_request_has_no_action(session, project) -> None:
    client = FakeGitHubClient(
        pull_requests=[
            _api_pull_request(
                3, NOW - timedelta(days=2), state="closed", merged_at=_iso(NOW - timedelta(days=1))
            )
        ]
    )

    sync_project_activity(session, project.id, client_factory=client, now=NOW)

    stored = ActivityEventRepository(session).get(project.id, "pr-3")
    assert stored.metadata["action"] is None
    assert stored.metadata["merged"] is True
    assert stored.metadata["state"] == "closed"


def test_repeated_sync_does_not_duplicate(session, project) -> None:
    client = FakeGitHubClient(
        commits=[_api_commit("c1", NOW - timedelta(days=2)), _api_commit("c2", NOW - timedelta(hours=3))],
        pull_requests=[_api_pull_request(5, NOW - timedelta(days=3))],
    )

    first = sync_project_activity(session, project.id, client_factory=client, now=NOW)
    second = sync_project_activity(session, project.id, client_factory=client, now=NOW)

    assert (first.commits, first.pull_requests) == (2, 1)
    assert (second.commits, second.pull_requests) == (2, 1)
    assert ActivityEventRepository(session).count_for_project(project.id) == 3


def test_commit_seen_by_webhook_and_poll_is_stored_once(session, project) -> None:
    occurred = NOW - timedelta(days=1)
    process_webhook_delivery(
        session,
        event_kind="push",
        payload={
            "repository": {"html_url": project.repo_url},
            "commits": [
                {
                    "id": "shared-sha",
                    "message": "Webhook title",
                    "timestamp": _iso(occurred),
                    "url": "https://github.com/acme/widgets/commit/shared-sha",
                    "author": {"username": "ada", "name": "Ada"},
                }
            ],
        },
    )
    client = FakeGitHubClient(commits=[_api_commit("shared-sha", occurred, message="Polled title")])

    sync_project_activity(session, project.id, client_factory=client, now=NOW)

    repository = ActivityEventRepository(session)
    assert repository.count_for_project(project.id) == 1
    stored = repository.get(project.id, "shared-sha")
    assert stored.title == "Polled title"
    assert stored.actor == "ada"


def test_malformed_polled_commit_is_skipped(session, project) -> None:
    broken = _api_commit("bad", NOW)
    broken["commit"]["author"]["date"] = None
    client = FakeGitHubClient(commits=[broken, _api_commit("good", NOW - timedelta(hours=1))])

    result = sync_project_activity(session, project.id, client_factory=client, now=NOW)

    assert result.commits == 1


def test_upstream_failure_applies_nothing(session, project) -> None:
    client = FakeGitHubClient(error=GitHubAPIError("boom", status_code=502))

    with pytest.raises(GitHubAPIError):
        sync_project_activity(session, project.id, client_factory=client, now=NOW)

    assert ActivityEventRepository(session).count_for_project(project.id) == 0


def test_failed_store_is_logged_and_propagated(session, project, monkeypatch, caplog) -> None:
    def _explode(self, event):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(ActivityEventRepository, "apply", _explode)
    caplog.set_level(logging.ERROR)
    client = FakeGitHubClient(pull_requests=[_api_pull_request(12, NOW - timedelta(days=1))])

    with pytest.raises(RuntimeError):
        sync_project_activity(session, project.id, client_factory=client, now=NOW)

    assert f"Failed to apply pull_request pr-12 to project {project.id}" in caplog.text


def test_unknown_project(session) -> None:
    with pytest.raises(ProjectNotFoundError):
        sync_project_activity(session, 999, client_factory=FakeGitHubClient(), now=NOW)


def test_project_without_repository(session, user, project_factory) -> None:
    project = project_factory(user, repo_url=None)

    with pytest.raises(NoRepositoryLinkedError):
        sync_project_activity(session, project.id, client_factory=FakeGitHubClient(), now=NOW)


def test_project_with_non_github_repository(session, user, project_factory) -> None:
    project = project_factory(user, repo_url="https://gitlab.com/acme/widgets")

    with pytest.raises(InvalidRepositoryUrlError):
        sync_project_activity(session, project.id, client_factory=FakeGitHubClient(), now=NOW)


def test_owner_without_token(session, user_factory, project_factory) -> None:
    owner = user_factory(email="tokenless@example.com", github_token=None)
    project = project_factory(owner)
    client = FakeGitHubClient()

    with pytest.raises(NoCredentialError):
        sync_project_activity(session, project.id, client_factory=client, now=NOW)

    assert client.tokens == []
