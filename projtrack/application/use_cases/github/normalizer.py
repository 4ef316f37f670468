"""Translate GitHub payloads into canonical :class:`ActivityEvent` records.

Webhook bodies are loosely typed JSON. :func:`parse_webhook_delivery` turns
them into one of a small set of typed deliveries keyed by the
``X-GitHub-Event`` header, and the ``normalize_*`` functions map a single
commit, pull request or issue onto an :class:`ActivityEvent`. Every parser
fails closed with :class:`PayloadValidationError` instead of producing a
partially populated record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final, Mapping, Union

from projtrack.domain.entities import (
    ACTIVITY_KIND_COMMIT,
    ACTIVITY_KIND_ISSUE,
    ACTIVITY_KIND_PULL_REQUEST,
    UNKNOWN_ACTOR,
    ActivityEvent,
)
from projtrack.utils import parse_github_datetime

EVENT_PUSH: Final[str] = "push"
EVENT_PULL_REQUEST: Final[str] = "pull_request"
EVENT_ISSUES: Final[str] = "issues"
SUPPORTED_EVENT_KINDS: Final[tuple[str, ...]] = (
    EVENT_PUSH,
    EVENT_PULL_REQUEST,
    EVENT_ISSUES,
)

PULL_REQUEST_ID_PREFIX: Final[str] = "pr-"
ISSUE_ID_PREFIX: Final[str] = "issue-"

_MAX_TITLE_LENGTH = 500
_MAX_ACTOR_LENGTH = 100
_MAX_EXTERNAL_ID_LENGTH = 100
_MAX_LINK_LENGTH = 500


class PayloadValidationError(ValueError):
    """Raised when a payload lacks a field required to build an event."""


@dataclass(frozen=True)
class PushDelivery:
    repository_url: str
    commits: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class PullRequestDelivery:
    repository_url: str
    action: str | None
    pull_request: dict[str, Any]


@dataclass(frozen=True)
class IssueDelivery:
    repository_url: str
    action: str | None
    issue: dict[str, Any]


WebhookDelivery = Union[PushDelivery, PullRequestDelivery, IssueDelivery]


def extract_repository_url(payload: Any) -> str:
    """Return ``repository.html_url`` from a webhook body."""

    if not isinstance(payload, Mapping):
        raise PayloadValidationError("Payload must be a JSON object")
    repository = payload.get("repository")
    if not isinstance(repository, Mapping):
        raise PayloadValidationError("No repository URL")
    url = repository.get("html_url")
    if not isinstance(url, str) or not url.strip():
        raise PayloadValidationError("No repository URL")
    return url


def parse_webhook_delivery(event_kind: str, payload: Any) -> WebhookDelivery | None:
    """Parse a webhook body for ``event_kind``.

    Returns ``None`` for event kinds that are not mirrored (``ping``,
    ``star``...). Supported kinds missing their required objects raise
    :class:`PayloadValidationError`.
    """

    repository_url = extract_repository_url(payload)

    if event_kind == EVENT_PUSH:
        commits = payload.get("commits")
        if commits is None:
            commits = []
        if not isinstance(commits, list):
            raise PayloadValidationError("'commits' must be a list")
        return PushDelivery(repository_url=repository_url, commits=list(commits))

    if event_kind == EVENT_PULL_REQUEST:
        return PullRequestDelivery(
            repository_url=repository_url,
            action=_optional_str(payload.get("action")),
            pull_request=_require_mapping(payload, "pull_request"),
        )

    if event_kind == EVENT_ISSUES:
        return IssueDelivery(
            repository_url=repository_url,
            action=_optional_str(payload.get("action")),
            issue=_require_mapping(payload, "issue"),
        )

    return None


def normalize_commit(project_id: int, commit: Any) -> ActivityEvent:
    """Build the event for one commit of a push (or a polled commit).

    Only the first line of the message becomes the title; longer messages are
    kept whole in the metadata.
    """

    if not isinstance(commit, Mapping):
        raise PayloadValidationError("Commit entry must be an object")

    sha = _require_str(
        commit, "id", context="commit", max_length=_MAX_EXTERNAL_ID_LENGTH
    )
    message = commit.get("message")
    if not isinstance(message, str):
        raise PayloadValidationError(f"Commit {sha} has no message")
    occurred_at = _require_datetime(commit, "timestamp", context=f"commit {sha}")
    link = _require_str(
        commit, "url", context=f"commit {sha}", max_length=_MAX_LINK_LENGTH
    )

    author = commit.get("author")
    if not isinstance(author, Mapping):
        author = {}
    actor = _first_text(author.get("username"), author.get("name"))

    metadata: dict[str, Any] = {"sha": sha}
    for key in ("added", "modified", "removed"):
        paths = commit.get(key)
        if isinstance(paths, list):
            metadata[key] = len(paths)
    avatar = _optional_str(author.get("avatar_url"))
    if avatar:
        metadata["author_avatar"] = avatar
    title = message.split("\n", 1)[0].rstrip("\r")
    if title != message.rstrip("\r\n"):
        metadata["message"] = message

    return ActivityEvent(
        project_id=project_id,
        kind=ACTIVITY_KIND_COMMIT,
        external_id=sha,
        occurred_at=occurred_at,
        actor=actor,
        title=title[:_MAX_TITLE_LENGTH],
        link=link,
        metadata=metadata,
    )


def normalize_pull_request(
    project_id: int, pull_request: Any, *, action: str | None = None
) -> ActivityEvent:
    """Build the event for a pull request as delivered or listed by GitHub."""

    if not isinstance(pull_request, Mapping):
        raise PayloadValidationError("Pull request must be an object")

    numeric_id = _require_numeric_id(pull_request, context="pull request")
    context = f"pull request {numeric_id}"
    title = _require_str(pull_request, "title", context=context)
    link = _require_str(
        pull_request, "html_url", context=context, max_length=_MAX_LINK_LENGTH
    )
    occurred_at = _require_datetime(pull_request, "created_at", context=context)

    user = pull_request.get("user")
    if not isinstance(user, Mapping):
        user = {}

    merged = pull_request.get("merged")
    if merged is None:
        merged = pull_request.get("merged_at") is not None

    metadata: dict[str, Any] = {
        "number": pull_request.get("number"),
        "state": pull_request.get("state"),
        "action": action,
        "merged": bool(merged),
        "author_avatar": _optional_str(user.get("avatar_url")),
    }

    return ActivityEvent(
        project_id=project_id,
        kind=ACTIVITY_KIND_PULL_REQUEST,
        external_id=_external_id(PULL_REQUEST_ID_PREFIX, numeric_id),
        occurred_at=occurred_at,
        actor=_first_text(user.get("login")),
        title=title[:_MAX_TITLE_LENGTH],
        link=link,
        metadata=metadata,
    )


def normalize_issue(
    project_id: int, issue: Any, *, action: str | None = None
) -> ActivityEvent:
    """Build the event for an issue delivery."""

    if not isinstance(issue, Mapping):
        raise PayloadValidationError("Issue must be an object")

    numeric_id = _require_numeric_id(issue, context="issue")
    context = f"issue {numeric_id}"
    title = _require_str(issue, "title", context=context)
    link = _require_str(
        issue, "html_url", context=context, max_length=_MAX_LINK_LENGTH
    )
    occurred_at = _require_datetime(issue, "created_at", context=context)

    user = issue.get("user")
    if not isinstance(user, Mapping):
        user = {}

    return ActivityEvent(
        project_id=project_id,
        kind=ACTIVITY_KIND_ISSUE,
        external_id=_external_id(ISSUE_ID_PREFIX, numeric_id),
        occurred_at=occurred_at,
        actor=_first_text(user.get("login")),
        title=title[:_MAX_TITLE_LENGTH],
        link=link,
        metadata={
            "number": issue.get("number"),
            "state": issue.get("state"),
            "action": action,
        },
    )


def commit_payload_from_api(api_commit: Any) -> dict[str, Any]:
    """Reshape an item of ``GET /repos/{owner}/{repo}/commits`` as a push commit.

    Polled commits then follow exactly the same normalization as webhook
    commits, so both paths produce identical identity fields.
    """

    if not isinstance(api_commit, Mapping):
        raise PayloadValidationError("Commit entry must be an object")

    details = api_commit.get("commit")
    if not isinstance(details, Mapping):
        raise PayloadValidationError(
            f"Commit {api_commit.get('sha')!r} has no commit details"
        )
    git_author = details.get("author")
    if not isinstance(git_author, Mapping):
        git_author = {}
    account = api_commit.get("author")
    if not isinstance(account, Mapping):
        account = {}

    return {
        "id": api_commit.get("sha"),
        "message": details.get("message"),
        "timestamp": git_author.get("date"),
        "url": api_commit.get("html_url"),
        "author": {
            "username": account.get("login"),
            "name": git_author.get("name"),
            "avatar_url": account.get("avatar_url"),
        },
    }


def _require_mapping(payload: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if not isinstance(value, Mapping):
        raise PayloadValidationError(f"Payload has no '{key}' object")
    return dict(value)


def _require_str(
    source: Mapping[str, Any], key: str, *, context: str, max_length: int | None = None
) -> str:
    value = source.get(key)
    if not isinstance(value, str) or not value.strip():
        raise PayloadValidationError(f"{context.capitalize()} is missing '{key}'")
    if max_length is not None and len(value) > max_length:
        raise PayloadValidationError(
            f"{context.capitalize()} has a '{key}' longer than {max_length} characters"
        )
    return value


def _external_id(prefix: str, numeric_id: str) -> str:
    external_id = f"{prefix}{numeric_id}"
    if len(external_id) > _MAX_EXTERNAL_ID_LENGTH:
        raise PayloadValidationError(f"Identifier {external_id[:20]}... is too long")
    return external_id


def _require_numeric_id(source: Mapping[str, Any], *, context: str) -> str:
    value = source.get("id")
    if isinstance(value, bool):
        value = None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip().isdigit():
        return value.strip()
    raise PayloadValidationError(f"{context.capitalize()} is missing a numeric 'id'")


def _require_datetime(source: Mapping[str, Any], key: str, *, context: str) -> datetime:
    try:
        return parse_github_datetime(source.get(key))
    except ValueError as exc:
        raise PayloadValidationError(f"{context.capitalize()} has an invalid '{key}': {exc}") from exc


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _first_text(*candidates: Any) -> str:
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate[:_MAX_ACTOR_LENGTH]
    return UNKNOWN_ACTOR


__all__ = [
    "EVENT_ISSUES",
    "EVENT_PULL_REQUEST",
    "EVENT_PUSH",
    "ISSUE_ID_PREFIX",
    "IssueDelivery",
    "PULL_REQUEST_ID_PREFIX",
    "PayloadValidationError",
    "PullRequestDelivery",
    "PushDelivery",
    "SUPPORTED_EVENT_KINDS",
    "WebhookDelivery",
    "commit_payload_from_api",
    "extract_repository_url",
    "normalize_commit",
    "normalize_issue",
    "normalize_pull_request",
    "parse_webhook_delivery",
]
