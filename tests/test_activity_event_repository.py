"""Tests for the deduplicating activity event store."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from projtrack.domain.entities import ActivityEvent
from projtrack.infrastructure.database import SessionLocal
from projtrack.infrastructure.repositories import ActivityEventRepository
from projtrack.infrastructure.repositories import activity_event_repository

OCCURRED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _event(project_id: int, **overrides) -> ActivityEvent:
    values = {
        "project_id": project_id,
        "kind": "pull_request",
        "external_id": "pr-1",
        "occurred_at": OCCURRED_AT,
        "actor": "grace",
        "title": "Add widgets",
        "link": "https://github.com/acme/widgets/pull/1",
        "metadata": {"number": 1, "state": "open", "action": "opened"},
    }
    values.update(overrides)
    return ActivityEvent(**values)


def test_applying_the_same_event_twice_keeps_one_row(session, project) -> None:
    repository = ActivityEventRepository(session)

    first = repository.apply(_event(project.id))
    second = repository.apply(_event(project.id))

    assert repository.count_for_project(project.id) == 1
    assert first.id == second.id
    assert second.occurred_at == OCCURRED_AT


def test_later_apply_refreshes_title_and_metadata_only(session, project) -> None:
    repository = ActivityEventRepository(session)
    repository.apply(_event(project.id))

    stored = repository.apply(
        _event(
            project.id,
            title="Add widgets (v2)",
            metadata={"number": 1, "state": "closed", "action": "closed", "merged": True},
            actor="someone-else",
            link="https://example.com/other",
            occurred_at=OCCURRED_AT + timedelta(days=3),
        )
    )

    assert stored.title == "Add widgets (v2)"
    assert stored.metadata["state"] == "closed"
    assert stored.metadata["merged"] is True
    assert stored.actor == "grace"
    assert stored.link == "https://github.com/acme/widgets/pull/1"
    assert stored.occurred_at == OCCURRED_AT


def test_same_external_id_in_two_projects_is_two_events(session, user, project, project_factory) -> None:
    other = project_factory(user, name="Other", repo_url="https://github.com/acme/other")
    repository = ActivityEventRepository(session)

    repository.apply(_event(project.id))
    repository.apply(_event(other.id))

    assert repository.count_for_project(project.id) == 1
    assert repository.count_for_project(other.id) == 1


def test_list_for_project_is_newest_first_and_limited(session, project) -> None:
    repository = ActivityEventRepository(session)
    for day in range(5):
        repository.apply(
            _event(
                project.id,
                kind="commit",
                external_id=f"sha-{day}",
                occurred_at=OCCURRED_AT + timedelta(days=day),
            )
        )

    events = repository.list_for_project(project.id, limit=3)

    assert [event.external_id for event in events] == ["sha-4", "sha-3", "sha-2"]
    assert all(event.occurred_at.tzinfo is not None for event in events)


def test_get_returns_none_for_unknown_key(session, project) -> None:
    assert ActivityEventRepository(session).get(project.id, "missing") is None


def test_concurrent_applies_of_one_event_store_a_single_row(project) -> None:
    workers = 8
    barrier = threading.Barrier(workers)
    errors: list[Exception] = []

    def deliver() -> None:
        session = SessionLocal()
        try:
            barrier.wait()
            ActivityEventRepository(session).apply(_event(project.id))
        except Exception as exc:
            errors.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=deliver) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with SessionLocal() as fresh:
        assert ActivityEventRepository(fresh).count_for_project(project.id) == 1


def test_dialects_without_on_conflict_keep_first_write_identity(
    session, project, monkeypatch
) -> None:
    monkeypatch.setattr(activity_event_repository, "_UPSERT_INSERTS", {})
    repository = ActivityEventRepository(session)

    repository.apply(
        _event(
            project.id,
            kind="commit",
            external_id="abc123",
            title="one",
            link="https://github.com/acme/widgets/commit/abc123",
            metadata={"sha": "abc123"},
        )
    )
    stored = repository.apply(
        _event(
            project.id,
            kind="pull_request",
            external_id="abc123",
            title="two",
            link="https://example.com/elsewhere",
            metadata={"sha": "abc123", "message": "two\n\nbody"},
        )
    )

    assert repository.count_for_project(project.id) == 1
    assert stored.title == "two"
    assert stored.metadata == {"sha": "abc123", "message": "two\n\nbody"}
    assert stored.kind == "commit"
    assert stored.link == "https://github.com/acme/widgets/commit/abc123"


def test_failed_apply_is_logged_with_event_identity(session, project, caplog) -> None:
    repository = ActivityEventRepository(session)
    missing_project_id = project.id + 1000
    caplog.set_level(logging.ERROR, logger=activity_event_repository.__name__)

    with pytest.raises(IntegrityError):
        repository.apply(_event(missing_project_id, external_id="pr-77"))

    assert "pr-77" in caplog.text
    assert f"project {missing_project_id}" in caplog.text
    assert repository.count_for_project(project.id) == 0
