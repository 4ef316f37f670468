"""Integration tests for the project, milestone and task endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from projtrack.domain.entities import ActivityEvent
from projtrack.infrastructure.database import SessionLocal
from projtrack.infrastructure.repositories import ActivityEventRepository


def test_project_crud_flow(client: TestClient, auth_headers) -> None:
    created = client.post(
        "/projects/",
        json={"name": "Widgets", "repo_url": " https://github.com/acme/widgets "},
        headers=auth_headers,
    )
    assert created.status_code == 201
    project = created.json()
    assert project["stage"] == "idea"
    assert project["repo_url"] == "https://github.com/acme/widgets"

    listed = client.get("/projects/", headers=auth_headers)
    assert [item["id"] for item in listed.json()] == [project["id"]]

    updated = client.patch(
        f"/projects/{project['id']}",
        json={"stage": "execution", "description": "Ship it"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["stage"] == "execution"
    assert updated.json()["description"] == "Ship it"
    assert updated.json()["repo_url"] == "https://github.com/acme/widgets"

    unlinked = client.patch(f"/projects/{project['id']}", json={"repo_url": ""}, headers=auth_headers)
    assert unlinked.json()["repo_url"] is None

    deleted = client.delete(f"/projects/{project['id']}", headers=auth_headers)
    assert deleted.status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=auth_headers).status_code == 404



def test_deleting_a_project_removes_its_activity(client: TestClient, session, project, auth_headers) -> None:
    ActivityEventRepository(session).apply(
        ActivityEvent(
            project_id=project.id,
            kind="commit",
            external_id="abc123",
            occurred_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
            actor="ada",
            title="Fix parser",
            link="https://github.com/acme/widgets/commit/abc123",
            metadata={"sha": "abc123"},
        )
    )

    deleted = client.delete(f"/projects/{project.id}", headers=auth_headers)

    assert deleted.status_code == 204
    with SessionLocal() as fresh:
        assert ActivityEventRepository(fresh).count_for_project(project.id) == 0

def test_invalid_project_input_is_rejected(client: TestClient, auth_headers) -> None:
    bad_stage = client.post("/projects/", json={"name": "X", "stage": "someday"}, headers=auth_headers)
    bad_url = client.post(
        "/projects/", json={"name": "X", "repo_url": "git@github.com:acme/widgets.git"}, headers=auth_headers
    )

    assert bad_stage.status_code == 422
    assert bad_url.status_code == 422


def test_projects_are_private_to_their_owner(
    client: TestClient, project, user_factory, headers_for
) -> None:
    stranger = headers_for(user_factory(email="stranger@example.com"))

    assert client.get("/projects/", headers=stranger).json() == []
    assert client.get(f"/projects/{project.id}", headers=stranger).status_code == 404
    assert client.get(f"/projects/{project.id}/activity", headers=stranger).status_code == 404
    assert client.delete(f"/projects/{project.id}", headers=stranger).status_code == 404


def test_projects_require_authentication(client: TestClient) -> None:
    response = client.get("/projects/")

    assert response.status_code == 401


def test_activity_feed_is_empty_for_new_project(client: TestClient, project, auth_headers) -> None:
    response = client.get(f"/projects/{project.id}/activity?limit=5", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == []


def test_milestones_and_tasks_flow(client: TestClient, project, auth_headers) -> None:
    milestone = client.post(
        f"/projects/{project.id}/milestones",
        json={"title": "Beta", "start_date": "2024-05-01T00:00:00Z"},
        headers=auth_headers,
    )
    assert milestone.status_code == 201
    milestone_id = milestone.json()["id"]
    assert milestone.json()["status"] == "on_track"

    first = client.post(f"/milestones/{milestone_id}/tasks", json={"title": "Write docs"}, headers=auth_headers)
    second = client.post(
        f"/milestones/{milestone_id}/tasks",
        json={"title": "Fix crash", "type": "bug"},
        headers=auth_headers,
    )
    assert first.status_code == 201
    assert (first.json()["order"], second.json()["order"]) == (0, 1)

    moved = client.patch(
        f"/tasks/{second.json()['id']}",
        json={"status": "in_progress", "title": None},
        headers=auth_headers,
    )
    assert moved.status_code == 200
    assert moved.json()["status"] == "in_progress"
    assert moved.json()["title"] == "Fix crash"

    listed = client.get(f"/projects/{project.id}/milestones", headers=auth_headers).json()
    assert [task["title"] for task in listed[0]["tasks"]] == ["Write docs", "Fix crash"]

    at_risk = client.patch(f"/milestones/{milestone_id}", json={"status": "at_risk"}, headers=auth_headers)
    assert at_risk.json()["status"] == "at_risk"

    assert client.delete(f"/tasks/{first.json()['id']}", headers=auth_headers).status_code == 204
    assert [task["title"] for task in client.get(f"/milestones/{milestone_id}/tasks", headers=auth_headers).json()] == [
        "Fix crash"
    ]

    assert client.delete(f"/milestones/{milestone_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/tasks/{second.json()['id']}", headers=auth_headers).status_code == 404


def test_invalid_task_type_is_rejected(client: TestClient, project, auth_headers) -> None:
    milestone = client.post(f"/projects/{project.id}/milestones", json={"title": "Beta"}, headers=auth_headers)

    response = client.post(
        f"/milestones/{milestone.json()['id']}/tasks",
        json={"title": "Something", "type": "epic"},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_milestone_of_foreign_project_is_not_found(
    client: TestClient, project, user_factory, headers_for
) -> None:
    stranger = headers_for(user_factory(email="stranger@example.com"))

    response = client.post(f"/projects/{project.id}/milestones", json={"title": "Nope"}, headers=stranger)

    assert response.status_code == 404
