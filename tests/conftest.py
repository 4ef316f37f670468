"""Shared fixtures: a throw-away SQLite database and an authenticated user."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "projtrack_test.db"
WEBHOOK_SECRET = "test-webhook-secret"
REPO_URL = "https://github.com/acme/widgets"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["GITHUB_WEBHOOK_SECRET"] = WEBHOOK_SECRET
os.environ["GITHUB_API_URL"] = "https://api.github.com"

from projtrack.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from projtrack.application.use_cases.projects import create_project  # noqa: E402
from projtrack.application.use_cases.users import (  # noqa: E402
    create_user,
    set_github_credential,
)
from projtrack.domain.entities import Project, User  # noqa: E402
from projtrack.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from projtrack.infrastructure.security import create_access_token  # noqa: E402
from projtrack.interfaces.api.dependencies import password_signature  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def make_user(
    session,
    *,
    email: str = "owner@example.com",
    password: str = "Secret123",
    github_token: str | None = "gh-test-token",
) -> User:
    user = create_user(session, name="Owner", email=email, password=password)
    if github_token:
        user = set_github_credential(session, user.id, token=github_token, login="octocat")
    return user


def make_project(session, user: User, *, repo_url: str | None = REPO_URL, name: str = "Widgets") -> Project:
    return create_project(session, user_id=user.id, name=name, repo_url=repo_url)


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token({"sub": user.email, "pwd_sig": password_signature(user)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user(session) -> User:
    return make_user(session)


@pytest.fixture()
def auth_headers(user: User) -> dict[str, str]:
    return auth_headers_for(user)


@pytest.fixture()
def project(session, user: User) -> Project:
    return make_project(session, user)


@pytest.fixture()
def user_factory(session):
    """Return a callable creating additional users."""

    def _factory(**kwargs) -> User:
        return make_user(session, **kwargs)

    return _factory


@pytest.fixture()
def project_factory(session):
    """Return a callable creating projects for a given user."""

    def _factory(owner: User, **kwargs) -> Project:
        return make_project(session, owner, **kwargs)

    return _factory


@pytest.fixture()
def headers_for():
    return auth_headers_for
