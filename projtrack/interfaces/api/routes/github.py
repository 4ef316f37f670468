"""GitHub integration endpoints: webhook receiver, on-demand sync and repository picker."""

import json
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from projtrack.application.use_cases.errors import NotFoundError
from projtrack.application.use_cases.github import (
    InvalidRepositoryUrlError,
    NoCredentialError,
    NoRepositoryLinkedError,
    PayloadValidationError,
    WebhookResult,
    list_user_repositories,
    process_webhook_delivery,
    sync_project_activity,
)
from projtrack.application.use_cases.github.sync import GitHubClientFactory
from projtrack.application.use_cases.projects import get_project as get_project_uc
from projtrack.config import get_settings
from projtrack.domain.entities import User
from projtrack.infrastructure.database import SessionLocal, get_db
from projtrack.infrastructure.github_client import GitHubAPIError
from projtrack.infrastructure.security import verify_webhook_signature
from projtrack.interfaces.api.dependencies import (
    get_current_active_user,
    get_github_client_factory,
)
from projtrack.interfaces.api.schemas import (
    GitHubRepositoryRead,
    SyncCounts,
    SyncResponse,
    WebhookResponse,
)

router = APIRouter(tags=["github"])
logger = logging.getLogger(__name__)


def _process_delivery(event_kind: str | None, payload: object) -> WebhookResult:
    session = SessionLocal()
    try:
        return process_webhook_delivery(session, event_kind=event_kind, payload=payload)
    finally:
        session.close()


@router.post("/github/webhook", response_model=WebhookResponse)
async def receive_github_webhook(
    request: Request,
    x_github_event: str | None = Header(default=None),
    x_hub_signature_256: str | None = Header(default=None),
    x_github_delivery: str | None = Header(default=None),
):
    """Mirror a GitHub push, pull request or issue delivery into the activity log.

    The signature is checked against the exact bytes received, before the
    body is parsed.
    """

    raw_body = await request.body()
    settings = get_settings()
    if not verify_webhook_signature(
        raw_body, x_hub_signature_256, settings.github_webhook_secret
    ):
        logger.warning("Rejected %s webhook delivery with invalid signature", x_github_event)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid signature"
        )

    try:
        payload = json.loads(raw_body)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON payload"
        ) from exc

    try:
        result = await run_in_threadpool(_process_delivery, x_github_event, payload)
    except PayloadValidationError as exc:
        logger.info("Rejected %s webhook delivery: %s", x_github_event, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(
            "Failed to process %s webhook delivery %s",
            x_github_event,
            x_github_delivery or "<no delivery id>",
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook processing failed",
        ) from exc

    return WebhookResponse(status=result.status)


@router.post("/projects/{project_id}/github/sync", response_model=SyncResponse)
def sync_project_github_activity(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    client_factory: GitHubClientFactory = Depends(get_github_client_factory),
):
    """Pull the last commits and pull requests of the linked repository."""

    try:
        get_project_uc(db, project_id, user_id=current_user.id)
        result = sync_project_activity(
            db,
            project_id,
            client_factory=client_factory,
            lookback_days=get_settings().activity_lookback_days,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (NoRepositoryLinkedError, InvalidRepositoryUrlError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NoCredentialError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except GitHubAPIError as exc:
        logger.error("GitHub sync failed for project %s: %s", project_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sync GitHub activity",
        ) from exc

    return SyncResponse(
        success=True,
        synced=SyncCounts(commits=result.commits, pull_requests=result.pull_requests),
    )


@router.get("/github/repos", response_model=list[GitHubRepositoryRead])
def list_github_repositories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    client_factory: GitHubClientFactory = Depends(get_github_client_factory),
):
    """Return the caller's GitHub repositories, most recently updated first."""

    try:
        repositories = list_user_repositories(
            db, current_user.id, client_factory=client_factory
        )
    except NoCredentialError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except GitHubAPIError as exc:
        logger.error("Listing GitHub repositories failed for user %s: %s", current_user.id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch repositories",
        ) from exc

    return [GitHubRepositoryRead.model_validate(repo) for repo in repositories]


__all__ = ["router"]
