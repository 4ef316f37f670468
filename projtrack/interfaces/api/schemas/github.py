"""Schemas for the GitHub integration endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class WebhookResponse(BaseModel):
    status: str


class SyncCounts(BaseModel):
    commits: int
    pull_requests: int = Field(..., alias="pullRequests")

    model_config = ConfigDict(populate_by_name=True)


class SyncResponse(BaseModel):
    success: bool
    synced: SyncCounts


class GitHubRepositoryRead(BaseModel):
    id: int
    name: str
    full_name: str
    html_url: str
    private: bool = False
    description: str | None = None
    updated_at: str | None = None

    model_config = ConfigDict(extra="ignore")
