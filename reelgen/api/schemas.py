"""
Pydantic schemas for API requests and responses.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateReelRequest(BaseModel):
    """POST /api/reels/generate request body."""
    celebrity_name: Optional[str] = Field(default=None, alias="celebrityName")

    model_config = ConfigDict(populate_by_name=True)


class GenerateReelResponse(BaseModel):
    """POST /api/reels/generate response."""
    success: bool = True


class ReelItem(BaseModel):
    """A reel as rendered by the feed."""
    id: str
    video_url: str = Field(..., alias="videoUrl")
    caption: str
    likes: int
    comments: int
    created_at: str = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class Pagination(BaseModel):
    page: int
    limit: int
    has_more: bool = Field(..., alias="hasMore")
    next_token: Optional[str] = Field(default=None, alias="nextToken")

    model_config = ConfigDict(populate_by_name=True)


class ReelFeedResponse(BaseModel):
    """GET /api/reels response."""
    reels: list[ReelItem] = Field(default_factory=list)
    pagination: Pagination
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    storage_backend: str
    bucket_configured: bool
    timestamp: datetime
