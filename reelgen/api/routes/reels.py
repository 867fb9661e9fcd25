"""
Reel endpoints: generation and the paginated feed.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from reelgen.providers.exceptions import ReelError
from reelgen.services import FeedProvider, ReelOrchestrator

from ..dependencies import get_feed_provider, get_orchestrator
from ..exceptions import FeedUnavailableError, GenerationFailedError, ValidationError
from ..schemas import (
    GenerateReelRequest,
    GenerateReelResponse,
    Pagination,
    ReelFeedResponse,
    ReelItem,
)

logger = logging.getLogger(__name__)

FEED_PATH = "/api/reels"

router = APIRouter(prefix=FEED_PATH, tags=["Reels"])

EMPTY_FEED_MESSAGE = "No videos available at this time. Please try again later."

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.post(
    "/generate",
    response_model=GenerateReelResponse,
    summary="Generate Reel",
    description="Generate a reel about a sports celebrity and upload it to storage.",
)
async def generate_reel(
    request: GenerateReelRequest,
    orchestrator: ReelOrchestrator = Depends(get_orchestrator),
) -> GenerateReelResponse:
    name = (request.celebrity_name or "").strip()
    if not name:
        raise ValidationError("Missing celebrityName")

    try:
        reel = await orchestrator.generate_and_upload_reel(name)
    except Exception as e:
        logger.error(f"Reel generation failed for {name}: {e}")
        raise GenerationFailedError() from e

    logger.info(f"Reel ready for {name}: {reel.key}")
    return GenerateReelResponse(success=True)


@router.get(
    "",
    response_model=ReelFeedResponse,
    summary="Reel Feed",
    description="Paginated reels with short-lived playback URLs.",
)
async def list_reels(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=5, ge=1, le=50),
    token: Optional[str] = Query(default=None),
    session: Optional[str] = Query(default=None),
    feed: FeedProvider = Depends(get_feed_provider),
) -> JSONResponse:
    try:
        result = await feed.list_reels(limit, cursor=token or None, session=session)
    except ReelError as e:
        logger.error(f"Error fetching videos: {e}")
        raise FeedUnavailableError(detail=e.message) from e
    except Exception as e:
        logger.error(f"Error fetching videos: {e}")
        raise FeedUnavailableError(detail=str(e)) from e

    pagination = Pagination(
        page=page,
        limit=limit,
        has_more=result.has_more,
        next_token=result.next_cursor,
    )

    body = ReelFeedResponse(
        reels=[ReelItem(**item.to_dict()) for item in result.items],
        pagination=pagination,
        message=EMPTY_FEED_MESSAGE if result.is_exhausted else None,
    )

    content = body.model_dump(by_alias=True)
    if content["message"] is None:
        del content["message"]
    return JSONResponse(content=content, headers=CORS_HEADERS)


@router.options("", include_in_schema=False)
async def reels_preflight() -> Response:
    """CORS preflight for the feed."""
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={**CORS_HEADERS, "Access-Control-Max-Age": "86400"},
    )
