"""
Story API Endpoints

CRUD operations and the filtered list view for editorial stories.
Expected failures (StoryError) map to their status code; anything else
is logged and reported as a generic 500 without internal detail.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from newsdesk.api.deps import get_story_service
from newsdesk.api.schemas.stories import (
    DeleteConfirmation,
    DeleteEnvelope,
    ErrorEnvelope,
    PaginationInfo,
    StoryEnvelope,
    StoryListEnvelope,
)
from newsdesk.story_tracking.errors import StoryError
from newsdesk.story_tracking.services import StoryQuery, StoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stories", tags=["stories"])


def error_response(status_code: int, error: str, details: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Build a failure envelope response."""
    envelope = ErrorEnvelope(error=error, details=details)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


def story_error_response(error: StoryError) -> JSONResponse:
    return error_response(error.status_code, error.message, error.details)


@router.get("", response_model=StoryListEnvelope)
def list_stories(
    status: Optional[str] = Query(default=None, description="Filter by status"),
    priority: Optional[str] = Query(default=None, description="Filter by priority"),
    category: Optional[str] = Query(default=None, description="Filter by category"),
    search: Optional[str] = Query(
        default=None,
        description="Case-insensitive match on title, description and tags",
    ),
    page: Optional[str] = Query(default=None, description="Page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 20)"),
    service: StoryService = Depends(get_story_service),
):
    """
    List stories with optional filtering, most recently updated first.
    """
    try:
        query = StoryQuery.from_params(
            status=status,
            priority=priority,
            category=category,
            search=search,
            page=page,
            limit=limit,
        )
        result = service.list(query)
    except Exception:
        logger.exception("Error fetching stories")
        return error_response(500, "Failed to fetch stories")

    return StoryListEnvelope(
        data=result.items,
        pagination=PaginationInfo(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.post("", response_model=StoryEnvelope, status_code=201)
def create_story(
    payload: Dict[str, Any] = Body(...),
    service: StoryService = Depends(get_story_service),
):
    """
    Create a new story. Title is required; slug is derived from it.
    """
    try:
        story = service.create(payload)
    except StoryError as e:
        logger.info(f"Story create rejected: {e.message}")
        return story_error_response(e)
    except Exception:
        logger.exception("Error creating story")
        return error_response(500, "Failed to create story")
    return StoryEnvelope(data=story)


@router.get("/{story_id}", response_model=StoryEnvelope)
def get_story(
    story_id: str,
    service: StoryService = Depends(get_story_service),
):
    """
    Get a story by ID with all embedded rows.
    """
    try:
        story = service.get(story_id)
    except StoryError as e:
        return story_error_response(e)
    except Exception:
        logger.exception(f"Error fetching story {story_id}")
        return error_response(500, "Failed to fetch story")
    return StoryEnvelope(data=story)


@router.put("/{story_id}", response_model=StoryEnvelope)
def update_story(
    story_id: str,
    payload: Dict[str, Any] = Body(...),
    service: StoryService = Depends(get_story_service),
):
    """
    Replace a story with the submitted aggregate (all fields and child rows).
    """
    try:
        story = service.update(story_id, payload)
    except StoryError as e:
        logger.info(f"Story update rejected for {story_id}: {e.message}")
        return story_error_response(e)
    except Exception:
        logger.exception(f"Error updating story {story_id}")
        return error_response(500, "Failed to update story")
    return StoryEnvelope(data=story)


@router.delete("/{story_id}", response_model=DeleteEnvelope)
def delete_story(
    story_id: str,
    service: StoryService = Depends(get_story_service),
):
    """
    Delete a story and everything embedded in it.
    """
    try:
        service.delete(story_id)
    except StoryError as e:
        return story_error_response(e)
    except Exception:
        logger.exception(f"Error deleting story {story_id}")
        return error_response(500, "Failed to delete story")
    return DeleteEnvelope(data=DeleteConfirmation(message="Story deleted successfully"))
