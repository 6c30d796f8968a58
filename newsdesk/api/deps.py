"""
FastAPI Dependency Injection

Provides the process-wide database handle and the services built on it.
The handle lives on app.state (created in newsdesk.api.main) so every
request shares one lazily-connected pool.
"""

from fastapi import Depends, Request

from newsdesk.db.connection import DatabaseHandle
from newsdesk.db.story_storage import StoryStorage
from newsdesk.story_tracking.services import StoryService


def get_db_handle(request: Request) -> DatabaseHandle:
    """
    FastAPI dependency for the shared database handle.

    Usage in endpoints:
        @router.get("/items")
        def list_items(handle: DatabaseHandle = Depends(get_db_handle)):
            with handle.connection() as conn:
                ...
    """
    return request.app.state.db_handle


def get_story_service(handle: DatabaseHandle = Depends(get_db_handle)) -> StoryService:
    """Dependency for StoryService."""
    return StoryService(StoryStorage(handle))
