"""
Story API response envelopes.

Every response shares the shape {success, data?, error?, details?}.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from newsdesk.story_tracking.models import Story


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")


class StoryEnvelope(BaseModel):
    success: bool = True
    data: Story


class StoryListEnvelope(BaseModel):
    success: bool = True
    data: List[Story]
    pagination: PaginationInfo


class DeleteConfirmation(BaseModel):
    message: str


class DeleteEnvelope(BaseModel):
    success: bool = True
    data: DeleteConfirmation


class ErrorEnvelope(BaseModel):
    """Failure response. `details` maps field paths to messages for 400s."""

    success: bool = False
    error: str
    details: Optional[Dict[str, str]] = None
