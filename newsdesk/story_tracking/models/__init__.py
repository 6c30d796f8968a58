"""
Story Tracking Models

Pydantic models for the story aggregate: the Story document with its
embedded journalists, sources, timeline events and attachments.

Wire names follow the admin frontend (camelCase for the timestamp
fields); Python attributes stay snake_case via field aliases.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import StoryPriority, StoryStatus

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
DEFAULT_CATEGORY = "General"
DEFAULT_JOURNALIST_ROLE = "Reporter"

TITLE_REQUIRED_MESSAGE = "Please provide a title for this story"
TITLE_TOO_LONG_MESSAGE = f"Title cannot be more than {TITLE_MAX_LENGTH} characters"
DESCRIPTION_TOO_LONG_MESSAGE = (
    f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters"
)


def _blank_to_none(value):
    """Blank form inputs for optional timestamps mean 'not set'."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _default_if_blank(value, default: str):
    """null or blank input for a defaulted field means 'use the default'."""
    if _blank_to_none(value) is None:
        return default
    return value


class Journalist(BaseModel):
    """Team member on a story. Kept only when both name and email are set."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: str = DEFAULT_JOURNALIST_ROLE

    @field_validator("role", mode="before")
    @classmethod
    def validate_role_default(cls, value):
        return _default_if_blank(value, DEFAULT_JOURNALIST_ROLE)


class Source(BaseModel):
    """Story source. Kept only when name is set."""

    name: Optional[str] = None
    contact: Optional[str] = None
    notes: Optional[str] = None


class TimelineEvent(BaseModel):
    """Dated event in the story's timeline. Kept only when date and event are set."""

    date: Optional[datetime] = None
    event: Optional[str] = None
    description: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_blank_date(cls, value):
        return _blank_to_none(value)


class Attachment(BaseModel):
    """External file reference (no file storage, URL only)."""

    filename: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    type: Optional[str] = None


class StoryBase(BaseModel):
    """Story fields shared by input, stored and response shapes."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    status: StoryStatus = StoryStatus.DRAFT
    priority: StoryPriority = StoryPriority.MEDIUM
    category: str = DEFAULT_CATEGORY
    tags: List[str] = Field(default_factory=list)
    journalists: List[Journalist] = Field(default_factory=list)
    sources: List[Source] = Field(default_factory=list)
    timeline: List[TimelineEvent] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    notes: Optional[str] = None
    published_at: Optional[datetime] = Field(None, alias="publishedAt")
    deadline: Optional[datetime] = None


class StoryInput(StoryBase):
    """Candidate story as submitted by a client (create or full replacement).

    Unknown keys (id, slug, timestamps echoed back by the edit form) are
    ignored; slug is always derived server-side.
    """

    title: str = Field(default="", validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def validate_title_present(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(TITLE_REQUIRED_MESSAGE)
        return value

    @field_validator("title")
    @classmethod
    def validate_title_length(cls, value: str) -> str:
        if len(value) > TITLE_MAX_LENGTH:
            raise ValueError(TITLE_TOO_LONG_MESSAGE)
        return value

    @field_validator("description")
    @classmethod
    def validate_description_length(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(DESCRIPTION_TOO_LONG_MESSAGE)
        return value

    @field_validator("category", mode="before")
    @classmethod
    def validate_category_default(cls, value):
        return _default_if_blank(value, DEFAULT_CATEGORY)

    @field_validator("published_at", "deadline", mode="before")
    @classmethod
    def validate_blank_timestamps(cls, value):
        return _blank_to_none(value)


class StoryDocument(StoryBase):
    """Validated, pruned story ready to be written, with its derived slug."""

    slug: str


class Story(StoryBase):
    """Full story aggregate as stored."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    slug: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class StoryListResponse(BaseModel):
    """One page of stories plus pagination metadata."""

    items: List[Story]
    page: int
    limit: int
    total: int
    total_pages: int
