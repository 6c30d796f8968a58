"""
Story Tracking

System of record for editorial stories and their embedded
journalists, sources, timeline events and attachments.
"""

from .errors import (
    DuplicateSlugError,
    InvalidStoryIdError,
    StoryError,
    StoryNotFoundError,
    StoryValidationError,
)
from .models import (
    Attachment,
    Journalist,
    Source,
    Story,
    StoryDocument,
    StoryInput,
    StoryListResponse,
    TimelineEvent,
)

__all__ = [
    "Attachment",
    "DuplicateSlugError",
    "InvalidStoryIdError",
    "Journalist",
    "Source",
    "Story",
    "StoryDocument",
    "StoryError",
    "StoryInput",
    "StoryListResponse",
    "StoryNotFoundError",
    "StoryValidationError",
    "TimelineEvent",
]
