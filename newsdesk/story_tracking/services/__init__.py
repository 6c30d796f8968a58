"""
Story Tracking Services

Service layer for the story API and CLI.
"""

from .story_query import StoryQuery, build_story_predicate
from .story_service import StoryService
from .story_validation import (
    prepare_story_for_save,
    slugify,
    validate_and_prepare,
    validate_story,
)

__all__ = [
    "StoryQuery",
    "StoryService",
    "build_story_predicate",
    "prepare_story_for_save",
    "slugify",
    "validate_and_prepare",
    "validate_story",
]
