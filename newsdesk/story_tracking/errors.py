"""
Story Tracking Errors

Each error carries the HTTP status and user-facing message the API
returns for it. Anything that is not a StoryError is an unexpected
failure and surfaces as a 500.
"""

from typing import Dict, Optional


class StoryError(Exception):
    """Base class for expected story failures."""

    status_code: int = 500
    message: str = "Story operation failed"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, str]] = None):
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)


class StoryValidationError(StoryError):
    """Candidate story failed field validation.

    `details` maps a dotted field path (e.g. "attachments.0.url") to a message.
    """

    status_code = 400
    message = "Validation error"

    def __init__(self, details: Dict[str, str]):
        super().__init__(details=details)


class InvalidStoryIdError(StoryError):
    """Identifier is not a well-formed story id."""

    status_code = 400
    message = "Invalid story ID"

    def __init__(self, story_id):
        self.story_id = story_id
        super().__init__()


class StoryNotFoundError(StoryError):
    status_code = 404
    message = "Story not found"

    def __init__(self, story_id):
        self.story_id = story_id
        super().__init__()


class DuplicateSlugError(StoryError):
    """Unique constraint on slug was violated."""

    status_code = 409
    message = "A story with this slug already exists"

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__()
