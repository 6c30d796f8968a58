"""
Story Service

Canonical story state management. This is the system of record for
stories: every create and update goes through the same
validate-and-prepare step before reaching storage.
"""

import logging
import math

from newsdesk.db.story_storage import StoryStorage, parse_story_id

from ..errors import InvalidStoryIdError, StoryNotFoundError
from ..models import Story, StoryListResponse
from .story_query import LIST_SORT, StoryQuery, build_story_predicate
from .story_validation import validate_and_prepare

logger = logging.getLogger(__name__)


class StoryService:
    """
    Manages canonical story state.

    Responsibilities:
    - CRUD operations on story aggregates
    - Filtered, paginated list queries

    Id checks happen here, before any store round trip.
    """

    def __init__(self, storage: StoryStorage):
        self.storage = storage

    def create(self, payload: dict) -> Story:
        """
        Create a story from a submitted aggregate.

        Raises:
            StoryValidationError: field constraints failed
            DuplicateSlugError: another story already has this slug
        """
        document = validate_and_prepare(payload)
        story = self.storage.create(document)
        logger.info(f"Created story {story.id} ({story.slug})")
        return story

    def get(self, story_id) -> Story:
        """
        Get a story by id.

        Raises:
            InvalidStoryIdError: id is malformed
            StoryNotFoundError: no story with this id
        """
        self._require_valid_id(story_id)
        story = self.storage.find_by_id(story_id)
        if story is None:
            raise StoryNotFoundError(story_id)
        return story

    def update(self, story_id, payload: dict) -> Story:
        """Replace a story with a resubmitted aggregate.

        The slug is re-derived only when the title changed.
        """
        current = self.get(story_id)
        document = validate_and_prepare(payload, current=current)
        story = self.storage.update_by_id(story_id, document)
        if story is None:
            # Deleted between the read and the write
            raise StoryNotFoundError(story_id)
        logger.info(f"Updated story {story.id} ({story.slug})")
        return story

    def delete(self, story_id) -> None:
        """Delete a story and everything embedded in it. Not reversible."""
        self._require_valid_id(story_id)
        if not self.storage.delete_by_id(story_id):
            raise StoryNotFoundError(story_id)
        logger.info(f"Deleted story {story_id}")

    def list(self, query: StoryQuery) -> StoryListResponse:
        """List stories matching the query, most recently updated first.

        total comes from a separate count over the same predicate, so it
        stays accurate on a partial last page.
        """
        predicate = build_story_predicate(query)
        items = self.storage.find(
            predicate, sort=LIST_SORT, skip=query.skip, limit=query.limit
        )
        total = self.storage.count(predicate)
        return StoryListResponse(
            items=items,
            page=query.page,
            limit=query.limit,
            total=total,
            total_pages=math.ceil(total / query.limit),
        )

    def _require_valid_id(self, story_id) -> None:
        if parse_story_id(story_id) is None:
            raise InvalidStoryIdError(story_id)
