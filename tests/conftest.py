"""
Pytest configuration for Newsdesk tests.

Test Tier System:
- fast (default): Pure unit tests, all I/O mocked
- medium: API TestClient tests, real-database integration tests
- slow: reserved for long-running suites

Run tiers:
- pytest                          # Fast + medium (see pyproject addopts)
- pytest -m fast                  # Fast only (quick feedback)
- pytest -m medium                # Medium only

Note: Unmarked tests are auto-assigned to 'fast' tier. To add a new test:
- No marker needed for fast (unit) tests
- Add @pytest.mark.medium for API TestClient tests
- Tests marked @pytest.mark.integration (without tier) default to 'medium'

Integration tests need a disposable PostgreSQL database in
NEWSDESK_TEST_DATABASE_URL and are skipped otherwise.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Keep API test runs from writing into the shared log location
os.environ.setdefault("NEWSDESK_LOG_FILE", str(Path(os.getenv("TMPDIR", "/tmp")) / "newsdesk-test.log"))

from newsdesk.db.story_storage import StoryPredicate, parse_story_id
from newsdesk.story_tracking.errors import DuplicateSlugError
from newsdesk.story_tracking.models import Story, StoryDocument


# =============================================================================
# Tier Auto-Assignment
# =============================================================================

def pytest_collection_modifyitems(config, items):
    """
    Automatically assign tier markers to unmarked tests.

    Tests are fast by default unless explicitly marked as medium or slow.
    Tests marked with @pytest.mark.integration (but no tier) are assigned
    to 'medium'.
    """
    for item in items:
        has_tier = (
            list(item.iter_markers(name='fast')) or
            list(item.iter_markers(name='medium')) or
            list(item.iter_markers(name='slow'))
        )
        if has_tier:
            continue

        if list(item.iter_markers(name='skip')):
            continue

        if list(item.iter_markers(name='integration')):
            item.add_marker(pytest.mark.medium)
            continue

        item.add_marker(pytest.mark.fast)


# =============================================================================
# In-memory storage double
# =============================================================================

class InMemoryStoryStorage:
    """Minimal in-memory stand-in for StoryStorage.

    Mirrors the gateway contract: malformed ids are not found, slugs are
    unique, find() honours predicate/skip/limit and sorts by updated_at.
    """

    def __init__(self):
        self.stories: Dict[UUID, Story] = {}
        self.calls: List[str] = []
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _check_slug(self, slug: str, exclude: Optional[UUID] = None) -> None:
        for story in self.stories.values():
            if story.slug == slug and story.id != exclude:
                raise DuplicateSlugError(slug)

    def find_by_id(self, story_id) -> Optional[Story]:
        self.calls.append("find_by_id")
        parsed = parse_story_id(story_id)
        return self.stories.get(parsed) if parsed else None

    def find(self, predicate: StoryPredicate, sort=(("updated_at", "DESC"), ("id", "DESC")), skip=0, limit=20) -> List[Story]:
        self.calls.append("find")
        matching = [s for s in self.stories.values() if predicate.matches(s)]
        matching.sort(key=lambda s: (s.updated_at, s.id), reverse=True)
        return matching[skip:skip + limit]

    def count(self, predicate: StoryPredicate) -> int:
        self.calls.append("count")
        return sum(1 for s in self.stories.values() if predicate.matches(s))

    def create(self, document: StoryDocument) -> Story:
        self.calls.append("create")
        self._check_slug(document.slug)
        now = self._tick()
        story = Story(id=uuid4(), created_at=now, updated_at=now, **document.model_dump())
        self.stories[story.id] = story
        return story

    def update_by_id(self, story_id, document: StoryDocument) -> Optional[Story]:
        self.calls.append("update_by_id")
        parsed = parse_story_id(story_id)
        current = self.stories.get(parsed) if parsed else None
        if current is None:
            return None
        self._check_slug(document.slug, exclude=current.id)
        story = Story(
            id=current.id,
            created_at=current.created_at,
            updated_at=self._tick(),
            **document.model_dump(),
        )
        self.stories[story.id] = story
        return story

    def delete_by_id(self, story_id) -> bool:
        self.calls.append("delete_by_id")
        parsed = parse_story_id(story_id)
        return self.stories.pop(parsed, None) is not None if parsed else False


@pytest.fixture
def memory_storage():
    """Fresh in-memory story storage."""
    return InMemoryStoryStorage()


# =============================================================================
# Session-Scoped Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def project_root():
    """Return project root path (session-scoped for efficiency)."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def test_database_url():
    """DSN of a disposable database; skips the test when not configured."""
    url = os.getenv("NEWSDESK_TEST_DATABASE_URL")
    if not url:
        pytest.skip("NEWSDESK_TEST_DATABASE_URL not set")
    return url
