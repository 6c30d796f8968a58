"""
Story Storage Integration Tests

Runs StoryStorage against a real PostgreSQL database. Requires
NEWSDESK_TEST_DATABASE_URL pointing at a disposable database; the
stories table is emptied before each test.

Run with: NEWSDESK_TEST_DATABASE_URL=postgresql://localhost/newsdesk_test pytest -m integration
"""

import pytest
from datetime import datetime, timezone

from newsdesk.db.connection import DatabaseHandle
from newsdesk.db.story_storage import StoryPredicate, StoryStorage
from newsdesk.story_tracking.errors import DuplicateSlugError
from newsdesk.story_tracking.services import StoryQuery, StoryService
from newsdesk.story_tracking.services.story_validation import validate_and_prepare

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def handle(test_database_url):
    handle = DatabaseHandle(dsn=test_database_url, min_connections=1, max_connections=4)
    handle.init_schema()
    yield handle
    handle.close()


@pytest.fixture
def storage(handle):
    with handle.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE stories")
    return StoryStorage(handle)


def test_create_and_read_back(storage):
    document = validate_and_prepare({
        "title": "City Hall Scandal",
        "tags": ["city", "corruption"],
        "journalists": [{"name": "Ana", "email": "ana@paper.com"}],
        "timeline": [{"date": "2025-02-01T00:00:00Z", "event": "Leak"}],
        "attachments": [{"filename": "memo.pdf", "url": "https://example.com/memo.pdf"}],
        "deadline": "2025-04-01T00:00:00Z",
    })

    created = storage.create(document)
    story = storage.find_by_id(str(created.id))

    assert story.slug == "city-hall-scandal"
    assert story.tags == ["city", "corruption"]
    assert story.journalists[0].role == "Reporter"
    assert story.timeline[0].date == datetime(2025, 2, 1, tzinfo=timezone.utc)
    assert story.deadline == datetime(2025, 4, 1, tzinfo=timezone.utc)
    assert story.created_at == story.updated_at


def test_unique_slug(storage):
    storage.create(validate_and_prepare({"title": "Budget Vote"}))

    with pytest.raises(DuplicateSlugError):
        storage.create(validate_and_prepare({"title": "budget vote"}))

    assert storage.count(StoryPredicate()) == 1


def test_update_touches_updated_at_only(storage):
    created = storage.create(validate_and_prepare({"title": "Budget Vote"}))

    updated = storage.update_by_id(
        created.id, validate_and_prepare({"title": "Budget Vote", "status": "active"}, current=created)
    )

    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at
    assert updated.status == "active"


def test_delete(storage):
    created = storage.create(validate_and_prepare({"title": "Budget Vote"}))

    assert storage.delete_by_id(created.id) is True
    assert storage.delete_by_id(created.id) is False
    assert storage.find_by_id(created.id) is None


def test_search_and_paging(storage):
    service = StoryService(storage)
    for i in range(25):
        service.create({"title": f"Budget line {i}"})
    service.create({"title": "Weather", "tags": ["BUDGET-adjacent"]})
    service.create({"title": "Transit", "description": "100% ridership_up"})

    first = service.list(StoryQuery.from_params(search="budget", limit=20))
    second = service.list(StoryQuery.from_params(search="budget", page=2, limit=20))
    literal = service.list(StoryQuery.from_params(search="0% r"))
    wildcard = service.list(StoryQuery.from_params(search="_"))

    assert (first.total, first.total_pages) == (26, 2)
    assert len(first.items) == 20
    assert len(second.items) == 6
    assert [s.title for s in literal.items] == ["Transit"]
    assert [s.title for s in wildcard.items] == ["Transit"]
