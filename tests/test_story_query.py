"""
Story Query Tests

Tests for list-view parameter parsing and the story predicate.
Run with: pytest tests/test_story_query.py -v
"""

import pytest
from datetime import datetime, timezone
from uuid import uuid4

from newsdesk.db.story_storage import StoryPredicate, escape_like
from newsdesk.story_tracking.models import Story
from newsdesk.story_tracking.services.story_query import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    StoryQuery,
    build_story_predicate,
    get_max_page_limit,
    parse_positive_int,
)


def _story(**overrides):
    now = datetime(2025, 3, 1, tzinfo=timezone.utc)
    fields = {
        "id": uuid4(),
        "title": "Untitled",
        "slug": "untitled",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Story(**fields)


class TestParsePositiveInt:
    """Tests for lenient page/limit parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("3", 3),
        (7, 7),
        (None, 5),
        ("", 5),
        ("abc", 5),
        ("0", 5),
        ("-2", 5),
        ("2.5", 5),
    ])
    def test_values(self, value, expected):
        assert parse_positive_int(value, 5) == expected


class TestStoryQuery:
    """Tests for StoryQuery.from_params."""

    def test_defaults(self):
        query = StoryQuery.from_params()

        assert query.page == DEFAULT_PAGE == 1
        assert query.limit == DEFAULT_LIMIT == 20
        assert query.skip == 0

    def test_skip(self):
        query = StoryQuery.from_params(page="3", limit="20")

        assert query.skip == 40

    def test_invalid_page_and_limit_fall_back(self):
        query = StoryQuery.from_params(page="zero", limit="-5")

        assert query.page == 1
        assert query.limit == 20

    def test_limit_is_capped(self):
        query = StoryQuery.from_params(limit="5000", max_limit=100)

        assert query.limit == 100

    def test_cap_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("STORIES_MAX_PAGE_LIMIT", "50")

        assert get_max_page_limit() == 50
        assert StoryQuery.from_params(limit="75").limit == 50

    def test_default_cap(self, monkeypatch):
        monkeypatch.delenv("STORIES_MAX_PAGE_LIMIT", raising=False)

        assert get_max_page_limit() == 100

    def test_blank_filters_are_dropped(self):
        query = StoryQuery.from_params(status="", category="  ", search=" budget ")

        assert query.status is None
        assert query.category is None
        assert query.search == "budget"

    def test_build_predicate(self):
        query = StoryQuery.from_params(status="active", priority="high", category="Politics", search="vote")

        assert build_story_predicate(query) == StoryPredicate(
            status="active", priority="high", category="Politics", search="vote"
        )


class TestWhereClause:
    """Tests for SQL rendering of the predicate."""

    def test_unfiltered(self):
        assert StoryPredicate().where_clause() == ("", [])

    def test_exact_filters_are_anded(self):
        clause, values = StoryPredicate(status="active", category="Politics").where_clause()

        assert clause == "WHERE status = %s AND category = %s"
        assert values == ["active", "Politics"]

    def test_search_spans_title_description_and_tags(self):
        clause, values = StoryPredicate(search="budget").where_clause()

        assert "title ILIKE %s" in clause
        assert "description ILIKE %s" in clause
        assert "unnest(tags)" in clause
        assert values == ["%budget%"] * 3

    def test_search_combined_with_filter(self):
        clause, values = StoryPredicate(priority="urgent", search="vote").where_clause()

        assert clause.startswith("WHERE priority = %s AND (")
        assert values[0] == "urgent"

    def test_search_wildcards_are_literal(self):
        _, values = StoryPredicate(search="50%_off").where_clause()

        assert values[0] == "%50\\%\\_off%"

    def test_escape_like_backslash(self):
        assert escape_like("a\\b") == "a\\\\b"


class TestPredicateMatches:
    """Tests for in-memory predicate evaluation."""

    def test_search_hits_any_field(self):
        predicate = StoryPredicate(search="budget")
        title_hit = _story(title="City Budget Vote")
        description_hit = _story(description="the BUDGET shortfall")
        tag_hit = _story(tags=["budget"])
        miss = _story(title="Weather", description="rain", tags=["local"])

        assert predicate.matches(title_hit)
        assert predicate.matches(description_hit)
        assert predicate.matches(tag_hit)
        assert not predicate.matches(miss)

    def test_filters_are_anded(self):
        predicate = StoryPredicate(status="active", priority="high")

        assert predicate.matches(_story(status="active", priority="high"))
        assert not predicate.matches(_story(status="active", priority="low"))
        assert not predicate.matches(_story(status="draft", priority="high"))

    def test_category_exact_match(self):
        predicate = StoryPredicate(category="Politics")

        assert predicate.matches(_story(category="Politics"))
        assert not predicate.matches(_story(category="politics"))

    def test_empty_predicate_matches_all(self):
        assert StoryPredicate().matches(_story())
