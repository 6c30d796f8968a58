"""
Database storage for story aggregates.

One row per story in the `stories` table; journalists, sources, timeline
and attachments are embedded JSONB arrays, so reads and writes always
move the whole aggregate.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

import psycopg2.errors
from psycopg2.extras import Json

from newsdesk.db.connection import DatabaseHandle
from newsdesk.story_tracking.errors import DuplicateSlugError
from newsdesk.story_tracking.models import Story, StoryDocument

logger = logging.getLogger(__name__)

STORY_COLUMNS = """
    id, title, slug, description, status, priority, category, tags,
    journalists, sources, timeline, attachments, notes,
    published_at, deadline, created_at, updated_at
"""

SORTABLE_COLUMNS = {"updated_at", "created_at", "id"}
SORT_DIRECTIONS = {"ASC", "DESC"}

SortSpec = Sequence[Tuple[str, str]]


def parse_story_id(story_id) -> Optional[UUID]:
    """Return the UUID for a well-formed story id, None otherwise."""
    if isinstance(story_id, UUID):
        return story_id
    try:
        return UUID(str(story_id))
    except (TypeError, ValueError, AttributeError):
        return None


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class StoryPredicate:
    """
    Combined filter for story list and count queries.

    Exact-match filters are ANDed. `search` is a case-insensitive
    substring match on title OR description OR any tag.
    """

    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None

    def where_clause(self) -> Tuple[str, list]:
        """Render as a parameterized WHERE clause ("" when unfiltered)."""
        conditions = []
        values: list = []

        for column in ("status", "priority", "category"):
            value = getattr(self, column)
            if value:
                conditions.append(f"{column} = %s")
                values.append(value)

        if self.search:
            pattern = f"%{escape_like(self.search)}%"
            conditions.append(
                "(title ILIKE %s OR description ILIKE %s"
                " OR EXISTS (SELECT 1 FROM unnest(tags) AS tag WHERE tag ILIKE %s))"
            )
            values.extend([pattern, pattern, pattern])

        if not conditions:
            return "", values
        return "WHERE " + " AND ".join(conditions), values

    def matches(self, story: Story) -> bool:
        """Evaluate the predicate against a story in memory."""
        for field in ("status", "priority", "category"):
            value = getattr(self, field)
            if value and getattr(story, field) != value:
                return False

        if self.search:
            needle = self.search.lower()
            haystacks = [story.title or "", story.description or "", *story.tags]
            return any(needle in text.lower() for text in haystacks)

        return True


def _order_clause(sort: SortSpec) -> str:
    parts = []
    for column, direction in sort:
        direction = direction.upper()
        if column not in SORTABLE_COLUMNS or direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unsupported sort: {column} {direction}")
        parts.append(f"{column} {direction}")
    if not parts:
        return ""
    return "ORDER BY " + ", ".join(parts)


class StoryStorage:
    """
    Persistence gateway for stories.

    Every operation borrows a connection from the handle, which creates
    the pool on first use. Malformed ids are treated as not found
    without a round trip.
    """

    def __init__(self, handle: DatabaseHandle):
        self.handle = handle

    def find_by_id(self, story_id) -> Optional[Story]:
        parsed_id = parse_story_id(story_id)
        if parsed_id is None:
            return None

        with self.handle.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT {STORY_COLUMNS} FROM stories WHERE id = %s",
                    (str(parsed_id),),
                )
                row = cur.fetchone()

        return self._row_to_story(row) if row else None

    def find(
        self,
        predicate: StoryPredicate,
        sort: SortSpec = (("updated_at", "DESC"), ("id", "DESC")),
        skip: int = 0,
        limit: int = 20,
    ) -> List[Story]:
        where_clause, values = predicate.where_clause()
        order_clause = _order_clause(sort)

        with self.handle.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(f"""
                    SELECT {STORY_COLUMNS}
                    FROM stories
                    {where_clause}
                    {order_clause}
                    LIMIT %s OFFSET %s
                """, values + [limit, skip])
                rows = cur.fetchall()

        return [self._row_to_story(row) for row in rows]

    def count(self, predicate: StoryPredicate) -> int:
        where_clause, values = predicate.where_clause()

        with self.handle.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT COUNT(*) AS count FROM stories {where_clause}", values)
                return cur.fetchone()["count"]

    def create(self, document: StoryDocument) -> Story:
        """Insert a story. Raises DuplicateSlugError if the slug is taken."""
        with self.handle.connection() as conn:
            with conn.cursor() as cur:
                try:
                    cur.execute(f"""
                        INSERT INTO stories (
                            title, slug, description, status, priority, category, tags,
                            journalists, sources, timeline, attachments, notes,
                            published_at, deadline
                        ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING {STORY_COLUMNS}
                    """, self._document_values(document))
                except psycopg2.errors.UniqueViolation as e:
                    raise DuplicateSlugError(document.slug) from e
                row = cur.fetchone()

        return self._row_to_story(row)

    def update_by_id(self, story_id, document: StoryDocument) -> Optional[Story]:
        """Replace a story's fields. Returns None if no such story."""
        parsed_id = parse_story_id(story_id)
        if parsed_id is None:
            return None

        with self.handle.connection() as conn:
            with conn.cursor() as cur:
                try:
                    cur.execute(f"""
                        UPDATE stories SET
                            title = %s,
                            slug = %s,
                            description = %s,
                            status = %s,
                            priority = %s,
                            category = %s,
                            tags = %s,
                            journalists = %s,
                            sources = %s,
                            timeline = %s,
                            attachments = %s,
                            notes = %s,
                            published_at = %s,
                            deadline = %s,
                            updated_at = NOW()
                        WHERE id = %s
                        RETURNING {STORY_COLUMNS}
                    """, self._document_values(document) + (str(parsed_id),))
                except psycopg2.errors.UniqueViolation as e:
                    raise DuplicateSlugError(document.slug) from e
                row = cur.fetchone()

        return self._row_to_story(row) if row else None

    def delete_by_id(self, story_id) -> bool:
        """Delete a story and its embedded rows. Returns False if no such story."""
        parsed_id = parse_story_id(story_id)
        if parsed_id is None:
            return False

        with self.handle.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM stories WHERE id = %s", (str(parsed_id),))
                return cur.rowcount > 0

    def _document_values(self, document: StoryDocument) -> tuple:
        return (
            document.title,
            document.slug,
            document.description,
            document.status.value,
            document.priority.value,
            document.category,
            list(document.tags),
            Json([j.model_dump(mode="json") for j in document.journalists]),
            Json([s.model_dump(mode="json") for s in document.sources]),
            Json([t.model_dump(mode="json") for t in document.timeline]),
            Json([a.model_dump(mode="json") for a in document.attachments]),
            document.notes,
            document.published_at,
            document.deadline,
        )

    def _row_to_story(self, row: dict) -> Story:
        return Story(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            description=row["description"],
            status=row["status"],
            priority=row["priority"],
            category=row["category"],
            tags=row["tags"] or [],
            journalists=row["journalists"] or [],
            sources=row["sources"] or [],
            timeline=row["timeline"] or [],
            attachments=row["attachments"] or [],
            notes=row["notes"],
            published_at=row["published_at"],
            deadline=row["deadline"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
