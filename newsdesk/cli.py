#!/usr/bin/env python
"""
Newsdesk CLI - schema setup and quick story listings.

Usage:
    python -m newsdesk.cli init-db                    # Apply schema.sql
    python -m newsdesk.cli stories                    # Latest stories
    python -m newsdesk.cli stories --status active    # Filtered
    python -m newsdesk.cli stories --search budget --page 2
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from newsdesk.db.connection import DatabaseHandle
from newsdesk.db.story_storage import StoryStorage
from newsdesk.logging_utils import configure_safe_logging
from newsdesk.story_tracking.services import StoryQuery, StoryService

logger = logging.getLogger(__name__)


def cmd_init_db(args, handle: DatabaseHandle) -> int:
    """Apply the story schema."""
    handle.init_schema()
    print("Schema applied.")
    return 0


def cmd_stories(args, handle: DatabaseHandle) -> int:
    """Print one page of stories."""
    service = StoryService(StoryStorage(handle))
    query = StoryQuery.from_params(
        status=args.status,
        priority=args.priority,
        category=args.category,
        search=args.search,
        page=args.page,
        limit=args.limit,
    )
    result = service.list(query)

    if not result.items:
        print("No stories found.")
        return 0

    print(f"\n{'Title':<50} {'Status':<10} {'Priority':<8} {'Category':<15} {'Updated':<16}")
    print("-" * 103)
    for story in result.items:
        title = story.title if len(story.title) <= 48 else story.title[:45] + "..."
        print(
            f"{title:<50} {story.status.value:<10} {story.priority.value:<8} "
            f"{story.category:<15} {story.updated_at:%Y-%m-%d %H:%M}"
        )
    print(f"\nPage {result.page} of {result.total_pages} ({result.total} stories)\n")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Newsdesk story administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Apply the story schema")

    p_stories = subparsers.add_parser("stories", help="List stories")
    p_stories.add_argument("--status", help="draft, active, archived or completed")
    p_stories.add_argument("--priority", help="low, medium, high or urgent")
    p_stories.add_argument("--category")
    p_stories.add_argument("--search", help="Match title, description or tags")
    p_stories.add_argument("--page", type=int, default=1)
    p_stories.add_argument("--limit", type=int, default=20)

    args = parser.parse_args(argv)

    load_dotenv(Path(__file__).parent.parent / ".env")
    configure_safe_logging(logging.WARNING)

    commands = {
        "init-db": cmd_init_db,
        "stories": cmd_stories,
    }

    handle = DatabaseHandle()
    try:
        return commands[args.command](args, handle)
    finally:
        handle.close()


if __name__ == "__main__":
    sys.exit(main())
