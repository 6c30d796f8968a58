"""
Story Form Helper Tests

Tests for converting editor widgets into the story payload.
Run with: pytest tests/test_story_form.py -v
"""

from datetime import date
from pathlib import Path

import pandas as pd

import sys
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "frontend"))

from story_form import (
    JOURNALIST_COLUMNS,
    TIMELINE_COLUMNS,
    build_story_payload,
    editor_frame,
    parse_tags,
    records_from_editor,
)


def test_parse_tags():
    assert parse_tags(" city, budget ,, ") == ["city", "budget"]
    assert parse_tags("") == []


def test_records_drop_fully_blank_rows():
    df = pd.DataFrame([
        {"name": "Ana", "email": "ana@paper.com", "role": "Editor"},
        {"name": None, "email": None, "role": None},
        {"name": "Bo", "email": None, "role": "Reporter"},
    ])

    records = records_from_editor(df, JOURNALIST_COLUMNS)

    assert records == [
        {"name": "Ana", "email": "ana@paper.com", "role": "Editor"},
        {"name": "Bo", "email": "", "role": "Reporter"},
    ]


def test_records_fill_missing_columns():
    df = pd.DataFrame([{"name": "Ana"}])

    assert records_from_editor(df, JOURNALIST_COLUMNS) == [{"name": "Ana", "email": "", "role": ""}]


def test_records_from_empty_editor():
    assert records_from_editor(None, JOURNALIST_COLUMNS) == []
    assert records_from_editor(pd.DataFrame(columns=JOURNALIST_COLUMNS), JOURNALIST_COLUMNS) == []


def test_timeline_dates_become_iso_strings():
    df = pd.DataFrame([{"date": date(2025, 1, 2), "event": "Leak", "description": None}])

    records = records_from_editor(df, TIMELINE_COLUMNS)

    assert records == [{"date": "2025-01-02", "event": "Leak", "description": ""}]


def test_editor_frame_parses_stored_dates():
    df = editor_frame(
        [{"date": "2025-01-02T00:00:00Z", "event": "Leak", "description": None}],
        TIMELINE_COLUMNS,
    )

    assert list(df.columns) == TIMELINE_COLUMNS
    assert df.loc[0, "date"] == date(2025, 1, 2)


def test_editor_frame_empty():
    df = editor_frame(None, JOURNALIST_COLUMNS)

    assert df.empty
    assert list(df.columns) == JOURNALIST_COLUMNS


def test_build_story_payload():
    payload = build_story_payload(
        title="Budget Vote",
        description="",
        status="active",
        priority="high",
        category="Politics",
        tags_text="city, budget",
        notes="",
        deadline=date(2025, 4, 1),
        journalists=pd.DataFrame([{"name": "Ana", "email": "ana@paper.com", "role": "Reporter"}]),
    )

    assert payload["title"] == "Budget Vote"
    assert payload["tags"] == ["city", "budget"]
    assert payload["deadline"] == "2025-04-01"
    assert payload["publishedAt"] is None
    assert payload["journalists"] == [{"name": "Ana", "email": "ana@paper.com", "role": "Reporter"}]
    assert payload["sources"] == []
    assert payload["timeline"] == []
    assert payload["attachments"] == []
