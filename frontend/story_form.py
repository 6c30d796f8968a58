"""
Story form helpers.

Converts the editor page's widgets (text inputs + dynamic tables) into
the aggregate payload the API expects, and back.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

JOURNALIST_COLUMNS = ["name", "email", "role"]
SOURCE_COLUMNS = ["name", "contact", "notes"]
TIMELINE_COLUMNS = ["date", "event", "description"]
ATTACHMENT_COLUMNS = ["filename", "url", "type"]


def parse_tags(text: str) -> List[str]:
    """Comma-separated input -> trimmed, non-empty tags."""
    return [tag.strip() for tag in (text or "").split(",") if tag.strip()]


def _clean_cell(value) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime().isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def records_from_editor(df: Optional[pd.DataFrame], columns: List[str]) -> List[Dict[str, Any]]:
    """
    Rows from a st.data_editor table as plain dicts.

    Missing cells become "" so the server's pruning rules decide which
    rows to keep; fully blank rows are dropped here.
    """
    if df is None or df.empty:
        return []
    records = []
    for row in df.reindex(columns=columns).to_dict("records"):
        record = {column: _clean_cell(row.get(column)) for column in columns}
        if any(value != "" for value in record.values()):
            records.append(record)
    return records


def editor_frame(rows: Optional[List[Dict[str, Any]]], columns: List[str]) -> pd.DataFrame:
    """Initial table contents for st.data_editor."""
    df = pd.DataFrame(rows or [], columns=columns)
    if "date" in columns:
        df["date"] = pd.to_datetime(df["date"], errors="coerce", utc=True).dt.date
    return df


def build_story_payload(
    title: str,
    description: str,
    status: str,
    priority: str,
    category: str,
    tags_text: str,
    notes: str,
    deadline: Optional[date],
    journalists: Optional[pd.DataFrame] = None,
    sources: Optional[pd.DataFrame] = None,
    timeline: Optional[pd.DataFrame] = None,
    attachments: Optional[pd.DataFrame] = None,
    published_at: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble the full aggregate submitted on create and on edit."""
    return {
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "category": category,
        "tags": parse_tags(tags_text),
        "notes": notes,
        "deadline": deadline.isoformat() if deadline else None,
        "publishedAt": published_at,
        "journalists": records_from_editor(journalists, JOURNALIST_COLUMNS),
        "sources": records_from_editor(sources, SOURCE_COLUMNS),
        "timeline": records_from_editor(timeline, TIMELINE_COLUMNS),
        "attachments": records_from_editor(attachments, ATTACHMENT_COLUMNS),
    }
