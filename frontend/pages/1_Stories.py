"""
Stories Page

Browse stories with search, filters and pagination.
"""

import streamlit as st
import pandas as pd
from datetime import datetime

# Add parent dir to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api_client import NewsdeskAPI

st.set_page_config(page_title="Stories - Newsdesk", page_icon="📰", layout="wide")

# Initialize API client
if "api" not in st.session_state:
    st.session_state.api = NewsdeskAPI()

api = st.session_state.api

STATUS_OPTIONS = ["", "draft", "active", "archived", "completed"]
PRIORITY_OPTIONS = ["", "low", "medium", "high", "urgent"]
PAGE_SIZE = 20

if "stories_page" not in st.session_state:
    st.session_state.stories_page = 1


def _reset_page():
    """Any filter change starts again from page 1."""
    st.session_state.stories_page = 1


def _reset_filters():
    st.session_state.filter_search = ""
    st.session_state.filter_status = ""
    st.session_state.filter_priority = ""
    st.session_state.filter_category = ""
    _reset_page()


def _option_label(value: str) -> str:
    return value.title() if value else "All"


def _format_timestamp(value) -> str:
    if not value:
        return "-"
    return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")


def render_filters():
    col1, col2, col3, col4 = st.columns([2, 1, 1, 1])
    with col1:
        st.text_input("Search", key="filter_search", placeholder="Search stories...", on_change=_reset_page)
    with col2:
        st.selectbox("Status", STATUS_OPTIONS, key="filter_status", format_func=_option_label, on_change=_reset_page)
    with col3:
        st.selectbox("Priority", PRIORITY_OPTIONS, key="filter_priority", format_func=_option_label, on_change=_reset_page)
    with col4:
        st.text_input("Category", key="filter_category", placeholder="e.g. Politics", on_change=_reset_page)

    has_active_filters = any(
        st.session_state.get(key)
        for key in ("filter_search", "filter_status", "filter_priority", "filter_category")
    )
    if has_active_filters:
        st.button("Reset filters", on_click=_reset_filters)


def main():
    st.title("Stories")
    st.markdown("Manage and track your editorial stories")

    if st.button("New Story", type="primary"):
        st.session_state.pop("edit_story_id", None)
        st.switch_page("pages/3_Story_Editor.py")

    render_filters()

    try:
        result = api.list_stories(
            status=st.session_state.get("filter_status") or None,
            priority=st.session_state.get("filter_priority") or None,
            category=st.session_state.get("filter_category") or None,
            search=st.session_state.get("filter_search") or None,
            page=st.session_state.stories_page,
            limit=PAGE_SIZE,
        )
    except Exception as e:
        st.error(f"Failed to load stories: {e}")
        st.stop()

    stories = result["data"]
    pagination = result["pagination"]

    if not stories:
        st.info("No stories found. Adjust the filters or create a new story.")
        return

    rows = []
    for story in stories:
        rows.append({
            "Title": story["title"],
            "Status": story["status"].upper(),
            "Priority": story["priority"].upper(),
            "Category": story.get("category") or "-",
            "Tags": ", ".join(story.get("tags") or []),
            "Team": len(story.get("journalists") or []),
            "Deadline": _format_timestamp(story.get("deadline")),
            "Updated": _format_timestamp(story.get("updatedAt")),
        })

    df = pd.DataFrame(rows)
    st.dataframe(df, use_container_width=True, hide_index=True)

    # Pagination
    if pagination["totalPages"] > 1:
        col1, col2, col3 = st.columns([1, 2, 1])
        with col1:
            if st.button("Previous", disabled=pagination["page"] <= 1):
                st.session_state.stories_page = max(1, pagination["page"] - 1)
                st.rerun()
        with col2:
            st.markdown(
                f"Page {pagination['page']} of {pagination['totalPages']} "
                f"({pagination['total']} stories)"
            )
        with col3:
            if st.button("Next", disabled=pagination["page"] >= pagination["totalPages"]):
                st.session_state.stories_page = min(pagination["totalPages"], pagination["page"] + 1)
                st.rerun()

    # Open a story
    st.markdown("### Open Story")
    titles = {story["id"]: story["title"] for story in stories}
    selected_id = st.selectbox(
        "Select story",
        list(titles.keys()),
        format_func=lambda story_id: titles[story_id],
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("View details"):
            st.session_state.selected_story_id = selected_id
            st.switch_page("pages/2_Story_Detail.py")
    with col2:
        if st.button("Edit"):
            st.session_state.edit_story_id = selected_id
            st.switch_page("pages/3_Story_Editor.py")


if __name__ == "__main__":
    main()
