"""
Story Editor Page

Create a new story or edit an existing one. The whole aggregate (basic
fields plus team, sources, timeline and attachments) is submitted at once.
"""

import streamlit as st
from datetime import datetime

# Add parent dir to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api_client import NewsdeskAPI, NewsdeskAPIError
from story_form import (
    ATTACHMENT_COLUMNS,
    JOURNALIST_COLUMNS,
    SOURCE_COLUMNS,
    TIMELINE_COLUMNS,
    build_story_payload,
    editor_frame,
)

st.set_page_config(page_title="Story Editor - Newsdesk", page_icon="✏️", layout="wide")

# Initialize API client
if "api" not in st.session_state:
    st.session_state.api = NewsdeskAPI()

api = st.session_state.api

STATUS_OPTIONS = ["draft", "active", "archived", "completed"]
PRIORITY_OPTIONS = ["low", "medium", "high", "urgent"]


def _load_story(story_id):
    try:
        return api.get_story(story_id)
    except NewsdeskAPIError as e:
        st.error(e.message)
    except Exception as e:
        st.error(f"Cannot connect to API: {e}")
    st.stop()


def _deadline_value(story):
    if not story.get("deadline"):
        return None
    return datetime.fromisoformat(story["deadline"].replace("Z", "+00:00")).date()


def main():
    story_id = st.session_state.get("edit_story_id")
    is_edit = bool(story_id)
    story = _load_story(story_id) if is_edit else {}

    st.title("Edit Story" if is_edit else "Create New Story")
    st.markdown(
        "Update the story information below" if is_edit
        else "Fill in the details to create a new story"
    )
    if is_edit and st.button("Start a new story instead"):
        st.session_state.pop("edit_story_id", None)
        st.rerun()

    with st.form("story_form"):
        st.subheader("Basic Information")
        title = st.text_input("Title *", value=story.get("title", ""), max_chars=200,
                              placeholder="Enter story title")
        description = st.text_area("Description", value=story.get("description") or "",
                                   max_chars=2000, placeholder="Brief description of the story")

        col1, col2, col3 = st.columns(3)
        with col1:
            status = st.selectbox("Status", STATUS_OPTIONS,
                                  index=STATUS_OPTIONS.index(story.get("status", "draft")),
                                  format_func=str.title)
        with col2:
            priority = st.selectbox("Priority", PRIORITY_OPTIONS,
                                    index=PRIORITY_OPTIONS.index(story.get("priority", "medium")),
                                    format_func=str.title)
        with col3:
            category = st.text_input("Category", value=story.get("category", "General"))

        col1, col2 = st.columns(2)
        with col1:
            tags_text = st.text_input("Tags", value=", ".join(story.get("tags") or []),
                                      help="Comma-separated, e.g. politics, city-hall")
        with col2:
            deadline = st.date_input("Deadline", value=_deadline_value(story))

        st.subheader("Team Members")
        st.caption("Rows without both a name and an email are not saved")
        journalists = st.data_editor(
            editor_frame(story.get("journalists"), JOURNALIST_COLUMNS),
            num_rows="dynamic",
            use_container_width=True,
            key="journalists_editor",
            column_config={"role": st.column_config.TextColumn("role", default="Reporter")},
        )

        st.subheader("Sources")
        st.caption("Rows without a name are not saved")
        sources = st.data_editor(
            editor_frame(story.get("sources"), SOURCE_COLUMNS),
            num_rows="dynamic",
            use_container_width=True,
            key="sources_editor",
        )

        st.subheader("Timeline")
        st.caption("Events need both a date and a description of the event")
        timeline = st.data_editor(
            editor_frame(story.get("timeline"), TIMELINE_COLUMNS),
            num_rows="dynamic",
            use_container_width=True,
            key="timeline_editor",
            column_config={"date": st.column_config.DateColumn("date")},
        )

        st.subheader("Attachments")
        st.caption("Filename and URL are required")
        attachments = st.data_editor(
            editor_frame(story.get("attachments"), ATTACHMENT_COLUMNS),
            num_rows="dynamic",
            use_container_width=True,
            key="attachments_editor",
            column_config={"url": st.column_config.LinkColumn("url")},
        )

        st.subheader("Notes")
        notes = st.text_area("Notes", value=story.get("notes") or "", label_visibility="collapsed")

        submitted = st.form_submit_button("Update Story" if is_edit else "Create Story", type="primary")

    if not submitted:
        return

    payload = build_story_payload(
        title=title,
        description=description,
        status=status,
        priority=priority,
        category=category,
        tags_text=tags_text,
        notes=notes,
        deadline=deadline,
        journalists=journalists,
        sources=sources,
        timeline=timeline,
        attachments=attachments,
        published_at=story.get("publishedAt"),
    )

    try:
        if is_edit:
            saved = api.update_story(story_id, payload)
        else:
            saved = api.create_story(payload)
    except NewsdeskAPIError as e:
        st.error(e.message)
        for field, message in e.details.items():
            st.warning(f"{field}: {message}")
        return
    except Exception as e:
        st.error(f"Failed to save story: {e}")
        return

    st.session_state.pop("edit_story_id", None)
    st.session_state.selected_story_id = saved["id"]
    st.switch_page("pages/2_Story_Detail.py")


if __name__ == "__main__":
    main()
