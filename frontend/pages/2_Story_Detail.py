"""
Story Detail Page

Full view of one story: overview, team, sources, timeline, attachments.
"""

import streamlit as st
import pandas as pd
from datetime import datetime

# Add parent dir to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api_client import NewsdeskAPI, NewsdeskAPIError

st.set_page_config(page_title="Story - Newsdesk", page_icon="📰", layout="wide")

# Initialize API client
if "api" not in st.session_state:
    st.session_state.api = NewsdeskAPI()

api = st.session_state.api


def _format_timestamp(value, fmt: str = "%Y-%m-%d %H:%M") -> str:
    if not value:
        return "-"
    return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(fmt)


def _current_story_id():
    """Story id from ?id=..., the list page selection, or manual input."""
    story_id = st.query_params.get("id") or st.session_state.get("selected_story_id")
    return st.text_input("Story ID", value=story_id or "").strip()


def render_section(title: str, rows, columns):
    st.markdown(f"### {title}")
    if not rows:
        st.caption(f"No {title.lower()} yet")
        return
    df = pd.DataFrame(rows).reindex(columns=columns)
    st.dataframe(df, use_container_width=True, hide_index=True)


def main():
    st.title("Story Detail")

    story_id = _current_story_id()
    if not story_id:
        st.info("Pick a story on the Stories page or paste its ID above.")
        return

    try:
        story = api.get_story(story_id)
    except NewsdeskAPIError as e:
        st.error(e.message)
        return
    except Exception as e:
        st.error(f"Cannot connect to API: {e}")
        st.stop()

    st.header(story["title"])
    st.caption(f"/{story['slug']}")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Status", story["status"].upper())
    with col2:
        st.metric("Priority", story["priority"].upper())
    with col3:
        st.metric("Category", story.get("category") or "-")
    with col4:
        st.metric("Deadline", _format_timestamp(story.get("deadline"), "%Y-%m-%d"))

    if story.get("description"):
        st.markdown(story["description"])
    if story.get("tags"):
        st.write("**Tags:** " + ", ".join(story["tags"]))

    render_section("Team", story.get("journalists"), ["name", "email", "role"])
    render_section("Sources", story.get("sources"), ["name", "contact", "notes"])

    timeline = sorted(story.get("timeline") or [], key=lambda event: event.get("date") or "")
    for event in timeline:
        event["date"] = _format_timestamp(event.get("date"), "%Y-%m-%d")
    render_section("Timeline", timeline, ["date", "event", "description"])

    attachments = story.get("attachments") or []
    st.markdown("### Attachments")
    if attachments:
        for attachment in attachments:
            label = attachment["filename"]
            if attachment.get("type"):
                label += f" ({attachment['type']})"
            st.markdown(f"- [{label}]({attachment['url']})")
    else:
        st.caption("No attachments yet")

    if story.get("notes"):
        st.markdown("### Notes")
        st.text(story["notes"])

    st.markdown("---")
    st.caption(
        f"Created {_format_timestamp(story.get('createdAt'))} · "
        f"Updated {_format_timestamp(story.get('updatedAt'))} · "
        f"Published {_format_timestamp(story.get('publishedAt'))}"
    )

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Edit story", type="primary"):
            st.session_state.edit_story_id = story["id"]
            st.switch_page("pages/3_Story_Editor.py")
    with col2:
        confirm = st.checkbox("I understand this cannot be undone")
        if st.button("Delete story", disabled=not confirm):
            try:
                api.delete_story(story["id"])
            except Exception as e:
                st.error(f"Failed to delete story: {e}")
            else:
                st.session_state.pop("selected_story_id", None)
                st.success("Story deleted")
                st.switch_page("pages/1_Stories.py")


if __name__ == "__main__":
    main()
