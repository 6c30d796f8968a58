"""
Newsdesk Admin

Streamlit application for managing editorial stories.

Run with:
    streamlit run frontend/app.py

Requires FastAPI backend running on localhost:8000
"""

import streamlit as st

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Newsdesk",
    page_icon="📰",
    layout="wide",
    initial_sidebar_state="expanded",
)

from api_client import NewsdeskAPI

# Initialize API client in session state
if "api" not in st.session_state:
    st.session_state.api = NewsdeskAPI()


def main():
    """Main app entry point."""
    st.title("Newsdesk")
    st.markdown("*Editorial story tracking*")

    # Check API health
    api = st.session_state.api
    try:
        health = api.health_full()
        if health["status"] == "healthy":
            st.success("API connected")
        else:
            st.warning(f"API status: {health['status']}")
    except Exception:
        st.error(f"Cannot connect to API at {api.base_url}")
        st.info("Start the API with: `uvicorn newsdesk.api.main:app --reload --port 8000`")
        st.stop()

    st.markdown("---")
    st.markdown("""
    ### Quick Links

    Use the sidebar to navigate:
    - **Stories** - Browse, search and filter stories
    - **Story Detail** - View a story with its team, sources and timeline
    - **Story Editor** - Create a new story or edit an existing one
    """)

    if st.button("Browse stories", type="primary"):
        st.switch_page("pages/1_Stories.py")


if __name__ == "__main__":
    main()
