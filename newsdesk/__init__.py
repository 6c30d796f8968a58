"""
Newsdesk

Editorial story tracking: a REST API over the story store plus a
Streamlit admin frontend (see frontend/).
"""

__version__ = "0.1.0"
