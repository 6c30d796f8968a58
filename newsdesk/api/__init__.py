"""
Newsdesk API Module

FastAPI backend providing REST endpoints for:
- Story CRUD and list views
- Health and database connectivity checks
"""
