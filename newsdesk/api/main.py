"""
Newsdesk API - Main Application

FastAPI application providing REST endpoints for managing editorial
stories.

Run with:
    uvicorn newsdesk.api.main:app --reload --port 8000

API Documentation available at:
    - Swagger UI: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from newsdesk import __version__
from newsdesk.logging_utils import configure_api_logging

# Load .env from project root before anything reads the environment
load_dotenv(Path(__file__).parent.parent.parent / ".env")

# File + safe stream logging (survives stdout/pipe issues)
configure_api_logging()

from newsdesk.api.routers import health, stories
from newsdesk.api.routers.stories import error_response
from newsdesk.db.connection import DatabaseHandle
from newsdesk.story_tracking.services.story_validation import format_validation_errors

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:8501",  # Streamlit default
    "http://127.0.0.1:8501",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def get_cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or DEFAULT_CORS_ORIGINS


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks."""
    handle: DatabaseHandle = app.state.db_handle
    if os.getenv("NEWSDESK_INIT_SCHEMA", "false").lower() == "true":
        try:
            handle.init_schema()
        except Exception as e:
            # Startup continues; requests will surface store errors as 500s
            logger.error(f"Failed to apply story schema on startup: {e}")
    yield
    handle.close()


# Create FastAPI application
app = FastAPI(
    lifespan=lifespan,
    title="Newsdesk API",
    description="""
    Administration API for editorial stories.

    ## Features

    - **Stories**: create, list (filters + pagination), view, replace, delete
    - **Health**: liveness and database connectivity checks

    All story responses share the envelope `{success, data?, error?, details?}`.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# One lazily-connected pool per process, shared by every request
app.state.db_handle = DatabaseHandle()

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same 400 envelope as field validation."""
    return error_response(400, "Validation error", format_validation_errors(exc.errors()))


# Register routers
app.include_router(health.router)
app.include_router(stories.router)


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": "Newsdesk API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
