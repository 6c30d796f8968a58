"""Database module for Newsdesk."""

from .connection import DatabaseHandle, get_connection_string

__all__ = [
    "DatabaseHandle",
    "get_connection_string",
]
