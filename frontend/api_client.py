"""
Newsdesk API Client

Wrapper for the FastAPI backend. Unwraps the {success, data, error,
details} envelope and raises NewsdeskAPIError on failures.
"""

import os
from typing import Any, Dict, Optional

import requests


class NewsdeskAPIError(Exception):
    """API call failed. `details` carries per-field validation messages."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class NewsdeskAPI:
    """
    Client for the Newsdesk FastAPI backend.

    Usage:
        api = NewsdeskAPI()
        page = api.list_stories(status="active", page=2)
        story = api.get_story(page["data"][0]["id"])
    """

    def __init__(self, base_url: Optional[str] = None):
        """
        Initialize API client.

        Args:
            base_url: API base URL. Defaults to API_URL or localhost:8000.
        """
        self.base_url = (base_url or os.getenv("API_URL", "http://localhost:8000")).rstrip("/")
        self.timeout = 30

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Dict] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        response = requests.request(method, url, params=params, json=data, timeout=self.timeout)
        try:
            body = response.json()
        except ValueError:
            raise NewsdeskAPIError(
                f"Unexpected response from API ({response.status_code})",
                status_code=response.status_code,
            )

        if not response.ok or body.get("success") is False:
            raise NewsdeskAPIError(
                body.get("error") or f"Request failed ({response.status_code})",
                status_code=response.status_code,
                details=body.get("details"),
            )
        return body

    # Health endpoints
    def health_check(self) -> Dict[str, Any]:
        """Check API health."""
        return self._request("GET", "/health")

    def health_full(self) -> Dict[str, Any]:
        """Full health check including database."""
        return self._request("GET", "/health/full")

    # Story endpoints
    def list_stories(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        """List stories. Returns {"data": [...], "pagination": {...}}."""
        params = {"page": page, "limit": limit}
        filters = {"status": status, "priority": priority, "category": category, "search": search}
        params.update({key: value for key, value in filters.items() if value})
        body = self._request("GET", "/stories", params=params)
        return {"data": body["data"], "pagination": body["pagination"]}

    def get_story(self, story_id: str) -> Dict[str, Any]:
        """Get one story."""
        return self._request("GET", f"/stories/{story_id}")["data"]

    def create_story(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a story from a full aggregate payload."""
        return self._request("POST", "/stories", data=payload)["data"]

    def update_story(self, story_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Replace a story with a full aggregate payload."""
        return self._request("PUT", f"/stories/{story_id}", data=payload)["data"]

    def delete_story(self, story_id: str) -> Dict[str, Any]:
        """Delete a story."""
        return self._request("DELETE", f"/stories/{story_id}")["data"]
