"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from fastapi import Header, HTTPException

from figurevault.search.service import SearchService

# Global service instance (set during application lifespan)
_service: SearchService | None = None

USER_ID_HEADER = "X-User-Id"


def set_search_service(service: SearchService | None) -> None:
    """Set the global search service (called during app lifespan)."""
    global _service
    _service = service


def get_search_service() -> SearchService:
    """Get the global search service.

    Raises:
        RuntimeError: If the service is not initialized.
    """
    if _service is None:
        raise RuntimeError("Search service not initialized. Is the server running?")
    return _service


def get_current_user_id(x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER)) -> str:
    """Caller identity, as set by the authentication layer in front of this service."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="User not authenticated")
    return x_user_id
