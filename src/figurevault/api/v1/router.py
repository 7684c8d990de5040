"""API v1 Router — Figure search endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from figurevault.api.v1.endpoints.search import router as search_router

router = APIRouter(tags=["v1"])
router.include_router(search_router)
