"""Search endpoints — word-wheel suggestions, partial matches, and multi-field search.

All routes require the caller identity header. Query and pagination
parameters are validated here and rejected with 400; the search service
clamps them again on its own.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from figurevault.api.deps import get_current_user_id, get_search_service
from figurevault.models.response import ErrorResponse, SearchResultsResponse
from figurevault.search.exceptions import InvalidIdentifierError
from figurevault.search.service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid query, pagination, or user identifier"},
    401: {"model": ErrorResponse, "description": "Missing caller identity"},
    500: {"model": ErrorResponse, "description": "Search failed"},
}


def _validate_query(query: str | None) -> str:
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter is required")
    if len(query.strip()) < 2:
        raise HTTPException(status_code=400, detail="Query must be at least 2 characters")
    return query


def _validate_limit(limit: int | None, max_limit: int) -> int | None:
    if limit is None:
        return None
    if limit <= 0:
        raise HTTPException(status_code=400, detail="Limit must be a positive integer")
    return min(limit, max_limit)


def _validate_offset(offset: int | None) -> int:
    if offset is None:
        return 0
    if offset < 0:
        raise HTTPException(status_code=400, detail="Offset must be a non-negative integer")
    return offset


@router.get(
    "/search/suggestions",
    response_model=SearchResultsResponse,
    summary="Word-wheel suggestions",
    description="Autocomplete suggestions matching the start of a word in a figure's name or manufacturer.",
    responses=_ERROR_RESPONSES,
)
async def get_suggestions(
    q: str | None = None,
    limit: int | None = None,
    user_id: str = Depends(get_current_user_id),
    service: SearchService = Depends(get_search_service),
) -> SearchResultsResponse:
    query = _validate_query(q)
    page_size = _validate_limit(limit, service.settings.search.max_limit)
    try:
        results = await service.autocomplete(query, user_id, limit=page_size)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=400, detail="Invalid user identifier") from e
    except Exception as e:
        logger.error("Suggestions failed: %s", e, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An error occurred while fetching search suggestions",
        ) from e
    return SearchResultsResponse.of(results)


@router.get(
    "/search/partial",
    response_model=SearchResultsResponse,
    summary="Partial matches",
    description="Figures whose name or manufacturer contains the query, sorted by name and paginated.",
    responses=_ERROR_RESPONSES,
)
async def get_partial_matches(
    q: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
    user_id: str = Depends(get_current_user_id),
    service: SearchService = Depends(get_search_service),
) -> SearchResultsResponse:
    query = _validate_query(q)
    page_size = _validate_limit(limit, service.settings.search.max_limit)
    skip = _validate_offset(offset)
    try:
        results = await service.partial(query, user_id, limit=page_size, offset=skip)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=400, detail="Invalid user identifier") from e
    except Exception as e:
        logger.error("Partial search failed: %s", e, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An error occurred while fetching partial matches",
        ) from e
    return SearchResultsResponse.of(results)


@router.get(
    "/figures/search",
    response_model=SearchResultsResponse,
    summary="Search figures",
    description=(
        "Multi-term search: every word of the query must appear in the manufacturer, "
        "name, location, or box number of a figure."
    ),
    responses=_ERROR_RESPONSES,
)
async def search_figures(
    query: str | None = None,
    user_id: str = Depends(get_current_user_id),
    service: SearchService = Depends(get_search_service),
) -> SearchResultsResponse:
    if not query:
        raise HTTPException(status_code=400, detail="Search query is required")
    try:
        results = await service.search(query, user_id)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=400, detail="Invalid user identifier") from e
    except Exception as e:
        logger.error("Figure search failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Search processing failed") from e
    return SearchResultsResponse.of(results)
