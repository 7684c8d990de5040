"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from figurevault.models.figure import FigureResult


class SearchResultsResponse(BaseModel):
    """Envelope returned by every search endpoint."""

    success: bool = Field(default=True, description="Whether the request succeeded")
    count: int = Field(description="Number of results in ``data``")
    data: list[FigureResult] = Field(default_factory=list, description="Matching figures")

    @classmethod
    def of(cls, results: list[FigureResult]) -> SearchResultsResponse:
        return cls(count=len(results), data=results)


class ErrorResponse(BaseModel):
    """Error envelope."""

    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error message")
