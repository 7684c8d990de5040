"""Query and pagination models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SearchMode(str, Enum):
    """Which backend executes a search."""

    MANAGED = "managed"
    LOCAL = "local"


class NormalizedQuery(BaseModel):
    """A query that passed the minimum-length gate.

    ``pattern`` and ``terms`` are escaped so that a pattern engine matches
    them literally; ``text`` and ``raw_terms`` keep the user's input for
    engines that analyse text instead of interpreting it.
    """

    text: str = Field(description="Trimmed query text")
    pattern: str = Field(description="Trimmed query with pattern metacharacters escaped")
    raw_terms: list[str] = Field(default_factory=list, description="Whitespace-delimited terms of text")
    terms: list[str] = Field(default_factory=list, description="Escaped whitespace-delimited terms")


class SearchWindow(BaseModel):
    """Pagination window for autocomplete and partial search."""

    limit: int = Field(default=10, ge=1, description="Maximum number of results")
    offset: int = Field(default=0, ge=0, description="Number of results to skip")
