"""Base search backend — Abstract interface shared by the local matcher and the managed index.

Both implementations answer the same three operations so the search service
can hold either one and call it the same way. A backend receives inputs that
are already normalized: a validated user id, a ``NormalizedQuery`` that
passed the minimum-length gate, and a clamped ``SearchWindow``.

Backends return raw records in their own shape; projection to the public
result happens in ``figurevault.search.projector``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from figurevault.models.query import NormalizedQuery, SearchWindow

# Fields the general search operation matches against.
SEARCHABLE_FIELDS = ("manufacturer", "name", "location", "box_number")

# Fields the autocomplete and partial operations match against.
NAME_FIELDS = ("name", "manufacturer")


class SearchBackend(ABC):
    """Abstract base class for search backends.

    All backends must implement:
      - autocomplete(): word-wheel suggestions on name/manufacturer
      - partial(): substring matches on name/manufacturer, paginated
      - search(): multi-term search across all searchable fields

    Every result must belong to ``user_id``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique backend name (e.g., 'local', 'opensearch')."""

    async def initialize(self) -> None:
        """Prepare the backend (connections, clients). Called once at startup."""

    async def shutdown(self) -> None:
        """Release resources held by the backend."""

    @abstractmethod
    async def autocomplete(self, query: NormalizedQuery, user_id: str, window: SearchWindow) -> list[Any]:
        """Return word-wheel matches, at most ``window.limit`` of them."""

    @abstractmethod
    async def partial(self, query: NormalizedQuery, user_id: str, window: SearchWindow) -> list[Any]:
        """Return substring matches, skipping ``window.offset`` then taking ``window.limit``."""

    @abstractmethod
    async def search(self, query: NormalizedQuery, user_id: str) -> list[Any]:
        """Return records where every query term matches some searchable field."""
