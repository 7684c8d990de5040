"""Search service — Entry point for the three figure search operations.

Request flow::

    caller → parse_user_id / normalize_query / resolve_window
           → backend chosen by select_mode (LocalMatcher | ManagedIndexBackend)
           → project → ownership guard → caller

The backend is chosen once, when the service is built, so autocomplete,
partial, and search can never disagree about which backend they use.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from figurevault.models.query import SearchMode
from figurevault.search.backends.local import LocalMatcher
from figurevault.search.backends.managed import ManagedIndexBackend
from figurevault.search.exceptions import ConfigurationError
from figurevault.search.mode import select_mode
from figurevault.search.normalizer import normalize_query, parse_user_id, resolve_window
from figurevault.search.projector import project_all

if TYPE_CHECKING:
    from figurevault.config.settings import Settings
    from figurevault.models.figure import FigureResult
    from figurevault.models.query import SearchWindow
    from figurevault.search.backends.base import SearchBackend
    from figurevault.store.base import RecordStore

logger = logging.getLogger(__name__)


class SearchService:
    """Runs figure searches against the backend selected for this deployment.

    Args:
        settings: Application settings.
        store: Record store the local matcher reads from.
        managed: Managed index backend. Required in managed mode; built from
            ``settings.search`` if omitted.
        mode: Explicit mode override. Defaults to ``select_mode(settings.deployment)``.
    """

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        managed: SearchBackend | None = None,
        mode: SearchMode | None = None,
    ) -> None:
        self.settings = settings
        self.mode = mode or select_mode(settings.deployment)
        self.local = LocalMatcher(store)

        if self.mode is SearchMode.MANAGED:
            self.backend: SearchBackend = managed or self._build_managed()
        else:
            self.backend = self.local

        logger.info("Search service using %s backend (%s mode)", self.backend.name, self.mode.value)

    def _build_managed(self) -> ManagedIndexBackend:
        cfg = self.settings.search
        if not cfg.hosts:
            raise ConfigurationError("Managed search mode requires at least one search host.")
        return ManagedIndexBackend(
            fallback=self.local,
            hosts=cfg.hosts,
            autocomplete_index=cfg.autocomplete_index,
            search_index=cfg.search_index,
            username=cfg.username,
            password=cfg.password,
            verify_certs=cfg.verify_certs,
            **cfg.extra,
        )

    async def initialize(self) -> None:
        await self.backend.initialize()

    async def shutdown(self) -> None:
        await self.backend.shutdown()

    # ── Operations ───────────────────────────────────────────────────────

    async def autocomplete(self, query: Any, user_id: Any, limit: int | None = None) -> list[FigureResult]:
        """Word-wheel suggestions as the user types.

        Args:
            query: Raw query text. Fewer than two characters returns ``[]``.
            user_id: Caller identity.
            limit: Maximum number of suggestions (default 10, capped at 50).

        Raises:
            InvalidIdentifierError: If ``user_id`` is malformed.
        """
        owner = parse_user_id(user_id)
        normalized = normalize_query(query, self.settings.search.min_query_length)
        if normalized is None:
            return []

        window = self._window(limit, 0)
        raw = await self.backend.autocomplete(normalized, owner, window)
        return self._owned(project_all(raw), owner)

    async def partial(
        self,
        query: Any,
        user_id: Any,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[FigureResult]:
        """Substring matches on name and manufacturer, paginated.

        Args:
            query: Raw query text. Fewer than two characters returns ``[]``.
            user_id: Caller identity.
            limit: Page size (default 10, capped at 50).
            offset: Number of matches to skip (negative is treated as 0).

        Raises:
            InvalidIdentifierError: If ``user_id`` is malformed.
        """
        owner = parse_user_id(user_id)
        normalized = normalize_query(query, self.settings.search.min_query_length)
        if normalized is None:
            return []

        window = self._window(limit, offset)
        raw = await self.backend.partial(normalized, owner, window)
        return self._owned(project_all(raw), owner)

    async def search(self, query: Any, user_id: Any) -> list[FigureResult]:
        """Multi-term search across manufacturer, name, location, and box number.

        Every whitespace-delimited term must match at least one of the four
        fields. Results carry no timestamps.

        Raises:
            InvalidIdentifierError: If ``user_id`` is malformed.
            IndexQueryError: If the managed index fails.
        """
        owner = parse_user_id(user_id)
        normalized = normalize_query(query, self.settings.search.min_query_length)
        if normalized is None:
            return []

        raw = await self.backend.search(normalized, owner)
        return self._owned(project_all(raw, include_timestamps=False), owner)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _window(self, limit: int | None, offset: int | None) -> SearchWindow:
        cfg = self.settings.search
        return resolve_window(limit, offset, default_limit=cfg.default_limit, max_limit=cfg.max_limit)

    @staticmethod
    def _owned(results: list[FigureResult], owner: str) -> list[FigureResult]:
        owned = [result for result in results if result.user_id == owner]
        if len(owned) != len(results):
            logger.error("Dropped %d search results not owned by %s", len(results) - len(owned), owner)
        return owned
