"""Local matcher — In-process search over the record store.

Used wherever the managed index is not: development, tests, and as the
fallback when the managed index fails. It reproduces the managed index's
set membership, not its ranking:

  - autocomplete: the query must start ``name`` or ``manufacturer``, or
    start a word in either (``(^|\\s)query``)
  - partial: the query may appear anywhere in ``name`` or ``manufacturer``
  - search: every whitespace-delimited term must appear in at least one of
    ``manufacturer``, ``name``, ``location``, ``box_number``

All matching is case-insensitive on the escaped query. Autocomplete and
partial results are sorted by name (then id); search keeps store order.
"""

from __future__ import annotations

import logging
import re

from figurevault.models.figure import FigureRecord
from figurevault.models.query import NormalizedQuery, SearchWindow
from figurevault.search.backends.base import NAME_FIELDS, SEARCHABLE_FIELDS, SearchBackend
from figurevault.store.base import RecordStore

logger = logging.getLogger(__name__)


def _field_text(record: FigureRecord, field: str) -> str:
    value = getattr(record, field, None)
    return value if isinstance(value, str) else ""


def _any_field_matches(record: FigureRecord, regex: re.Pattern[str], fields: tuple[str, ...]) -> bool:
    return any(regex.search(_field_text(record, field)) for field in fields)


def _by_name(record: FigureRecord) -> tuple[str, str]:
    return (record.name, record.id)


class LocalMatcher(SearchBackend):
    """Search backend that scans the caller's records in process.

    Args:
        store: Record store to read from.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @property
    def name(self) -> str:
        return "local"

    async def _owned_by(self, user_id: str) -> list[FigureRecord]:
        records = await self._store.find({"user_id": user_id})
        # Store filtering is trusted but not relied upon.
        return [record for record in records if record.user_id == user_id]

    async def autocomplete(self, query: NormalizedQuery, user_id: str, window: SearchWindow) -> list[FigureRecord]:
        regex = re.compile(rf"(^|\s){query.pattern}", re.IGNORECASE)
        records = await self._owned_by(user_id)
        matches = sorted((r for r in records if _any_field_matches(r, regex, NAME_FIELDS)), key=_by_name)
        logger.debug("Local autocomplete '%s': %d matches", query.text, len(matches))
        return matches[: window.limit]

    async def partial(self, query: NormalizedQuery, user_id: str, window: SearchWindow) -> list[FigureRecord]:
        regex = re.compile(query.pattern, re.IGNORECASE)
        records = await self._owned_by(user_id)
        matches = sorted((r for r in records if _any_field_matches(r, regex, NAME_FIELDS)), key=_by_name)
        logger.debug("Local partial '%s': %d matches", query.text, len(matches))
        return matches[window.offset : window.offset + window.limit]

    async def search(self, query: NormalizedQuery, user_id: str) -> list[FigureRecord]:
        regexes = [re.compile(term, re.IGNORECASE) for term in query.terms]
        records = await self._owned_by(user_id)
        matches = [
            record
            for record in records
            if all(_any_field_matches(record, regex, SEARCHABLE_FIELDS) for regex in regexes)
        ]
        logger.debug("Local search '%s' (%d terms): %d matches", query.text, len(regexes), len(matches))
        return matches
