"""In-memory record store for development and tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from figurevault.models.figure import FigureRecord
from figurevault.store.base import RecordStore

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """A record store backed by a list.

    Args:
        records: Initial records, as ``FigureRecord`` objects or dicts.
    """

    def __init__(self, records: Iterable[FigureRecord | Mapping[str, Any]] | None = None) -> None:
        self._records: list[FigureRecord] = []
        for record in records or ():
            self.add(record)

    def add(self, record: FigureRecord | Mapping[str, Any]) -> FigureRecord:
        if not isinstance(record, FigureRecord):
            record = FigureRecord.model_validate(dict(record))
        self._records.append(record)
        return record

    async def find(self, criteria: Mapping[str, Any]) -> list[FigureRecord]:
        return [
            record
            for record in self._records
            if all(getattr(record, key, None) == value for key, value in criteria.items())
        ]

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryRecordStore:
        """Load records from a YAML or JSON file.

        The file holds either a list of records or a mapping with a
        ``figures`` list. Records may use ``id``/snake_case keys or a
        document-store export (``_id``, ``userId``, ``boxNumber``, ...).
        """
        import yaml  # type: ignore[import-untyped]

        seed_path = Path(path)
        if not seed_path.exists():
            raise FileNotFoundError(f"Seed file not found: {seed_path}")

        with open(seed_path) as f:
            data = yaml.safe_load(f) or []

        if isinstance(data, Mapping):
            data = data.get("figures", [])

        store = cls(data)
        logger.info("Loaded %d figure records from %s", len(store), seed_path)
        return store
