"""Record store interface.

The search subsystem never writes records. It needs exactly one capability
from whatever persists them: fetch every record whose fields equal a set of
given values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from figurevault.models.figure import FigureRecord


class RecordStore(ABC):
    """Read-only access to figure records."""

    @abstractmethod
    async def find(self, criteria: Mapping[str, Any]) -> list[FigureRecord]:
        """Return all records whose fields equal every value in ``criteria``.

        Records come back in store order (insertion order for stores that
        keep one).

        Args:
            criteria: Field name to required value, e.g. ``{"user_id": "..."}``.
        """
