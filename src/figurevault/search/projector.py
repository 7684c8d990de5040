"""Result projection — maps raw backend output to ``FigureResult``.

Both backends hand back records in their own shape: the local matcher yields
``FigureRecord`` objects, the managed index yields hits with an ``_id`` and a
``_source`` body. The projector reduces either to the fixed public field set.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from figurevault.models.figure import FigureResult

_PUBLIC_FIELDS = tuple(FigureResult.model_fields)
_TIMESTAMP_FIELDS = ("created_at", "updated_at")


def project(raw: BaseModel | Mapping[str, Any], *, include_timestamps: bool = True) -> FigureResult:
    """Project a raw record onto the public result shape.

    Args:
        raw: A ``FigureRecord``/``FigureResult``, a plain mapping, or a
            managed index hit.
        include_timestamps: Keep ``created_at``/``updated_at``. General search
            results leave them out.

    Returns:
        A new ``FigureResult``; ``raw`` is not modified.
    """
    if isinstance(raw, BaseModel):
        source: Mapping[str, Any] = raw.model_dump()
        doc_id = source.get("id")
    elif "_source" in raw:
        source = raw.get("_source") or {}
        doc_id = raw.get("_id", source.get("id"))
    else:
        source = raw
        doc_id = raw.get("id", raw.get("_id"))

    fields = {key: source[key] for key in _PUBLIC_FIELDS if key in source and source[key] is not None}
    fields["id"] = str(doc_id) if doc_id is not None else ""
    fields["user_id"] = str(fields.get("user_id", ""))
    fields.setdefault("manufacturer", "")
    fields.setdefault("name", "")
    if not include_timestamps:
        for key in _TIMESTAMP_FIELDS:
            fields.pop(key, None)

    return FigureResult(**fields)


def project_all(raws: list[Any], *, include_timestamps: bool = True) -> list[FigureResult]:
    return [project(raw, include_timestamps=include_timestamps) for raw in raws]
