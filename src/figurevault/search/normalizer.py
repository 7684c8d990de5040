"""Query normalization — minimum-length gate, pattern escaping, and input clamping.

Every search operation passes its raw inputs through this module before a
backend is chosen. Nothing here raises for query text: a query that is too
short simply normalizes to ``None`` and the operation returns no results.
"""

from __future__ import annotations

import re
from typing import Any

from figurevault.models.query import NormalizedQuery, SearchWindow
from figurevault.search.exceptions import InvalidIdentifierError

# . * + ? ^ $ { } ( ) | [ ] \
_METACHARACTERS = re.compile(r"[.*+?^${}()|\[\]\\]")
_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MIN_QUERY_LENGTH = 2


def escape_pattern(text: str) -> str:
    """Backslash-escape every pattern metacharacter in ``text``."""
    return _METACHARACTERS.sub(r"\\\g<0>", text)


def normalize_query(raw: Any, min_length: int = MIN_QUERY_LENGTH) -> NormalizedQuery | None:
    """Trim and escape a raw query.

    Args:
        raw: The query as received from the caller. Non-string values are
            treated as no query.
        min_length: Minimum number of characters after trimming. Values
            below ``MIN_QUERY_LENGTH`` are raised to it.

    Returns:
        The normalized query, or ``None`` if there is nothing to search for.
    """
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if len(text) < max(min_length, MIN_QUERY_LENGTH):
        return None

    raw_terms = text.split()
    return NormalizedQuery(
        text=text,
        pattern=escape_pattern(text),
        raw_terms=raw_terms,
        terms=[escape_pattern(term) for term in raw_terms],
    )


def parse_user_id(value: Any) -> str:
    """Validate a caller identity.

    User identifiers are 24-character hexadecimal object ids. Anything else
    is rejected here, before a malformed value can reach a store filter.

    Raises:
        InvalidIdentifierError: If ``value`` is not a well-formed identifier.
    """
    if not isinstance(value, str) or not _OBJECT_ID.match(value.strip()):
        raise InvalidIdentifierError(f"Invalid user identifier: {value!r}")
    return value.strip()


def resolve_window(
    limit: int | None = None,
    offset: int | None = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> SearchWindow:
    """Clamp a caller-supplied window into the supported range.

    ``None`` falls back to the default; limits are kept within
    ``[1, max_limit]`` and a negative offset becomes 0. ``max_limit`` itself
    never exceeds ``MAX_LIMIT``.
    """
    cap = min(max_limit, MAX_LIMIT)
    resolved_limit = default_limit if limit is None else limit
    resolved_limit = max(1, min(resolved_limit, cap))
    resolved_offset = max(0, offset or 0)
    return SearchWindow(limit=resolved_limit, offset=resolved_offset)
