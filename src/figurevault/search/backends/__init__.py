"""Search backends — the local matcher and the managed index.

Implement ``SearchBackend`` to plug in another engine.
"""

from figurevault.search.backends.base import SearchBackend
from figurevault.search.backends.local import LocalMatcher
from figurevault.search.backends.managed import ManagedIndexBackend

__all__ = ["LocalMatcher", "ManagedIndexBackend", "SearchBackend"]
