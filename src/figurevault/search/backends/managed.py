"""Managed index backend — Figure search on OpenSearch (v2+).

Production deployments keep a copy of every figure record in an OpenSearch
cluster. This backend issues the structured queries for the three search
operations through ``opensearch-py`` (async):

  - autocomplete: ``match_bool_prefix`` on ``name`` with one-edit fuzziness
  - partial: ``bool.should`` over ``name`` and ``manufacturer`` (relevance ranked)
  - search: one fuzzy ``multi_match`` per term in ``bool.must`` across the
    four searchable fields (max one edit, two-character exact prefix)

Every query carries a ``term`` filter on ``user_id``.

When autocomplete or partial fails for any reason, the call is re-run once on
the fallback backend (the local matcher) with the same arguments. General
search has no fallback and raises ``IndexQueryError``.

Install the dependency::

    pip install opensearch-py
"""

from __future__ import annotations

import logging
import time
from typing import Any

from figurevault.models.query import NormalizedQuery, SearchWindow
from figurevault.observability.logging import get_logger
from figurevault.search.backends.base import NAME_FIELDS, SEARCHABLE_FIELDS, SearchBackend
from figurevault.search.exceptions import ConfigurationError, ConnectionError, IndexQueryError

logger = logging.getLogger(__name__)
event_log = get_logger(__name__)


class ManagedIndexBackend(SearchBackend):
    """Search backend for an OpenSearch index of figure records.

    Args:
        fallback: Backend that serves autocomplete and partial when the index fails.
        hosts: List of OpenSearch node URLs.
        autocomplete_index: Index queried by autocomplete and partial.
        search_index: Index queried by general search.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        fallback: SearchBackend,
        hosts: list[str] | None = None,
        autocomplete_index: str = "figures_search",
        search_index: str = "figures",
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        **kwargs: Any,
    ) -> None:
        self._fallback = fallback
        self._hosts = hosts or ["https://localhost:9200"]
        self._autocomplete_index = autocomplete_index
        self._search_index = search_index
        self._username = username
        self._password = password
        self._verify_certs = verify_certs
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "opensearch"

    @property
    def fallback(self) -> SearchBackend:
        return self._fallback

    async def initialize(self) -> None:
        """Create the ``AsyncOpenSearch`` client and probe the cluster."""
        try:
            from opensearchpy import AsyncOpenSearch
        except ImportError as e:
            raise ConfigurationError("opensearch-py package is required.  Install with: pip install opensearch-py") from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
        }
        if self._username and self._password:
            client_kwargs["http_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        self._client = AsyncOpenSearch(**client_kwargs)
        try:
            info = await self._client.info()
        except Exception as e:
            raise ConnectionError(f"Failed to connect to OpenSearch: {e}") from e

        version = info.get("version", {}).get("number", "unknown")
        cluster = info.get("cluster_name", "unknown")
        logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)

    async def shutdown(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Operations ───────────────────────────────────────────────────────

    async def autocomplete(self, query: NormalizedQuery, user_id: str, window: SearchWindow) -> list[dict[str, Any]]:
        try:
            return await self._execute(self._autocomplete_index, self.autocomplete_body(query, user_id, window))
        except Exception as e:
            self._log_fallback("autocomplete", query, e)
            return await self._fallback.autocomplete(query, user_id, window)

    async def partial(self, query: NormalizedQuery, user_id: str, window: SearchWindow) -> list[dict[str, Any]]:
        try:
            return await self._execute(self._autocomplete_index, self.partial_body(query, user_id, window))
        except Exception as e:
            self._log_fallback("partial", query, e)
            return await self._fallback.partial(query, user_id, window)

    async def search(self, query: NormalizedQuery, user_id: str) -> list[dict[str, Any]]:
        try:
            return await self._execute(self._search_index, self.search_body(query, user_id))
        except IndexQueryError:
            raise
        except Exception as e:
            raise IndexQueryError(f"OpenSearch query failed: {e}") from e

    # ── Query bodies ─────────────────────────────────────────────────────

    @staticmethod
    def autocomplete_body(query: NormalizedQuery, user_id: str, window: SearchWindow) -> dict[str, Any]:
        return {
            "query": {
                "bool": {
                    "must": [{"match_bool_prefix": {"name": {"query": query.text, "fuzziness": 1}}}],
                    "filter": [{"term": {"user_id": user_id}}],
                }
            },
            "size": window.limit,
        }

    @staticmethod
    def partial_body(query: NormalizedQuery, user_id: str, window: SearchWindow) -> dict[str, Any]:
        return {
            "query": {
                "bool": {
                    "should": [{"match": {field: {"query": query.text}}} for field in NAME_FIELDS],
                    "minimum_should_match": 1,
                    "filter": [{"term": {"user_id": user_id}}],
                }
            },
            "from": window.offset,
            "size": window.limit,
        }

    @staticmethod
    def search_body(query: NormalizedQuery, user_id: str) -> dict[str, Any]:
        return {
            "query": {
                "bool": {
                    "must": [
                        {
                            "multi_match": {
                                "query": term,
                                "fields": list(SEARCHABLE_FIELDS),
                                "fuzziness": 1,
                                "prefix_length": 2,
                            }
                        }
                        for term in query.raw_terms
                    ],
                    "filter": [{"term": {"user_id": user_id}}],
                }
            },
        }

    # ── Helpers ──────────────────────────────────────────────────────────

    async def _execute(self, index: str, body: dict[str, Any]) -> list[dict[str, Any]]:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")

        start = time.monotonic()
        try:
            response = await self._client.search(index=index, body=body)
        except Exception as e:
            raise IndexQueryError(f"OpenSearch query failed: {e}") from e
        took_ms = int((time.monotonic() - start) * 1000)

        hits = list(response.get("hits", {}).get("hits", []))
        logger.debug("OpenSearch %s: %d hits in %d ms", index, len(hits), took_ms)
        return hits

    def _log_fallback(self, operation: str, query: NormalizedQuery, error: Exception) -> None:
        event_log.warning(
            "managed_index_fallback",
            operation=operation,
            query=query.text,
            fallback=self._fallback.name,
            error=str(error),
            exc_info=error,
        )
