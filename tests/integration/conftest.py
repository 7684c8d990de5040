"""Integration test fixtures — OpenSearch with seeded figure records.

Expects a single-node OpenSearch on localhost:9200 (security plugin disabled),
for example:

    docker run -p 9200:9200 -e discovery.type=single-node \
        -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import pytest

OPENSEARCH_URL = "http://localhost:9200"
AUTOCOMPLETE_INDEX = "it_figures_search"
SEARCH_INDEX = "it_figures"

USER_ID = "64b7f0c2a1d3e4f5a6b7c8d9"
OTHER_USER_ID = "64b7f0c2a1d3e4f5a6b7c8da"

MOCK_FIGURES: list[dict[str, Any]] = [
    {"id": "i001", "manufacturer": "Good Smile Company", "name": "Hatsune Miku", "location": "Shelf A",
     "box_number": "Box 001", "scale": "1/8", "user_id": USER_ID},
    {"id": "i002", "manufacturer": "Alter", "name": "Mikasa Ackerman", "location": "Shelf B",
     "box_number": "Box 002", "scale": "1/7", "user_id": USER_ID},
    {"id": "i003", "manufacturer": "Max Factory", "name": "Good Night Miku", "location": "Shelf C",
     "box_number": "Box 005", "scale": "1/7", "user_id": USER_ID},
    {"id": "i004", "manufacturer": "Good Smile Company", "name": "Hatsune Miku Racing", "location": "Shelf A",
     "box_number": "Box 009", "scale": "1/7", "user_id": OTHER_USER_ID},
]

_MAPPINGS = {
    "mappings": {
        "properties": {
            "manufacturer": {"type": "text"},
            "name": {"type": "text"},
            "location": {"type": "text"},
            "box_number": {"type": "text"},
            "scale": {"type": "keyword"},
            "user_id": {"type": "keyword"},
        }
    }
}


def _wait_for_service(url: str, timeout: float = 30.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            if httpx.get(url, timeout=2.0).status_code < 500:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(1.0)
    return False


async def _seed_opensearch(host: str = OPENSEARCH_URL) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=10.0) as client:
        for index in (AUTOCOMPLETE_INDEX, SEARCH_INDEX):
            await client.delete(f"/{index}")
            await client.put(f"/{index}", json=_MAPPINGS)
            for figure in MOCK_FIGURES:
                body = {k: v for k, v in figure.items() if k != "id"}
                await client.put(f"/{index}/_doc/{figure['id']}", json=body)
            await client.post(f"/{index}/_refresh")


@pytest.fixture(scope="session")
def opensearch_ready() -> str:
    """Seed OpenSearch once per session; skip if it is not running."""
    if not _wait_for_service(OPENSEARCH_URL, timeout=5.0):
        pytest.skip("OpenSearch not available at localhost:9200")
    asyncio.run(_seed_opensearch())
    return OPENSEARCH_URL


@pytest.fixture
async def managed_backend(opensearch_ready: str):
    from figurevault.search.backends.local import LocalMatcher
    from figurevault.search.backends.managed import ManagedIndexBackend
    from figurevault.store.memory import InMemoryRecordStore

    backend = ManagedIndexBackend(
        fallback=LocalMatcher(InMemoryRecordStore(MOCK_FIGURES)),
        hosts=[opensearch_ready],
        autocomplete_index=AUTOCOMPLETE_INDEX,
        search_index=SEARCH_INDEX,
        verify_certs=False,
    )
    await backend.initialize()
    yield backend
    await backend.shutdown()
