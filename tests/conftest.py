"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from figurevault.config.settings import Settings
from figurevault.models.figure import FigureRecord
from figurevault.store.memory import InMemoryRecordStore

USER_ID = "64b7f0c2a1d3e4f5a6b7c8d9"
OTHER_USER_ID = "64b7f0c2a1d3e4f5a6b7c8da"


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        deployment={"environment": "test"},
        observability={"log_format": "console"},
    )


@pytest.fixture
def production_settings() -> Settings:
    """Settings that select the managed index."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        deployment={"environment": "production"},
        search={"hosts": ["https://localhost:9200"]},
    )


def _figure(doc_id: str, manufacturer: str, name: str, user_id: str = USER_ID, **extra: str) -> FigureRecord:
    stamp = datetime(2024, 5, 1, tzinfo=UTC)
    return FigureRecord(
        id=doc_id,
        manufacturer=manufacturer,
        name=name,
        scale=extra.get("scale", "1/7"),
        mfc_link=f"https://myfigurecollection.net/item/{doc_id}",
        location=extra.get("location", "Shelf A"),
        box_number=extra.get("box_number", "Box 001"),
        image_url=extra.get("image_url"),
        user_id=user_id,
        created_at=stamp,
        updated_at=stamp,
    )


@pytest.fixture
def figures() -> list[FigureRecord]:
    """A small collection for two users; insertion order is not name order."""
    return [
        _figure("f001", "Good Smile Company", "Hatsune Miku", location="Shelf A", box_number="Box 001", scale="1/8"),
        _figure("f002", "Alter", "Mikasa Ackerman", location="Shelf B", box_number="Box 002"),
        _figure("f003", "Kotobukiya", "Kagamine Rin", location="Display Case", box_number="Box 003"),
        _figure("f004", "Good Smile Arts", "Asuka Langley", location="Closet", box_number="Smile Box"),
        _figure("f005", "Max Factory", "Good Night Miku", location="Shelf C", box_number="Box 005"),
        _figure("f006", "Good Smile Company", "Hatsune Miku Racing", user_id=OTHER_USER_ID, location="Shelf A"),
        _figure("f007", "Alter", "Mikasa Ackerman", user_id=OTHER_USER_ID, location="Shelf B"),
    ]


@pytest.fixture
def store(figures: list[FigureRecord]) -> InMemoryRecordStore:
    return InMemoryRecordStore(figures)


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def other_user_id() -> str:
    return OTHER_USER_ID
