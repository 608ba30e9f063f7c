# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Iterator
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

os.environ.setdefault("ENVIRONMENT", "test")

from catalog_api.config.settings import get_settings  # noqa: E402
from catalog_api.domain.entities.product import ProductRecord  # noqa: E402
from catalog_api.infrastructure.database.models.base import Base  # noqa: E402
from catalog_api.infrastructure.database.models.catalog import Product  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached Settings singleton around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def product_records() -> list[ProductRecord]:
    """Three products in data-source order."""
    created = datetime(2026, 1, 1, tzinfo=UTC)
    return [
        ProductRecord(id=1, name="A", price=Decimal("9.99"), description="first", created_at=created),
        ProductRecord(id=2, name="B", price=Decimal("19.50"), created_at=created),
        ProductRecord(id=3, name="C", price=Decimal("0.00")),
    ]


@pytest_asyncio.fixture
async def sqlite_sessionmaker(
    tmp_path: Path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """File-backed SQLite database with the catalog schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    finally:
        await engine.dispose()


@pytest.fixture
def seed_products(
    sqlite_sessionmaker: async_sessionmaker[AsyncSession],
) -> Callable[[list[tuple[int, str, str]]], Awaitable[None]]:
    """Return a coroutine that inserts ``(id, name, price)`` rows in the given order."""

    async def _seed(rows: list[tuple[int, str, str]]) -> None:
        async with sqlite_sessionmaker() as session:
            session.add_all(
                Product(id=pid, name=name, price=Decimal(price), description=f"{name} description")
                for pid, name, price in rows
            )
            await session.commit()

    return _seed
