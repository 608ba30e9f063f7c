# tests/unit/adapters/repositories/test_product_repository.py
from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from catalog_api.adapters.repositories.product_repository import SqlAlchemyProductRepository
from catalog_api.domain.entities.product import ProductRecord
from catalog_api.domain.exceptions.catalog import DataSourceError


@pytest.mark.asyncio
async def test_list_all_orders_by_id(sqlite_sessionmaker, seed_products) -> None:
    """Rows come back by primary key regardless of insert order."""
    await seed_products([(3, "C", "3.00"), (1, "A", "9.99"), (2, "B", "19.50")])

    async with sqlite_sessionmaker() as session:
        records = await SqlAlchemyProductRepository(session).list_all()

    assert [r.id for r in records] == [1, 2, 3]
    assert all(isinstance(r, ProductRecord) for r in records)
    first = records[0]
    assert first.name == "A"
    assert first.price == Decimal("9.99")
    assert first.description == "A description"
    assert first.created_at is not None
    assert first.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_list_all_empty_table(sqlite_sessionmaker) -> None:
    async with sqlite_sessionmaker() as session:
        assert await SqlAlchemyProductRepository(session).list_all() == []


@pytest.mark.asyncio
async def test_list_all_wraps_database_errors(sqlite_sessionmaker) -> None:
    async with sqlite_sessionmaker() as session:
        await session.execute(text("DROP TABLE products"))
        await session.commit()

        with pytest.raises(DataSourceError) as info:
            await SqlAlchemyProductRepository(session).list_all()

    assert isinstance(info.value.__cause__, OperationalError)
    assert info.value.code == "DATA_SOURCE_ERROR"
    assert info.value.details == {"source": "products", "operation": "list_all"}
