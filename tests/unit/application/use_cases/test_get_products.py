# tests/unit/application/use_cases/test_get_products.py
from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from catalog_api.application.schemas.dto.products import ProductSummaryDTO
from catalog_api.application.use_cases.products.get_products import (
    PRODUCT_LIST_CACHE_KEY,
    GetProducts,
)
from catalog_api.domain.entities.product import ProductRecord
from catalog_api.domain.exceptions.catalog import CacheStoreError, DataSourceError
from catalog_api.infrastructure.caching.json_cache import TTL_PRODUCT_LIST_S
from catalog_api.infrastructure.caching.memory_cache import InMemoryJsonCache


class RecordingCache:
    """Cache stub that tracks TTL and keys."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}

    async def get_json(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set_json(self, key: str, value: Any, *, ttl: int) -> None:
        self.data[key] = value
        self.ttls[key] = ttl


class StubRepository:
    """Product repository stub that records calls."""

    def __init__(self, records: list[ProductRecord], error: Exception | None = None) -> None:
        self.records = records
        self.error = error
        self.calls = 0

    async def list_all(self) -> list[ProductRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.mark.asyncio
async def test_get_products_projects_and_caches(product_records: list[ProductRecord]) -> None:
    cache = RecordingCache()
    repo = StubRepository(product_records)
    uc = GetProducts(repo, cache)

    items = await uc.execute()

    assert items == [
        ProductSummaryDTO(id=1, name="A", price=Decimal("9.99")),
        ProductSummaryDTO(id=2, name="B", price=Decimal("19.50")),
        ProductSummaryDTO(id=3, name="C", price=Decimal("0.00")),
    ]
    assert repo.calls == 1
    assert cache.data[PRODUCT_LIST_CACHE_KEY] == [
        {"id": 1, "name": "A", "price": "9.99"},
        {"id": 2, "name": "B", "price": "19.50"},
        {"id": 3, "name": "C", "price": "0.00"},
    ]
    assert cache.ttls[PRODUCT_LIST_CACHE_KEY] == TTL_PRODUCT_LIST_S


@pytest.mark.asyncio
async def test_get_products_serves_hit_without_repository(
    product_records: list[ProductRecord],
) -> None:
    cache = RecordingCache()
    cache.data[PRODUCT_LIST_CACHE_KEY] = [{"id": 42, "name": "Cached", "price": "5.00"}]
    repo = StubRepository(product_records)

    items = await GetProducts(repo, cache).execute()

    assert items == [ProductSummaryDTO(id=42, name="Cached", price=Decimal("5.00"))]
    assert repo.calls == 0


@pytest.mark.asyncio
async def test_get_products_round_trips_through_memory_cache(
    product_records: list[ProductRecord],
) -> None:
    repo = StubRepository(product_records)
    uc = GetProducts(repo, InMemoryJsonCache(), ttl=30)

    first = await uc.execute()
    second = await uc.execute()

    assert first == second
    assert [p.id for p in second] == [1, 2, 3]
    assert repo.calls == 1


@pytest.mark.asyncio
async def test_get_products_empty_catalog_reloads_every_call() -> None:
    repo = StubRepository([])
    uc = GetProducts(repo, RecordingCache())

    assert await uc.execute() == []
    assert await uc.execute() == []
    assert repo.calls == 2


@pytest.mark.asyncio
async def test_get_products_data_source_error_is_not_cached() -> None:
    cache = RecordingCache()
    uc = GetProducts(StubRepository([], error=DataSourceError("boom")), cache)

    with pytest.raises(DataSourceError):
        await uc.execute()
    assert cache.data == {}


def test_summary_dto_is_immutable() -> None:
    dto = ProductSummaryDTO(id=1, name="A", price=Decimal("1.00"))
    with pytest.raises(ValueError):
        dto.name = "B"  # type: ignore[misc]


class FailingCache:
    """Cache stub whose reads and writes always fail."""

    def __init__(self) -> None:
        self.calls = 0

    async def get_json(self, key: str) -> Any | None:
        self.calls += 1
        raise CacheStoreError("unreachable", details={"key": key})

    async def set_json(self, key: str, value: Any, *, ttl: int) -> None:
        self.calls += 1
        raise CacheStoreError("unreachable", details={"key": key})


@pytest.mark.asyncio
async def test_get_products_keeps_names_verbatim() -> None:
    cache = RecordingCache()
    repo = StubRepository([ProductRecord(id=1, name="  Widget ", price=Decimal("1.00"))])
    uc = GetProducts(repo, cache)

    fresh = await uc.execute()
    cached = await uc.execute()

    assert fresh[0].name == "  Widget "
    assert cached[0].name == "  Widget "
    assert cache.data[PRODUCT_LIST_CACHE_KEY][0]["name"] == "  Widget "
    assert repo.calls == 1


@pytest.mark.asyncio
async def test_get_products_fail_open_serves_repository_when_cache_is_down(
    product_records: list[ProductRecord],
) -> None:
    cache = FailingCache()
    repo = StubRepository(product_records)

    items = await GetProducts(repo, cache, fail_open=True).execute()

    assert [p.id for p in items] == [1, 2, 3]
    assert items[1] == ProductSummaryDTO(id=2, name="B", price=Decimal("19.50"))
    assert cache.calls == 2


@pytest.mark.asyncio
async def test_get_products_cache_down_raises_without_fail_open(
    product_records: list[ProductRecord],
) -> None:
    repo = StubRepository(product_records)

    with pytest.raises(CacheStoreError):
        await GetProducts(repo, FailingCache()).execute()
    assert repo.calls == 0


@pytest.mark.asyncio
async def test_get_products_malformed_entry_is_a_cache_store_error(
    product_records: list[ProductRecord],
) -> None:
    cache = RecordingCache()
    cache.data[PRODUCT_LIST_CACHE_KEY] = {"legacy": "shape"}
    repo = StubRepository(product_records)

    with pytest.raises(CacheStoreError):
        await GetProducts(repo, cache).execute()
    assert repo.calls == 0


@pytest.mark.asyncio
async def test_get_products_fail_open_replaces_malformed_entry(
    product_records: list[ProductRecord],
) -> None:
    cache = RecordingCache()
    cache.data[PRODUCT_LIST_CACHE_KEY] = [{"id": 1, "name": "A", "price": "not-a-number"}]
    repo = StubRepository(product_records)

    items = await GetProducts(repo, cache, fail_open=True).execute()

    assert [p.id for p in items] == [1, 2, 3]
    assert repo.calls == 1
    assert cache.data[PRODUCT_LIST_CACHE_KEY][0] == {"id": 1, "name": "A", "price": "9.99"}
