# src/catalog_api/application/use_cases/products/get_products.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""
Use Case: Get Products

Purpose:
    Return the catalog product list projected onto ``id``, ``name`` and
    ``price``, served through a read-through cache under the key
    ``productList``.

Layer: application/use_cases
"""

from __future__ import annotations

from catalog_api.application.interfaces.cache_port import CachePort
from catalog_api.application.schemas.dto.products import ProductSummaryDTO
from catalog_api.application.services.read_through_cache import ReadThroughCache
from catalog_api.domain.entities.product import ProductRecord
from catalog_api.domain.interfaces.repositories.product_repository import ProductRepository
from catalog_api.infrastructure.caching.json_cache import TTL_PRODUCT_LIST_S

PRODUCT_LIST_CACHE_KEY = "productList"


def _to_summary(record: ProductRecord) -> ProductSummaryDTO:
    """Project a product record onto the summary fields."""
    return ProductSummaryDTO(id=record.id, name=record.name, price=record.price)


class GetProducts:
    """Use case to fetch the product list.

    Args:
        repository: Product data source.
        cache: Cache store for the projected list.
        ttl: Lifetime of the cached list in seconds.
        fail_open: Serve from the data source when the cache store fails.

    Raises:
        DataSourceError: If the product data source fails (nothing is cached).
        CacheStoreError: If the cache store fails and ``fail_open`` is False.
    """

    def __init__(
        self,
        repository: ProductRepository,
        cache: CachePort,
        *,
        ttl: int = TTL_PRODUCT_LIST_S,
        fail_open: bool = False,
    ) -> None:
        self._repository = repository
        self._read_through = ReadThroughCache(cache, ttl=ttl, fail_open=fail_open)

    async def execute(self) -> list[ProductSummaryDTO]:
        """Return the product summaries in data-source order."""
        return await self._read_through.get_or_load(
            PRODUCT_LIST_CACHE_KEY,
            self._repository.list_all,
            _to_summary,
            encode=ProductSummaryDTO.to_cache_payload,
            decode=ProductSummaryDTO.from_cache_payload,
        )
