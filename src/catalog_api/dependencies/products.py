# src/catalog_api/dependencies/products.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the product list.

Overview:
    Builds the :class:`GetProducts` use case from settings: a SQLAlchemy
    product repository bound to a fresh session, and a cache store.

Design:
    * Select cache implementation by environment:
        - In-memory cache when ENVIRONMENT=test (hermetic, no Redis).
        - RedisJsonCache otherwise, namespaced by CACHE_NAMESPACE.
    * TTL and failure policy come from Settings and are passed to the use
      case as plain values.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.adapters.repositories.product_repository import SqlAlchemyProductRepository
from catalog_api.application.interfaces.cache_port import CachePort
from catalog_api.application.use_cases.products.get_products import GetProducts
from catalog_api.config.settings import Settings, get_settings
from catalog_api.infrastructure.caching.json_cache import RedisJsonCache
from catalog_api.infrastructure.caching.memory_cache import InMemoryJsonCache
from catalog_api.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

_memory_cache: InMemoryJsonCache | None = None


def build_cache(settings: Settings) -> CachePort:
    """Return the cache store selected by environment.

    The in-memory store is a process-wide instance so repeated use case
    builds in one test session share entries.
    """
    global _memory_cache
    if settings.is_test:
        if _memory_cache is None:
            _memory_cache = InMemoryJsonCache()
        return _memory_cache
    return RedisJsonCache(namespace=settings.cache_namespace)


def build_get_products(
    session: AsyncSession,
    settings: Settings | None = None,
    *,
    cache: CachePort | None = None,
) -> GetProducts:
    """Construct a :class:`GetProducts` bound to ``session``.

    Args:
        session: Async session for the product repository.
        settings: Settings override; defaults to :func:`get_settings`.
        cache: Cache store override; defaults to :func:`build_cache`.

    Returns:
        GetProducts: Configured use case.
    """
    settings = settings or get_settings()
    return GetProducts(
        SqlAlchemyProductRepository(session),
        cache if cache is not None else build_cache(settings),
        ttl=settings.product_list_cache_ttl_s,
        fail_open=settings.cache_fail_open,
    )


@asynccontextmanager
async def get_products_use_case(
    settings: Settings | None = None,
) -> AsyncGenerator[GetProducts, None]:
    """Yield a configured GetProducts with its own database session."""
    settings = settings or get_settings()
    async with get_db_session() as session:
        logger.debug(
            "products.use_case.built",
            extra={"extra": {"environment": settings.environment.value}},
        )
        yield build_get_products(session, settings)
