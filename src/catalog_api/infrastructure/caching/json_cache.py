# src/catalog_api/infrastructure/caching/json_cache.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""JSON Cache (Redis-backed).

Synopsis:
    Thin adapter that implements the application CachePort Protocol on top of
    the shared Redis client provided by `infrastructure/caching/redis_client.py`.

Design:
    * Uses the global Redis client via `get_redis_client()`.
    * Pure JSON (utf-8) serialization; no pickle.
    * Key policy: the namespace prefix owns service + resource + version
      (`catalog:products:v1`); callers pass the tail (e.g. `productList`).
    * Vendor failures (`redis.RedisError`, undecodable payloads) are raised
      as `CacheStoreError` so the read-through policy can act on them.

Layer:
    infrastructure/caching

See Also:
    - catalog_api.infrastructure.caching.redis_client
    - catalog_api.application.interfaces.cache_port.CachePort
"""

from __future__ import annotations

import json
import time
from contextlib import suppress
from typing import Any

from redis.exceptions import RedisError

from catalog_api.application.interfaces.cache_port import CachePort
from catalog_api.domain.exceptions.catalog import CacheStoreError
from catalog_api.infrastructure.caching.redis_client import get_redis_client
from catalog_api.infrastructure.observability.metrics import (
    get_cache_operation_duration_seconds,
    get_cache_operations_total,
)

__all__ = [
    "RedisJsonCache",
    "TTL_PRODUCT_LIST_S",
]

#: Default lifetime of the cached product list (seconds).
TTL_PRODUCT_LIST_S = 300


class RedisJsonCache(CachePort):
    """Redis-backed implementation of the CachePort Protocol.

    Keys are built as ``{namespace}:{key}``.
    """

    def __init__(self, *, namespace: str = "catalog:products:v1") -> None:
        """Initialize the cache adapter.

        Args:
            namespace: Prefix applied to all keys to avoid collisions.
        """
        self._ns = namespace.strip(":")

    @property
    def namespace(self) -> str:
        """Return the key prefix used by this adapter."""
        return self._ns

    def _k(self, key: str) -> str:
        """Build a namespaced key.

        Args:
            key: Unqualified cache key (resource-specific tail).

        Returns:
            Fully namespaced cache key.
        """
        return f"{self._ns}:{key.lstrip(':')}"

    def _observe(self, operation: str, hit: str, start: float) -> None:
        duration = time.perf_counter() - start
        with suppress(Exception):
            get_cache_operation_duration_seconds().labels(
                operation=operation,
                namespace=self._ns,
                hit=hit,
            ).observe(duration)
            get_cache_operations_total().labels(
                operation=operation,
                namespace=self._ns,
                hit=hit,
            ).inc()

    async def get_json(self, key: str) -> Any | None:
        """Get a JSON-serialized value by key.

        Args:
            key: Unqualified cache key.

        Returns:
            Deserialized value if present, else None.

        Raises:
            CacheStoreError: On Redis failure or a payload that is not JSON.
        """
        start = time.perf_counter()
        hit_label = "false"
        full_key = self._k(key)

        try:
            raw = await get_redis_client().get(full_key)
            if raw is None:
                return None
            value = json.loads(raw)
            hit_label = "true"
            return value
        except RedisError as exc:
            hit_label = "error"
            raise CacheStoreError(
                "Cache read failed",
                details={"key": full_key, "operation": "get_json"},
            ) from exc
        except json.JSONDecodeError as exc:
            hit_label = "error"
            raise CacheStoreError(
                "Cached payload is not valid JSON",
                details={"key": full_key, "operation": "get_json"},
            ) from exc
        finally:
            self._observe("get_json", hit_label, start)

    async def set_json(self, key: str, value: Any, *, ttl: int) -> None:
        """Set a JSON-serialized value with TTL.

        Args:
            key: Unqualified cache key.
            value: JSON-serializable value.
            ttl: Time-to-live in seconds; ``<= 0`` skips the write.

        Raises:
            CacheStoreError: On Redis failure.
        """
        start = time.perf_counter()
        full_key = self._k(key)
        hit_label = "n/a"

        try:
            if ttl <= 0:
                return
            await get_redis_client().set(full_key, json.dumps(value), ex=ttl)
        except RedisError as exc:
            hit_label = "error"
            raise CacheStoreError(
                "Cache write failed",
                details={"key": full_key, "operation": "set_json", "ttl": ttl},
            ) from exc
        finally:
            self._observe("set_json", hit_label, start)
