# src/catalog_api/application/services/read_through_cache.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Application Service: Read-Through Cache.

Synopsis:
    Cache-aside helper over an arbitrary listing operation. Checks the cache
    for a key; on a miss it calls the loader, projects every element, stores
    the projected list and returns it.

Semantics:
    * A cached value is served only when it is truthy. An empty cached list
      counts as a miss, so an empty listing is re-loaded on every call.
    * Loader and projection failures propagate unchanged and leave the cache
      untouched.
    * No locking: concurrent misses may each call the loader; last write wins.
    * Cache store failures (``CacheStoreError``) propagate unless the
      instance was built with ``fail_open=True``, in which case a failed read
      is treated as a miss and a failed write is logged and skipped.
    * A cached entry that cannot be decoded is reported as ``CacheStoreError``
      and follows the same policy.

Layer:
    application/services
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from contextlib import suppress
from typing import Any, TypeVar, cast

from catalog_api.application.interfaces.cache_port import CachePort
from catalog_api.domain.exceptions.catalog import CacheStoreError
from catalog_api.infrastructure.observability.metrics import get_read_through_requests_total

__all__ = ["ReadThroughCache"]

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ReadThroughCache:
    """Read-through wrapper around a :class:`CachePort`.

    Args:
        cache: Cache store collaborator.
        ttl: Time-to-live in seconds for entries written on a miss.
        fail_open: Degrade to the loader when the cache store fails instead
            of raising ``CacheStoreError``.
    """

    def __init__(self, cache: CachePort, *, ttl: int, fail_open: bool = False) -> None:
        self._cache = cache
        self._ttl = ttl
        self._fail_open = fail_open

    async def get_or_load(
        self,
        key: str,
        load: Callable[[], Awaitable[Sequence[T]]],
        project: Callable[[T], R],
        *,
        encode: Callable[[R], Any] | None = None,
        decode: Callable[[Any], R] | None = None,
    ) -> list[R]:
        """Return the cached projection for ``key`` or compute and store it.

        Args:
            key: Non-empty cache key.
            load: Zero-argument async loader producing the source records.
            project: Pure mapping applied to each record, order preserved.
            encode: Optional per-item serializer applied before writing.
            decode: Optional per-item deserializer applied on a hit.

        Returns:
            The projected list, from cache on a hit or freshly computed.

        Raises:
            ValueError: If ``key`` is empty.
            CacheStoreError: On cache failure when ``fail_open`` is False.
            Exception: Whatever ``load`` or ``project`` raise, unchanged.
        """
        if not key:
            raise ValueError("cache key must be a non-empty string")

        cached = await self._read(key)
        if cached:
            try:
                items = self._decode(key, cached, decode)
            except CacheStoreError as exc:
                if not self._fail_open:
                    raise
                self._tolerate(key, "read_through.cache_decode_failed", exc)
            else:
                self._count(key, "hit")
                logger.debug("read_through.hit", extra={"extra": {"key": key}})
                return items

        self._count(key, "miss")
        logger.debug("read_through.miss", extra={"extra": {"key": key}})

        try:
            records = await load()
        except Exception as exc:
            self._count(key, "load_error")
            logger.warning(
                "read_through.load_failed",
                extra={"extra": {"key": key, "error": type(exc).__name__}},
            )
            raise

        projected = [project(record) for record in records]
        payload = projected if encode is None else [encode(item) for item in projected]
        await self._write(key, payload)
        return projected

    async def _read(self, key: str) -> Any | None:
        try:
            return await self._cache.get_json(key)
        except CacheStoreError as exc:
            if not self._fail_open:
                raise
            self._tolerate(key, "read_through.cache_read_failed", exc)
            return None

    async def _write(self, key: str, payload: list[Any]) -> None:
        try:
            await self._cache.set_json(key, payload, ttl=self._ttl)
        except CacheStoreError as exc:
            if not self._fail_open:
                raise
            self._tolerate(key, "read_through.cache_write_failed", exc)

    @staticmethod
    def _decode(key: str, cached: Any, decode: Callable[[Any], R] | None) -> list[R]:
        """Rebuild a cached list, raising ``CacheStoreError`` on a malformed entry."""
        if decode is None:
            return cast(list[R], cached)
        if not isinstance(cached, list):
            raise CacheStoreError(
                "Cached value is not a list",
                details={"key": key, "type": type(cached).__name__},
            )
        try:
            return [decode(item) for item in cached]
        except (TypeError, KeyError, ValueError, ArithmeticError) as exc:
            raise CacheStoreError(
                "Cached value could not be decoded",
                details={"key": key, "error": type(exc).__name__},
            ) from exc

    def _tolerate(self, key: str, event: str, exc: CacheStoreError) -> None:
        self._count(key, "cache_error")
        logger.warning(event, extra={"extra": {"key": key, "details": exc.details}})

    @staticmethod
    def _count(key: str, outcome: str) -> None:
        with suppress(Exception):
            get_read_through_requests_total().labels(key=key, outcome=outcome).inc()
