# src/catalog_api/infrastructure/caching/memory_cache.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""In-memory JSON cache for tests and local development."""

from __future__ import annotations

import asyncio
import copy
import time
from collections.abc import Callable
from typing import Any

from catalog_api.application.interfaces.cache_port import CachePort

__all__ = ["InMemoryJsonCache"]


class InMemoryJsonCache(CachePort):
    """A small, concurrency-safe in-memory cache.

    Entries expire on a monotonic clock (injectable for tests) and are purged
    on every write. Values are deep-copied on the way in and out so callers
    never share mutable state with the store.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, tuple[float, Any]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def get_json(self, key: str) -> Any | None:
        """Return a JSON value by key if present and not expired."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                self._store.pop(key, None)
                return None
            return copy.deepcopy(value)

    async def set_json(self, key: str, value: Any, *, ttl: int) -> None:
        """Store a JSON value under the given key; ``ttl <= 0`` is a no-op."""
        if ttl <= 0:
            return
        now = self._clock()
        async with self._lock:
            self._purge_expired(now)
            self._store[key] = (now + float(ttl), copy.deepcopy(value))

    def _purge_expired(self, now: float) -> None:
        for stale in [k for k, (expires_at, _) in self._store.items() if expires_at <= now]:
            del self._store[stale]
