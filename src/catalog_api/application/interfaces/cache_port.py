# src/catalog_api/application/interfaces/cache_port.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Application Interface: Cache Port.

Synopsis:
    Minimal JSON cache behavior used by the read-through component. Enables
    swapping Redis, in-memory, or test doubles without touching use cases.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Keyed JSON cache with TTL semantics.

    Values are any JSON-serializable document (objects, arrays, scalars).
    Implementations apply TTL in seconds and treat ``ttl <= 0`` as "do not
    cache". Failures of the backing store surface as ``CacheStoreError``.
    """

    async def get_json(self, key: str) -> Any | None:
        """Get a JSON value by key.

        Args:
            key: Cache key (unnamespaced; adapters apply their prefix).

        Returns:
            Deserialized JSON value if present, else ``None``.

        Raises:
            CacheStoreError: If the backing store cannot be read.
        """

    async def set_json(self, key: str, value: Any, *, ttl: int) -> None:
        """Set a JSON value with TTL.

        Args:
            key: Cache key (unnamespaced; adapters apply their prefix).
            value: JSON-serializable value.
            ttl: Time-to-live in seconds.

        Raises:
            CacheStoreError: If the backing store cannot be written.
        """
