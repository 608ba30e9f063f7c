# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""
Catalog Domain Exceptions

Purpose:
    Failures of the collaborators behind the product list: the product data
    source and the cache store.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class DataSourceError(DomainError):
    """The product data source failed to list records."""

    code = "DATA_SOURCE_ERROR"


class CacheStoreError(DomainError):
    """The cache store failed to read or write an entry."""

    code = "CACHE_STORE_ERROR"
