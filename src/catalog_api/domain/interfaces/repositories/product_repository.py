# src/catalog_api/domain/interfaces/repositories/product_repository.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Domain-facing interface for product repositories.

Notes:
    * This interface is persistence-agnostic; implementations may use
      SQLAlchemy, another ORM, or a raw driver.
    * The concrete adapter in ``adapters/repositories/product_repository.py``
      is expected to satisfy this protocol.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from catalog_api.domain.entities.product import ProductRecord


class ProductRepository(Protocol):
    """Domain-level contract for the product data source."""

    async def list_all(self) -> Sequence[ProductRecord]:
        """Return every product in a deterministic order.

        Returns:
            Ordered product records (possibly empty).

        Raises:
            DataSourceError: If the underlying store cannot be queried.
        """
        raise NotImplementedError
