# src/catalog_api/adapters/repositories/product_repository.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Product repository.

Read-side access to the ``products`` table.

Responsibilities
----------------
* List every product in a deterministic order (primary key ascending).
* Map ORM rows to immutable :class:`ProductRecord` entities.
* Translate driver/ORM failures into :class:`DataSourceError`.

Layer
-----
Adapters / repositories.
"""

from __future__ import annotations

import logging
import time
from contextlib import suppress
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.domain.entities.product import ProductRecord
from catalog_api.domain.exceptions.catalog import DataSourceError
from catalog_api.infrastructure.database.models.catalog import Product
from catalog_api.infrastructure.observability.metrics import get_data_source_latency_seconds

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SqlAlchemyProductRepository(BaseRepository[Product]):
    """Repository for catalog products."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_all(self) -> list[ProductRecord]:
        """Return all products ordered by ``id`` ascending.

        Returns:
            Product records; empty when the table has no rows.

        Raises:
            DataSourceError: If the query fails.
        """
        stmt = self.order_by_pk(select(Product), Product.id)
        start = time.perf_counter()
        result = "error"
        try:
            rows = await self.fetch_all(stmt)
            result = "success"
        except SQLAlchemyError as exc:
            logger.error(
                "products.list_all.failed",
                extra={"extra": {"error": type(exc).__name__}},
            )
            raise DataSourceError(
                "Failed to list products",
                details={"source": "products", "operation": "list_all"},
            ) from exc
        finally:
            with suppress(Exception):
                get_data_source_latency_seconds().labels(
                    source="products",
                    operation="list_all",
                    result=result,
                ).observe(time.perf_counter() - start)

        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: Product) -> ProductRecord:
        """Map an ORM row to a domain record."""
        return ProductRecord(
            id=row.id,
            name=row.name,
            price=Decimal(str(row.price)),
            description=row.description,
            created_at=row.created_at,
        )
