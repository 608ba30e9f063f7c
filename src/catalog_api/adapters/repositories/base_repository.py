# src/catalog_api/adapters/repositories/base_repository.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""
BaseRepository: shared foundation for catalog repositories.

Purpose:
    * Deterministic ordering helper (primary-key tie-breaker).
    * Fetch helper over scalar result sets.

Layer: adapters / repositories

Notes:
    * No business logic, no domain decisions.
    * Repositories never commit; use cases own transactions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):  # noqa: UP046
    """Base class for all repositories."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: Async SQLAlchemy session bound to the target database.
        """
        self._session: AsyncSession = session

    @staticmethod
    def order_by_pk(
        stmt: Select[Any],
        pk_col: Any,
        *,
        ascending: bool = True,
    ) -> Select[Any]:
        """Apply ordering by primary key only."""
        return stmt.order_by(pk_col.asc() if ascending else pk_col.desc())

    async def fetch_all(self, stmt: Select[Any]) -> list[TModel]:
        """Execute a statement and return all rows as a list."""
        res = await self._session.execute(stmt)
        return list(res.scalars().all())
