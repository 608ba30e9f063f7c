# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""
Product Entity

Purpose:
    Immutable domain representation of a catalog product as owned by the
    product data source (no I/O).

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from .base import BaseEntity


@dataclass(frozen=True, slots=True)
class ProductRecord(BaseEntity):
    """Catalog product record.

    Args:
        id: Data-source identifier.
        name: Display name (non-empty).
        price: Unit price (non-negative).
        description: Optional long-form description.
        created_at: Optional creation timestamp (normalized to UTC).

    Raises:
        ValueError: If invariants are violated (e.g., negative price).
    """

    id: int
    name: str
    price: Decimal
    description: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if self.created_at is not None and self.created_at.tzinfo is None:
            object.__setattr__(self, "created_at", self.created_at.replace(tzinfo=UTC))
