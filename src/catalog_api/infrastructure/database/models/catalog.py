# src/catalog_api/infrastructure/database/models/catalog.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Catalog ORM models."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

__all__ = ["Product"]


class Product(TimestampMixin, Base):
    """A sellable catalog product (table ``products``)."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(length=255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
