# src/catalog_api/application/schemas/dto/products.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Application DTOs for the product list.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import ConfigDict

from catalog_api.application.schemas.dto.base import BaseDTO


class ProductSummaryDTO(BaseDTO):
    """Projection of a product record onto ``id``, ``name`` and ``price``.

    Field values are copied from the record unchanged; whitespace in
    ``name`` is preserved.

    Attributes:
        id: Data-source identifier.
        name: Display name.
        price: Unit price.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=False)

    id: int
    name: str
    price: Decimal

    def to_cache_payload(self) -> dict[str, Any]:
        """Serialize into a JSON-safe mapping (price as a decimal string)."""
        return {"id": self.id, "name": self.name, "price": str(self.price)}

    @classmethod
    def from_cache_payload(cls, payload: Any) -> ProductSummaryDTO:
        """Reconstitute a summary from a cached mapping."""
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            price=Decimal(str(payload["price"])),
        )
