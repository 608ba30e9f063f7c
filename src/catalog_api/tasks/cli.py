# src/catalog_api/tasks/cli.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Catalog CLI: operational commands.

Commands:
    products list      Print the cached product list as JSON.

Environment:
    DATABASE_URL       Async SQLAlchemy URL.
    REDIS_URL          Redis URL for the product list cache.
    CACHE_FAIL_OPEN    Serve from the database when Redis is unavailable.
"""

from __future__ import annotations

import asyncio
import json

import typer

from catalog_api.application.schemas.dto.products import ProductSummaryDTO
from catalog_api.config.settings import get_settings
from catalog_api.dependencies.products import get_products_use_case
from catalog_api.domain.exceptions.base import DomainError
from catalog_api.infrastructure.caching.redis_client import close_redis
from catalog_api.infrastructure.database.session import dispose_engine
from catalog_api.infrastructure.logging.logger import configure_root_logging, get_json_logger

log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)
products_app = typer.Typer(no_args_is_help=True)
app.add_typer(products_app, name="products")


async def _list_products() -> list[ProductSummaryDTO]:
    try:
        async with get_products_use_case() as uc:
            return await uc.execute()
    finally:
        await close_redis()
        await dispose_engine()


@products_app.command("list")
def list_products(
    indent: int = typer.Option(2, min=0, help="JSON indentation (0 for compact)."),  # noqa: B008
) -> None:
    """Print the product list (id, name, price) served through the cache."""
    settings = get_settings()
    configure_root_logging(settings.log_level, service_name=settings.service_name)

    try:
        items = asyncio.run(_list_products())
    except DomainError as exc:
        log.error(
            "products.list.failed",
            extra={"extra": {"code": exc.code, "details": exc.details}},
        )
        raise typer.Exit(code=1) from exc

    log.info("products.list.done", extra={"extra": {"count": len(items)}})
    typer.echo(
        json.dumps(
            [item.model_dump(mode="json") for item in items],
            indent=indent or None,
        )
    )


if __name__ == "__main__":  # pragma: no cover
    app()
