# src/catalog_api/infrastructure/logging/logger.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities.

This module exposes an idempotent root configurator and a per-module logger
factory that produce one JSON object per line.

Features:
    * Stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * ``service`` key taken from the configurator argument or ``SERVICE_NAME``.
    * Optional ``request_id`` enrichment via record attribute or env var.
    * Structured payloads passed as ``extra={"extra": {...}}`` are merged
      into the top-level object. Non-JSON values (``Decimal``, ``datetime``)
      are rendered with ``str``.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    log.info("products.list.done", extra={"extra": {"count": 3}})
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from typing import Any

__all__ = ["configure_root_logging", "get_json_logger"]

_REQUEST_ID_ENV_KEY = "REQUEST_ID"
_SERVICE_ENV_KEY = "SERVICE_NAME"


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys and optional extras."""

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self._service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object.

        Args:
            record: Logging record.

        Returns:
            str: JSON-encoded log line.
        """
        payload: dict[str, Any] = {
            "ts": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        service = self._service_name or os.getenv(_SERVICE_ENV_KEY)
        if service:
            payload["service"] = service

        rid: str | None = getattr(record, "request_id", None) or os.getenv(_REQUEST_ID_ENV_KEY)
        if rid:
            payload["request_id"] = rid

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)
                code = getattr(exc_value, "code", None)
                if isinstance(code, str):
                    payload["error_code"] = code

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logging(
    level: str | int | None = None,
    *,
    service_name: str | None = None,
) -> None:
    """Initialize the root logger with a JSON stream handler (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use env ``LOG_LEVEL`` or ``INFO``.
        service_name: Value for the ``service`` key. Falls back to ``SERVICE_NAME``.
    """
    root = logging.getLogger()

    env_level = os.getenv("LOG_LEVEL")
    resolved: int | str = (
        level if level is not None else (env_level.upper() if env_level else "INFO")
    )
    if isinstance(resolved, str):
        resolved = resolved.upper()
    root.setLevel(resolved)

    if root.handlers:
        # Already configured; prevent duplicate handlers on re-entry.
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter(service_name=service_name))
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module-specific logger backed by the JSON root handler.

    This does *not* implicitly configure the root logger. Call
    :func:`configure_root_logging` once at startup.

    Args:
        name: Logger name, typically ``__name__`` of the caller.

    Returns:
        logging.Logger: Configured logger.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
