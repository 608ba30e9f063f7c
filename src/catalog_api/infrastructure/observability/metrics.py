# src/catalog_api/infrastructure/observability/metrics.py
# Copyright (c) Catalog API.
# SPDX-License-Identifier: MIT
"""Prometheus metrics utilities (registry-aware).

Every collector is exposed through an accessor function that returns a
singleton bound to the **current** ``prometheus_client.REGISTRY``. Tests that
swap the default registry get fresh collectors on the next accessor call and
never hit duplicate-registration errors.

Collectors:
    * ``cache_operation_duration_seconds`` / ``cache_operations_total``:
      per-operation latency and count for cache store adapters.
    * ``read_through_requests_total``: hit/miss/failure outcomes of the
      read-through component.
    * ``data_source_latency_seconds``: latency of product data source calls.

Example:
    get_read_through_requests_total().labels(key="productList", outcome="hit").inc()
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final, TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Histogram

_log = logging.getLogger(__name__)

_BUCKETS: Final[tuple[float, ...]] = (
    0.001,
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    0.500,
    1.000,
    2.500,
    5.000,
)

_TCollector = TypeVar("_TCollector", Counter, Histogram)

_registry_id: int | None = None
_collectors: dict[str, Counter | Histogram] = {}
_lock = threading.RLock()


def _ensure_registry() -> None:
    """Drop cached collectors if the active registry changed."""
    global _registry_id
    with _lock:
        rid = id(prom.REGISTRY)
        if _registry_id != rid:
            _collectors.clear()
            _registry_id = rid


def _lookup_existing(name: str, kind: type[_TCollector]) -> _TCollector | None:
    """Return a collector already registered on the active registry, if any."""
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            col = mapping.get(name)
            if isinstance(col, kind):
                return col
    return None


def _get_or_create(
    kind: type[_TCollector],
    name: str,
    help_text: str,
    labelnames: tuple[str, ...],
    **kwargs: object,
) -> _TCollector:
    """Get or create a registry-bound collector with stable identity.

    Strategy:
        1. Return from module cache if present for the active registry.
        2. If the registry already has a collector by this name, reuse it.
        3. Otherwise register a new collector on the active registry.
        4. On a concurrent duplicate registration, retry step 2.
    """
    _ensure_registry()
    with _lock:
        cached = _collectors.get(name)
        if isinstance(cached, kind):
            return cached

        existing = _lookup_existing(name, kind)
        if existing is not None:
            _collectors[name] = existing
            return existing

        try:
            col = kind(name, help_text, labelnames, registry=prom.REGISTRY, **kwargs)
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing(name, kind)
                if again is not None:
                    _collectors[name] = again
                    return again
            _log.exception("Failed to register Prometheus collector %s", name)
            raise
        _collectors[name] = col
        return col


# ---------------------------------------------------------------------------
# Cache metrics
# ---------------------------------------------------------------------------


def get_cache_operation_duration_seconds() -> Histogram:
    """Return histogram for cache operation latency.

    Labels:
        operation: Cache operation name (``get_json`` / ``set_json``).
        namespace: Cache namespace/prefix.
        hit: ``true``/``false``/``n/a``.
    """
    return _get_or_create(
        Histogram,
        "cache_operation_duration_seconds",
        "Latency (seconds) of cache operations.",
        ("operation", "namespace", "hit"),
        buckets=_BUCKETS,
    )


def get_cache_operations_total() -> Counter:
    """Return counter for cache operations (same labels as the histogram)."""
    return _get_or_create(
        Counter,
        "cache_operations_total",
        "Total cache operations by type/namespace.",
        ("operation", "namespace", "hit"),
    )


def get_read_through_requests_total() -> Counter:
    """Return counter for read-through outcomes.

    Labels:
        key: Cache key (unnamespaced).
        outcome: ``hit`` | ``miss`` | ``load_error`` | ``cache_error``.
    """
    return _get_or_create(
        Counter,
        "read_through_requests_total",
        "Read-through cache requests by key and outcome.",
        ("key", "outcome"),
    )


# ---------------------------------------------------------------------------
# Data source metrics
# ---------------------------------------------------------------------------


def get_data_source_latency_seconds() -> Histogram:
    """Return histogram for data source call latency.

    Labels:
        source: Data source name (e.g. ``products``).
        operation: Repository method (e.g. ``list_all``).
        result: ``success`` | ``error``.
    """
    return _get_or_create(
        Histogram,
        "data_source_latency_seconds",
        "Latency (seconds) of data source calls.",
        ("source", "operation", "result"),
        buckets=_BUCKETS,
    )
