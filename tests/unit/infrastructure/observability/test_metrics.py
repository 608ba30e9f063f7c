# tests/unit/infrastructure/observability/test_metrics.py
from __future__ import annotations

import prometheus_client as prom
import pytest

from catalog_api.infrastructure.observability.metrics import (
    get_cache_operation_duration_seconds,
    get_cache_operations_total,
    get_data_source_latency_seconds,
    get_read_through_requests_total,
)


def test_accessors_return_singletons() -> None:
    assert get_cache_operations_total() is get_cache_operations_total()
    assert get_cache_operation_duration_seconds() is get_cache_operation_duration_seconds()
    assert get_read_through_requests_total() is get_read_through_requests_total()
    assert get_data_source_latency_seconds() is get_data_source_latency_seconds()


def test_collectors_accept_labelled_observations() -> None:
    get_cache_operation_duration_seconds().labels(
        operation="get_json", namespace="ns", hit="true"
    ).observe(0.002)
    get_read_through_requests_total().labels(key="productList", outcome="hit").inc()
    get_data_source_latency_seconds().labels(
        source="products", operation="list_all", result="success"
    ).observe(0.01)


def test_registry_swap_creates_fresh_collectors(monkeypatch: pytest.MonkeyPatch) -> None:
    original = get_read_through_requests_total()
    fresh_registry = prom.CollectorRegistry()
    monkeypatch.setattr(prom, "REGISTRY", fresh_registry)

    swapped = get_read_through_requests_total()
    swapped.labels(key="k", outcome="miss").inc()

    assert swapped is not original
    assert (
        fresh_registry.get_sample_value(
            "read_through_requests_total", {"key": "k", "outcome": "miss"}
        )
        == 1.0
    )
