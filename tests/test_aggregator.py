"""Unit tests for the aggregation logic."""

from __future__ import annotations

from services.aggregator import Aggregator


def test_aggregate_empty_iterable_returns_default_summary() -> None:
    aggregator = Aggregator()

    summary = aggregator.aggregate([])

    assert summary.count == 0
    assert summary.min_value is None
    assert summary.max_value is None
    assert summary.mean_value is None


def test_aggregate_computes_statistics() -> None:
    aggregator = Aggregator()

    summary = aggregator.aggregate([73.8, 89.5, 80.0])

    assert summary.count == 3
    assert summary.min_value == 73.8
    assert summary.max_value == 89.5
    assert summary.mean_value == (73.8 + 89.5 + 80.0) / 3


def test_aggregate_consumes_generators() -> None:
    summary = Aggregator().aggregate(value / 10 for value in range(1, 5))

    assert summary.count == 4
    assert summary.min_value == 0.1
    assert summary.max_value == 0.4
