"""Tests for the telemetry primitives."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from linkstrength.services.result import ServiceResult
from linkstrength.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    yield
    disable_telemetry()


@traced
def _op() -> ServiceResult:
    with trace_span("inner") as span:
        if span:
            span.note(items=3)
    return ServiceResult(ok=True, op="op")


class TestSpan:
    def test_duration_zero_until_ended(self) -> None:
        span = Span(name="s")
        assert span.elapsed_ms == 0.0
        span.close()
        assert span.elapsed_ms >= 0.0

    def test_as_dict_omits_empty(self) -> None:
        span = Span(name="s")
        span.close()
        assert set(span.as_dict()) == {"name", "elapsed_ms"}


class TestTraced:
    def test_disabled_adds_no_meta(self) -> None:
        assert _op().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()
        tree = _op().meta["telemetry"]  # type: ignore[index]
        assert tree["name"].endswith("_op")
        assert tree["children"][0]["name"] == "inner"
        assert tree["children"][0]["notes"] == {"items": 3}

    def test_trace_span_outside_traced_call(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None
