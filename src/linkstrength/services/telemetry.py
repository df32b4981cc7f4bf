"""Timing spans for service calls, shown by ``--verbose``.

A disabled tracer costs one ContextVar read per call.  When enabled,
``@traced`` opens a root span around a service method, ``trace_span`` opens
child spans inside it, and the finished tree is attached to the result as
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from linkstrength.services.result import ServiceResult

_tracing: ContextVar[bool] = ContextVar("linkstrength_tracing", default=False)
_open_span: ContextVar[Span | None] = ContextVar("linkstrength_open_span", default=None)

_log = structlog.get_logger("linkstrength.telemetry")


@dataclass
class Span:
    """One timed step of a service call, with free-form notes."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    notes: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def elapsed_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def close(self) -> None:
        self.finished = time.perf_counter()

    def note(self, **values: Any) -> None:
        """Record values such as node counts or pairs kept."""
        self.notes.update(values)

    def as_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name, "elapsed_ms": round(self.elapsed_ms, 2)}
        if self.notes:
            node["notes"] = dict(self.notes)
        if self.children:
            node["children"] = [child.as_dict() for child in self.children]
        return node


@contextmanager
def _opened(span: Span) -> Generator[Span]:
    token = _open_span.set(span)
    try:
        yield span
    finally:
        span.close()
        _open_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the span currently open.

    Yields None when tracing is off or no ``@traced`` call is running.
    """
    parent = _open_span.get() if _tracing.get() else None
    if parent is None:
        yield None
        return

    child = Span(name)
    parent.children.append(child)
    with _opened(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its span tree to the ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _tracing.get():
            return func(*args, **kwargs)

        with _opened(Span(func.__qualname__)) as span:
            result = func(*args, **kwargs)

        _log.debug(
            "span.complete",
            span_name=span.name,
            elapsed_ms=round(span.elapsed_ms, 2),
            ok=getattr(result, "ok", None),
            children=len(span.children),
        )
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.as_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Switch tracing on for the current context (``--verbose``)."""
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)
