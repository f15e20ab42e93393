"""Span trees for ``--verbose`` runs.

Service entry points are wrapped with :func:`traced`; inside them,
:func:`trace_span` marks the interesting steps (rule matching, ordering,
catalog checks).  The finished tree is stored under
``ServiceResult.meta["telemetry"]``.  Collection is off unless
:func:`enable_telemetry` was called, in which case the wrappers reduce to a
ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from archctl.services.result import ServiceResult

log = structlog.get_logger("archctl.telemetry")

_P = ParamSpec("_P")
_R = TypeVar("_R")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, or 0.0 while the span is still open."""
        return 0.0 if self.end_time is None else (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            node["annotations"] = self.annotations
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a step as a child of the active span.

    Yields None when telemetry is off or no :func:`traced` call is running.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return
    child = Span(name=name)
    parent.children.append(child)
    with _activate(child):
        yield child


def _with_telemetry(result: Any, span: Span) -> Any:
    if not isinstance(result, ServiceResult):
        return result
    meta = dict(result.meta or {})
    meta["telemetry"] = span.to_dict()
    return result.model_copy(update={"meta": meta})


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record *func* as a root span named after its qualified name."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        try:
            with _activate(root):
                result = func(*args, **kwargs)
        except Exception:
            log.debug("span.failed", span_name=root.name)
            raise
        log.debug(
            "span.complete",
            span_name=root.name,
            duration_ms=round(root.duration_ms, 2),
            children=len(root.children),
        )
        return _with_telemetry(result, root)

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, for annotating from service code."""
    return _current_span.get() if _enabled.get() else None
