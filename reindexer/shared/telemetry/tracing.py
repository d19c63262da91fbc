"""Span helpers for the query, transform and write steps.

``traced`` opens one span per call. Arguments that look like pipeline
values (a SearchQuery, a Hit, a WriteRequest) contribute identifying
attributes such as the collection and document id; payloads are never
recorded.
"""

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

AttributeValue = str | int | float | bool

# Attribute lookups tried on each call argument: (span attribute, object attribute).
_ARGUMENT_ATTRIBUTES = (
    ("store.collection", "collection"),
    ("store.document_id", "document_id"),
    ("store.document_id", "id"),
    ("store.refresh", "refresh"),
)


def _argument_attributes(args: tuple, kwargs: dict) -> dict[str, AttributeValue]:
    attributes: dict[str, AttributeValue] = {}
    for value in (*args, *kwargs.values()):
        for span_key, attr in _ARGUMENT_ATTRIBUTES:
            found = getattr(value, attr, None)
            if isinstance(found, str) and span_key not in attributes:
                attributes[span_key] = found
    return attributes


def _finish(span: trace.Span, error: Exception | None) -> None:
    if error is None:
        span.set_status(Status(StatusCode.OK))
    else:
        span.set_status(Status(StatusCode.ERROR, str(error)))
        span.record_exception(error)


def traced(span_name: str | None = None) -> Callable:
    """Wrap a sync or async callable in a span named ``span_name``.

    The span name defaults to ``module.qualname``. Exceptions are recorded
    on the span and re-raised.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer("reindexer")
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with tracer.start_as_current_span(
                    name, attributes=_argument_attributes(args[1:], kwargs)
                ) as span:
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _finish(span, e)
                        raise
                    _finish(span, None)
                    return result

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                name, attributes=_argument_attributes(args[1:], kwargs)
            ) as span:
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _finish(span, e)
                    raise
                _finish(span, None)
                return result

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict[str, AttributeValue] | None = None) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})


def set_span_error(exception: Exception) -> None:
    """Mark the current span as failed with ``exception``."""
    span = trace.get_current_span()
    if span.is_recording():
        _finish(span, exception)
