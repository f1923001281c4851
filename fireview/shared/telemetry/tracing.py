"""Span helpers for outbound Firestore and prompt-service calls."""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

# Arguments recorded as span attributes. Document data, prompt variables and
# credentials are never recorded.
_RECORDED_ARGS = frozenset({"collection_path", "document_id", "template_name"})

_tracer = trace.get_tracer("fireview")


def _call_attributes(signature: inspect.Signature, args: tuple, kwargs: dict) -> dict[str, str]:
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return {}
    return {
        f"fireview.{name}": str(value)
        for name, value in bound.arguments.items()
        if name in _RECORDED_ARGS and value is not None
    }


def traced(span_name: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap an async adapter method in a span named span_name.

    Collection path, document ID and template name are attached when passed.
    Exceptions are recorded on the span and re-raised unchanged.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with _tracer.start_as_current_span(
                span_name,
                attributes=_call_attributes(signature, args, kwargs),
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, getattr(e, "message", str(e))))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Attach attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
