"""Observability helpers for Captain Rex.

Structured logging via structlog (bridged from stdlib ``logging``), per-request
correlation ids and a tracing decorator for adapter and core calls.
"""

import asyncio
import functools
import json
import logging
import re
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel
from structlog.contextvars import bind_contextvars, unbind_contextvars

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        *_SHARED_PROCESSORS,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Sensitive data redaction pattern
_SENSITIVE_KEY_RE = re.compile(r"(token|key|secret|password|authorization|auth)", re.IGNORECASE)


def configure_stdlib_json_logging(level: str = "INFO", file_target: str | None = None) -> None:
    """Route stdlib logging through structlog renderers.

    Console output is human readable on a TTY and JSON otherwise; the optional
    file target always receives JSON lines.
    """
    console_renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if sys.stderr.isatty()
        else structlog.processors.JSONRenderer()
    )

    def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(_formatter(console_renderer))
    handlers.append(stream_handler)

    if file_target:
        file_handler = logging.FileHandler(file_target, encoding="utf-8")
        file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level.upper())


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation id to every log line of the current task."""
    bind_contextvars(correlation_id=correlation_id)


def clear_correlation_id() -> None:
    unbind_contextvars("correlation_id")


def _mask_scalar(value: Any) -> Any:
    if value is None:
        return None
    s = str(value)
    if len(s) <= 8:
        return "***"
    return f"{s[:4]}…{s[-3:]}"


def _redact_obj(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: (_mask_scalar(v) if _SENSITIVE_KEY_RE.search(str(k)) else _redact_obj(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_redact_obj(i) for i in obj]
    return obj


def _serialize_value(value: Any, max_length: int = 500) -> Any:
    """Safely serialize a value for logging.

    Args:
        value: Value to serialize
        max_length: Maximum string length for truncation

    Returns:
        Serializable representation of the value
    """
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")

        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)

    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def debug_wrapper(
    *,
    capture_result: bool = False,
    capture_args: bool = True,
    max_arg_length: int = 500,
    log_level: str = "DEBUG",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator logging entry, duration and failures of a function.

    Works for both sync and async callables. Exceptions are logged with the
    captured arguments and re-raised unchanged.

    Example:
        >>> @debug_wrapper(capture_result=True)
        ... async def fetch_guild(ally_code: str) -> dict:
        ...     return {"ally_code": ally_code}
    """

    def decorator(func: F) -> F:
        function_name = f"{func.__module__}.{func.__qualname__}"
        metadata = add_metadata or {}
        level = log_level.lower()

        def _args(args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
            if not capture_args:
                return {}
            return {
                "args": [_serialize_value(a, max_arg_length) for a in args],
                "kwargs": _redact_obj(
                    {k: _serialize_value(v, max_arg_length) for k, v in kwargs.items()}
                ),
            }

        def _done(start: float, result: Any) -> None:
            extra: dict[str, Any] = {}
            if capture_result:
                extra["result"] = _redact_obj(_serialize_value(result, max_arg_length))
            logger.log(
                getattr(logging, level.upper(), logging.DEBUG),
                "function_completed",
                function_name=function_name,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                **metadata,
                **extra,
            )

        def _failed(start: float, exc: Exception, args: tuple, kwargs: dict) -> None:
            logger.error(
                "function_failed",
                function_name=function_name,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                error_type=type(exc).__name__,
                error_message=str(exc),
                **metadata,
                **_args(args, kwargs),
            )

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.log(
                getattr(logging, level.upper(), logging.DEBUG),
                "function_started",
                function_name=function_name,
                **metadata,
                **_args(args, kwargs),
            )
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _failed(start, e, args, kwargs)
                raise
            _done(start, result)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.log(
                getattr(logging, level.upper(), logging.DEBUG),
                "function_started",
                function_name=function_name,
                **metadata,
                **_args(args, kwargs),
            )
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(start, e, args, kwargs)
                raise
            _done(start, result)
            return result

        if asyncio.iscoroutinefunction(func):
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator


def trace_performance(func: F) -> F:
    """Decorator focused on performance monitoring."""
    return debug_wrapper(capture_result=False, capture_args=False, log_level="DEBUG")(func)


def trace_adapter(func: F) -> F:
    """Decorator specifically for adapter layer functions."""
    return debug_wrapper(
        capture_result=False,
        capture_args=True,
        log_level="INFO",
        add_metadata={"layer": "adapter"},
    )(func)
