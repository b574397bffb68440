"""
Contextual logging for MDB_MAPPER.

Repository operations run inside ``repository_context`` so that every record
logged while they run carries the collection and document id. A correlation
id, when one is set, is attached to log records and to published messages.
"""

import contextvars
import logging
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..constants import CORRELATION_ID_ATTRIBUTE, DOCUMENT_PATH_SEPARATOR

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

_repository_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "repository_context", default=None
)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set a correlation ID in the current context.

    Args:
        correlation_id: Optional correlation ID (generates new one if None)

    Returns:
        The correlation ID that was set
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    _correlation_id.set(None)


@contextmanager
def repository_context(collection: str, **fields: Any) -> Iterator[dict[str, Any]]:
    """
    Attach repository fields to every record logged inside the block.

    The previous context is restored on exit, also when the block raises.

    Example:
        with repository_context("db.people", document_id="42"):
            await store.set("42", document)
            log_operation(logger, "repository.upsert")
    """
    context = {"collection": collection}
    context.update((k, v) for k, v in fields.items() if v is not None)
    token = _repository_context.set(context)
    try:
        yield context
    finally:
        _repository_context.reset(token)


def get_logging_context() -> dict[str, Any]:
    """Return the repository fields and correlation id currently in scope."""
    context = dict(_repository_context.get() or {})
    correlation_id = get_correlation_id()
    if correlation_id:
        context[CORRELATION_ID_ATTRIBUTE] = correlation_id
    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter adding the current logging context as record attributes."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**get_logging_context(), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a contextual logger.

    Args:
        name: Logger name (typically __name__)
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    started: float | None = None,
    level: int = logging.INFO,
    success: bool = True,
    **fields: Any,
) -> None:
    """
    Log a repository operation.

    The message names the document the enclosing ``repository_context``
    points at, e.g. ``repository.upsert db.people/42 (1.05ms)``.

    Args:
        logger: Logger instance
        operation: Operation name (e.g. "repository.upsert")
        started: ``time.perf_counter()`` value taken when the operation began
        level: Log level
        success: Whether the operation succeeded
        **fields: Additional record attributes (entity type, merge flag, ...)
    """
    context = get_logging_context()
    extra = {**context, "operation": operation, "success": success, **fields}

    parts = [context[k] for k in ("collection", "document_id") if k in context]
    message = operation
    if parts:
        message += " " + DOCUMENT_PATH_SEPARATOR.join(str(it) for it in parts)
    if not success:
        message += " failed"
    if started is not None:
        extra["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        message += f" ({extra['duration_ms']:.2f}ms)"

    logger.log(level, message, extra=extra)
