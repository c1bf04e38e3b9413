"""Context propagation for structured logging.

Fields bound with log_context() are attached to every log record emitted
inside the block (see ContextualFilter). The store uses it to tag records with
the operation being performed and the concert it concerns.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently bound to the logging context."""
    return dict(_log_context.get())


def clear_log_context() -> None:
    """Drop every bound field. Mostly useful in tests."""
    _log_context.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields to the logging context for the duration of a block.

    Nested blocks merge their fields over the enclosing ones; the previous
    context is restored on exit, including when the block raises.

    Example:
        >>> with log_context(operation="save", concert_id=4):
        ...     logger.info("Saving concert")  # record carries operation and concert_id
    """
    token = _log_context.set({**_log_context.get(), **fields})
    try:
        yield get_log_context()
    finally:
        _log_context.reset(token)
