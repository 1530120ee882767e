"""Scoped fields that are attached to every log record emitted inside them.

Backed by contextvars so that nested scopes restore cleanly.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def clear_log_context() -> None:
    """Drop every context field. Mainly useful in tests."""
    LogContextVar.set({})


class log_context:
    """Context manager that adds fields to the logging context for its scope.

    Example:
        >>> with log_context(input_title="Java engineer"):
        ...     logger.debug("Scoring input")  # record carries input_title
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = LogContextVar.set({**LogContextVar.get(), **self.kwargs})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            LogContextVar.reset(self.token)
            self.token = None
        return False
