"""Sink interface and the error-normalizing wrapper."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

from ..errors import SinkError


# Attributes every LogRecord carries; anything else was added through ``extra=``
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}


def record_values(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the key-values attached to a single record.

    Example:
        logger.info("saved", extra={"user": "bob"})
        # record_values(record) == {"user": "bob"}
    """
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class Sink(ABC):
    """A logging drain.

    ``log`` accepts a record plus the owned key-value context bound by the
    caller and either returns normally or raises. Implementations must
    serialize their own mutable state: a single sink may be called from
    many threads at once.
    """

    @abstractmethod
    def log(self, record: logging.LogRecord, context: Mapping[str, Any]) -> None:
        """Handle one record."""
        pass

    def close(self) -> None:
        """Release resources held by the sink."""
        pass


class ErrorBoxingSink(Sink):
    """Wrap a backend sink so every failure surfaces as ``SinkError``.

    The backend exception is chained as ``__cause__`` and its message is
    kept. Nothing is retried or suppressed.

    Args:
        inner: Backend sink to delegate to
    """

    def __init__(self, inner: Sink):
        self._inner = inner

    @property
    def inner(self) -> Sink:
        return self._inner

    def log(self, record: logging.LogRecord, context: Mapping[str, Any]) -> None:
        try:
            self._inner.log(record, context)
        except SinkError:
            raise
        except Exception as e:
            raise SinkError(str(e) or type(e).__name__) from e

    def close(self) -> None:
        self._inner.close()

    def __repr__(self) -> str:
        return f"<ErrorBoxingSink inner={self._inner!r}>"
