"""Sink that duplicates every record to several member sinks."""

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple

from .base import Sink


class CompositeSink(Sink):
    """Fan each record out to all member sinks, in order.

    The first member that raises stops the dispatch for that record: its
    exception propagates and the remaining members are not called. The
    member tuple is fixed at construction, so no locking is needed here.

    Args:
        sinks: Member sinks, in dispatch order
    """

    def __init__(self, sinks: Iterable[Sink]):
        self._sinks: Tuple[Sink, ...] = tuple(sinks)

    @property
    def sinks(self) -> Tuple[Sink, ...]:
        return self._sinks

    def __len__(self) -> int:
        return len(self._sinks)

    def log(self, record: logging.LogRecord, context: Mapping[str, Any]) -> None:
        for sink in self._sinks:
            sink.log(record, context)

    def close(self) -> None:
        """Close every member, then re-raise the first failure, if any."""
        first_error: Optional[BaseException] = None
        for sink in self._sinks:
            try:
                sink.close()
            except Exception as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __repr__(self) -> str:
        return f"<CompositeSink sinks={len(self._sinks)}>"
