"""Bridge from Python's logging module to a drain."""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..sinks.base import Sink


class DrainHandler(logging.Handler):
    """Logging handler that forwards records to a ``Sink``.

    Args:
        sink: Drain to forward records to; owned by the handler
        context: Key-values bound to every record (e.g. service name)
        level: Handler level
        raise_errors: Re-raise sink failures to the logging call instead of
            reporting them through ``handleError``
    """

    def __init__(
        self,
        sink: Sink,
        context: Optional[Mapping[str, Any]] = None,
        level: int = logging.NOTSET,
        raise_errors: bool = False,
    ):
        super().__init__(level)
        self.sink = sink
        self.context = MappingProxyType(dict(context or {}))
        self.raise_errors = raise_errors

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink.log(record, self.context)
        except Exception:
            if self.raise_errors:
                raise
            self.handleError(record)

    def close(self) -> None:
        try:
            self.sink.close()
        finally:
            super().close()
