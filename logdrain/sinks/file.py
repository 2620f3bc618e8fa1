"""File sink writing one JSON object per record."""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, TextIO

from ..errors import ResourceError
from ..factory import SinkFactory, SinkOptions
from .base import Sink, record_values

# Keys owned by the record itself; context and extra values cannot replace them
RESERVED_KEYS = frozenset({"ts", "level", "msg"})


class FileOptions(SinkOptions):
    """File output options.

    Args:
        path: Log file path, opened for append and created if missing
        format: Encoding of each record (only ``json``)
    """

    path: str
    format: Literal["json"]


def open_log_file(path: Path | str) -> TextIO:
    """Open a log file for appending.

    Raises:
        ResourceError: If the file cannot be opened
    """
    try:
        return open(path, "a", encoding="utf-8")
    except OSError as e:
        raise ResourceError(str(path), e.strerror or str(e)) from e


class JsonFileSink(Sink):
    """Append JSON lines to an open file.

    Each line holds ``ts``, ``level`` and ``msg``, then the context, then
    the record's own key-values.

    Args:
        stream: Open text stream, owned by the sink from now on
        path: Path of the stream, for diagnostics
    """

    def __init__(self, stream: TextIO, path: Path | str = ""):
        self._stream = stream
        self._path = str(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    def encode(self, record: logging.LogRecord, context: Mapping[str, Any]) -> str:
        """Encode one record as a JSON line (newline included)."""
        data: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        for key, value in [*context.items(), *record_values(record).items()]:
            if key not in RESERVED_KEYS:
                data[key] = value
        return json.dumps(data, default=str, ensure_ascii=False) + "\n"

    def log(self, record: logging.LogRecord, context: Mapping[str, Any]) -> None:
        line = self.encode(record, context)
        with self._lock:
            self._stream.write(line)
            self._stream.flush()

    def close(self) -> None:
        with self._lock:
            if not self._stream.closed:
                self._stream.close()

    def __repr__(self) -> str:
        return f"<JsonFileSink path={self._path}>"


class FileSinkFactory(SinkFactory):
    """Builds file sinks for outputs with ``type = "file"``."""

    sink_type = "file"
    options_class = FileOptions

    def create(self, options: FileOptions) -> Sink:
        stream = open_log_file(options.path)
        return JsonFileSink(stream, options.path)
