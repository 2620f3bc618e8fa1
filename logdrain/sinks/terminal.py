"""Terminal sink, rendered with rich."""

import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any, Iterable, Literal, Mapping, Optional, Tuple

from rich.console import Console
from rich.text import Text

from ..factory import SinkFactory, SinkOptions
from .base import Sink, record_values
from .theme import TERMINAL_THEME


LEVEL_LABELS = {
    "CRITICAL": "CRIT",
    "ERROR": "ERRO",
    "WARNING": "WARN",
    "INFO": "INFO",
    "DEBUG": "DEBG",
}

COMPACT_INDENT = " "


def format_timestamp(created: float, utc: bool = True) -> str:
    """Format a record's creation time with millisecond precision.

    Example:
        >>> format_timestamp(0.0)
        'Jan 01 00:00:00.000'
    """
    if utc:
        moment = datetime.fromtimestamp(created, tz=timezone.utc)
    else:
        moment = datetime.fromtimestamp(created).astimezone()
    return f"{moment:%b %d %H:%M:%S}.{moment.microsecond // 1000:03d}"


class TermOptions(SinkOptions):
    """Terminal output options.

    Args:
        format: ``compact`` groups records under their context, ``full``
            prints everything on one line per record
        use_stdout: ``true`` writes to stdout, ``false`` to stderr
        color: ``true`` forces colors, ``false`` disables them, ``auto``
            colors only when the stream is a terminal
        timestamp: ``utc`` (default) or ``local``
    """

    format: Literal["compact", "full"]
    use_stdout: Literal["true", "false"] = "false"
    color: Literal["true", "false", "auto"] = "auto"
    timestamp: Literal["local", "utc"] = "utc"


class TerminalSink(Sink):
    """Human readable output to a terminal stream.

    Args:
        console: Rich console bound to the destination stream
        layout: ``"full"`` or ``"compact"``
        utc: Render timestamps in UTC instead of local time
    """

    def __init__(self, console: Console, layout: str = "full", utc: bool = True):
        self._console = console
        self._layout = layout
        self._utc = utc
        self._lock = threading.Lock()
        # compact layout: context of the last header printed
        self._last_context: Optional[Tuple[Tuple[str, str], ...]] = None

    @property
    def console(self) -> Console:
        return self._console

    @property
    def layout(self) -> str:
        return self._layout

    @property
    def utc(self) -> bool:
        return self._utc

    def log(self, record: logging.LogRecord, context: Mapping[str, Any]) -> None:
        with self._lock:
            if self._layout == "compact":
                self._log_compact(record, context)
            else:
                pairs = [*record_values(record).items(), *context.items()]
                self._console.print(self._render(record, pairs), soft_wrap=True)

    def _log_compact(self, record: logging.LogRecord, context: Mapping[str, Any]) -> None:
        header = tuple((str(key), str(value)) for key, value in context.items())
        if header != self._last_context:
            if header:
                self._console.print(
                    Text(", ".join(f"{k}: {v}" for k, v in header), style="drain.context"),
                    soft_wrap=True,
                )
            self._last_context = header
        indent = COMPACT_INDENT if header else ""
        self._console.print(
            self._render(record, record_values(record).items(), indent),
            soft_wrap=True,
        )

    def _render(self, record: logging.LogRecord, pairs: Iterable[Tuple[Any, Any]], indent: str = "") -> Text:
        level = record.levelname
        level_style = f"drain.level.{level.lower()}" if level in LEVEL_LABELS else "drain.message"

        text = Text(indent)
        text.append(format_timestamp(record.created, self._utc), style="drain.time")
        text.append(" ")
        text.append(LEVEL_LABELS.get(level, level), style=level_style)
        text.append(" ")
        text.append(record.getMessage(), style="drain.message")
        for key, value in pairs:
            text.append(", ")
            text.append(str(key), style="drain.key")
            text.append(": ")
            text.append(str(value), style="drain.value")
        return text

    def __repr__(self) -> str:
        return f"<TerminalSink layout={self._layout} utc={self._utc}>"


def create_console(use_stdout: bool = False, color: str = "auto") -> Console:
    """Create a rich console for one terminal sink.

    The stream is picked, and for ``auto`` probed for terminal support, now
    rather than on first write.
    """
    stream = sys.stdout if use_stdout else sys.stderr
    if color == "true":
        return Console(
            file=stream, theme=TERMINAL_THEME, highlight=False, emoji=False,
            force_terminal=True, color_system="standard",
        )
    if color == "false":
        return Console(
            file=stream, theme=TERMINAL_THEME, highlight=False, emoji=False,
            color_system=None,
        )
    return Console(file=stream, theme=TERMINAL_THEME, highlight=False, emoji=False)


class TermSinkFactory(SinkFactory):
    """Builds ``TerminalSink`` for outputs with ``type = "term"``."""

    sink_type = "term"
    options_class = TermOptions

    def create(self, options: TermOptions) -> Sink:
        console = create_console(
            use_stdout=options.use_stdout == "true",
            color=options.color,
        )
        return TerminalSink(console, layout=options.format, utc=options.timestamp == "utc")
