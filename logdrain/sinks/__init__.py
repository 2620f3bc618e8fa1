"""Sinks package.

Each backend module defines:
- Options class (extends SinkOptions)
- Sink implementation
- Factory (extends SinkFactory)
"""

from .base import Sink, ErrorBoxingSink, record_values
from .composite import CompositeSink
from .terminal import TermOptions, TerminalSink, TermSinkFactory, format_timestamp
from .file import FileOptions, JsonFileSink, FileSinkFactory

__all__ = [
    # Base
    "Sink",
    "ErrorBoxingSink",
    "CompositeSink",
    "record_values",
    # Terminal
    "TermOptions",
    "TerminalSink",
    "TermSinkFactory",
    "format_timestamp",
    # File
    "FileOptions",
    "JsonFileSink",
    "FileSinkFactory",
]
