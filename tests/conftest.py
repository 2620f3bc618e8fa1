"""Shared fixtures and utilities for pytest test suite."""

import logging
from typing import Any, List, Mapping, Optional, Tuple

import pytest

from logdrain import Sink, SinkFactory, SinkOptions


# ============================================================
# Instrumented sinks and factories
# ============================================================

class RecordingSink(Sink):
    """Sink that remembers every call."""

    def __init__(self, name: str = "recording"):
        self.name = name
        self.calls: List[Tuple[logging.LogRecord, Mapping[str, Any]]] = []
        self.closed = False

    def log(self, record, context):
        self.calls.append((record, dict(context)))

    def close(self):
        self.closed = True


class FailingSink(RecordingSink):
    """Sink that records the call, then raises."""

    def __init__(self, name: str = "failing", error: Optional[Exception] = None):
        super().__init__(name)
        self.error = error or OSError("disk full")

    def log(self, record, context):
        super().log(record, context)
        raise self.error


class MemoryOptions(SinkOptions):
    label: str = "memory"


class MemorySinkFactory(SinkFactory):
    """Factory for ``type = "memory"`` that counts how often it is queried."""

    sink_type = "memory"
    options_class = MemoryOptions

    def __init__(self):
        self.queried = 0
        self.created: List[RecordingSink] = []

    def resolve(self, descriptor):
        self.queried += 1
        return super().resolve(descriptor)

    def create(self, options):
        sink = RecordingSink(options.label)
        self.created.append(sink)
        return sink


# ============================================================
# Common Fixtures
# ============================================================

@pytest.fixture
def make_record():
    """Factory fixture to create LogRecords."""
    def _make_record(msg: str = "test message", level: int = logging.INFO, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="tests", level=level, pathname=__file__, lineno=1,
            msg=msg, args=(), exc_info=None,
        )
        record.__dict__.update(extra)
        return record
    return _make_record


@pytest.fixture
def memory_factory():
    return MemorySinkFactory()


@pytest.fixture
def file_config(tmp_path):
    """Factory fixture returning config text for a JSON file output."""
    def _file_config(filename: str = "out.log", output: str = "file") -> str:
        path = tmp_path / filename
        return (
            f"[output.{output}]\n"
            f'type = "file"\n'
            f"path = '{path}'\n"
            f'format = "json"\n'
        )
    return _file_config
