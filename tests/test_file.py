"""Tests for the JSON file sink."""

import io
import json
import logging
import threading

import pytest

from logdrain import (
    FileSinkFactory,
    InvalidValueError,
    JsonFileSink,
    MissingFieldError,
    OutputDescriptor,
    ResourceError,
    SinkError,
    from_config,
)


class TestFileJson:
    """Test records written through a configured file output."""

    def test_file_json(self, file_config, make_record, tmp_path):
        """Test a record's context survives the JSON round trip."""
        drain = from_config(file_config("file-json.log"))
        drain.log(make_record("test complete"), {"test": "file_json"})
        drain.close()

        log = (tmp_path / "file-json.log").read_text()
        data = json.loads(log.strip())
        assert data["test"] == "file_json"
        assert data["msg"] == "test complete"
        assert data["level"] == "INFO"

    def test_appends_to_existing_file(self, file_config, make_record, tmp_path):
        """Test existing content is kept."""
        path = tmp_path / "existing.log"
        path.write_text("previous\n")
        drain = from_config(file_config("existing.log"))
        drain.log(make_record("new"), {})
        drain.close()

        lines = path.read_text().splitlines()
        assert lines[0] == "previous"
        assert json.loads(lines[1])["msg"] == "new"

    def test_record_values_override_context(self, file_config, make_record, tmp_path):
        """Test per-record values win over context on key collisions."""
        drain = from_config(file_config())
        drain.log(make_record("m", user="record"), {"user": "context", "service": "api"})
        drain.close()

        data = json.loads((tmp_path / "out.log").read_text())
        assert data["user"] == "record"
        assert data["service"] == "api"

    def test_record_fields_cannot_be_replaced(self, make_record):
        """Test context and extra values never replace ts, level or msg."""
        record = make_record("real message", level=logging.ERROR, ts="extra-ts")
        record.created = 0.0
        line = JsonFileSink(io.StringIO()).encode(record, {"msg": "spoof", "level": "DEBUG", "ts": "t", "user": "bob"})

        data = json.loads(line)
        assert data["msg"] == "real message"
        assert data["level"] == "ERROR"
        assert data["ts"] == "1970-01-01T00:00:00.000+00:00"
        assert data["user"] == "bob"

    def test_non_json_values_rendered_as_text(self, file_config, make_record, tmp_path):
        """Test values json cannot encode are written with str()."""
        drain = from_config(file_config())
        drain.log(make_record("m"), {"path": tmp_path})
        drain.close()

        data = json.loads((tmp_path / "out.log").read_text())
        assert data["path"] == str(tmp_path)

    def test_file_created_at_build(self, file_config, tmp_path):
        """Test the file is opened when the drain is built."""
        drain = from_config(file_config("eager.log"))
        assert (tmp_path / "eager.log").exists()
        drain.close()


class TestFileOptions:
    """Test validation of file output options."""

    def test_missing_path(self):
        """Test path is required."""
        with pytest.raises(MissingFieldError) as exc_info:
            FileSinkFactory().resolve(OutputDescriptor({"type": "file", "format": "json"}))
        assert exc_info.value.option == "path"

    def test_missing_format(self, tmp_path):
        """Test format is required."""
        with pytest.raises(MissingFieldError) as exc_info:
            FileSinkFactory().resolve(OutputDescriptor({"type": "file", "path": str(tmp_path / "x")}))
        assert exc_info.value.option == "format"

    def test_unknown_format(self, tmp_path):
        """Test unknown encodings name the option and the value."""
        descriptor = OutputDescriptor({"type": "file", "path": str(tmp_path / "x"), "format": "xml"})
        with pytest.raises(InvalidValueError) as exc_info:
            FileSinkFactory().resolve(descriptor)
        assert exc_info.value.option == "format"
        assert exc_info.value.value == "xml"
        assert "'xml'" in str(exc_info.value)
        assert "format" in str(exc_info.value)

    def test_unopenable_path(self, tmp_path):
        """Test a path in a missing directory fails as ResourceError."""
        text = (
            '[output.f]\ntype = "file"\n'
            f"path = '{tmp_path / 'missing' / 'dir' / 'x.log'}'\n"
            'format = "json"\n'
        )
        with pytest.raises(ResourceError) as exc_info:
            from_config(text)
        assert exc_info.value.output == "f"
        assert "missing" in exc_info.value.path


class TestJsonFileSink:
    """Test the sink directly."""

    def test_one_line_per_record(self, make_record):
        """Test each record is one newline-terminated JSON object."""
        stream = io.StringIO()
        sink = JsonFileSink(stream)
        sink.log(make_record("a"), {})
        sink.log(make_record("b"), {})
        lines = stream.getvalue().split("\n")
        assert lines[-1] == ""
        assert [json.loads(line)["msg"] for line in lines[:-1]] == ["a", "b"]

    def test_timestamp_is_utc_iso(self, make_record):
        """Test ts is ISO-8601 with a UTC offset."""
        record = make_record()
        record.created = 0.0
        line = JsonFileSink(io.StringIO()).encode(record, {})
        assert json.loads(line)["ts"] == "1970-01-01T00:00:00.000+00:00"

    def test_write_after_close_is_sink_error(self, file_config, make_record):
        """Test write failures surface as SinkError through the drain."""
        drain = from_config(file_config())
        drain.close()
        with pytest.raises(SinkError):
            drain.log(make_record(), {})

    def test_concurrent_writes_do_not_interleave(self, make_record):
        """Test lines stay whole under concurrent logging."""
        stream = io.StringIO()
        sink = JsonFileSink(stream)

        def worker(n):
            for i in range(50):
                sink.log(make_record("x" * 200), {"worker": n, "i": i})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = stream.getvalue().splitlines()
        assert len(lines) == 200
        assert all(json.loads(line)["msg"] == "x" * 200 for line in lines)
