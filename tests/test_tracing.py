"""Tests for local tracing processors."""

import json
from types import SimpleNamespace

from mindform.tracing import FileTracingProcessor


class TestFileTracingProcessor:
    """Tests for FileTracingProcessor."""

    def test_writes_one_line_per_trace(self, tmp_path):
        """Test that a finished trace is written with its spans."""
        path = tmp_path / "traces.jsonl"
        processor = FileTracingProcessor(file_path=str(path))
        trace = SimpleNamespace(trace_id="trace_1", name="form_generation")

        processor.on_trace_start(trace)
        processor.on_span_end(SimpleNamespace(trace_id="trace_1", span_id="span_1", span_data="agent"))
        processor.on_trace_end(trace)

        [line] = path.read_text(encoding="utf-8").splitlines()
        record = json.loads(line)
        assert record["name"] == "form_generation"
        assert record["spans"] == [{"span_id": "span_1", "data": "agent"}]

    def test_unknown_trace_ignored(self, tmp_path):
        path = tmp_path / "traces.jsonl"
        processor = FileTracingProcessor(file_path=str(path))
        processor.on_trace_end(SimpleNamespace(trace_id="nope", name="x"))
        assert not path.exists()
