"""
Tracing configuration for MindForm.

Uses the OpenAI Agents SDK tracing. Traces go to the OpenAI dashboard by
default; local processors can send them to the log or to a JSONL file.
"""

import json
import logging

from agents import set_tracing_disabled
from agents.tracing import (
    Span,
    Trace,
    TracingProcessor,
    set_trace_processors,
)

logger = logging.getLogger(__name__)


class LoggingTracingProcessor(TracingProcessor):
    """Writes trace and span boundaries to the ``mindform.tracing`` logger."""

    def __init__(self, verbose: bool = False):
        """
        Args:
            verbose: If True, also log every span.
        """
        self.verbose = verbose

    def on_trace_start(self, trace: Trace) -> None:
        logger.info("[TRACE START] %s (ID: %s...)", trace.name, trace.trace_id[:8])

    def on_trace_end(self, trace: Trace) -> None:
        logger.info("[TRACE END] %s", trace.name)

    def on_span_start(self, span: Span[object]) -> None:
        if self.verbose:
            logger.debug("  [SPAN START] %s", span.span_data)

    def on_span_end(self, span: Span[object]) -> None:
        if self.verbose:
            logger.debug("  [SPAN END] %s", span.span_data)

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


class FileTracingProcessor(TracingProcessor):
    """
    A tracing processor that writes traces to a JSON Lines file.

    One line per finished trace, with its spans.
    """

    def __init__(self, file_path: str = "traces.jsonl"):
        self.file_path = file_path
        self._traces: dict[str, dict] = {}

    def on_trace_start(self, trace: Trace) -> None:
        self._traces[trace.trace_id] = {
            "trace_id": trace.trace_id,
            "name": trace.name,
            "spans": [],
        }

    def on_trace_end(self, trace: Trace) -> None:
        record = self._traces.pop(trace.trace_id, None)
        if record is None:
            return
        with open(self.file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")

    def on_span_start(self, span: Span[object]) -> None:
        pass

    def on_span_end(self, span: Span[object]) -> None:
        record = self._traces.get(span.trace_id)
        if record is not None:
            record["spans"].append({
                "span_id": span.span_id,
                "data": str(span.span_data),
            })

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


def setup_tracing(
    enabled: bool = True,
    console: bool = False,
    verbose: bool = False,
    file_path: str | None = None,
) -> None:
    """
    Configure tracing for MindForm.

    Args:
        enabled: Whether tracing is enabled.
        console: Whether to log traces.
        verbose: Whether to log every span.
        file_path: Optional JSONL file to write traces to.

    With no local processor selected, the SDK default (OpenAI dashboard)
    stays in place.
    """
    if not enabled:
        set_tracing_disabled(True)
        return

    set_tracing_disabled(False)

    processors: list[TracingProcessor] = []

    if console:
        processors.append(LoggingTracingProcessor(verbose=verbose))

    if file_path:
        processors.append(FileTracingProcessor(file_path=file_path))

    if processors:
        set_trace_processors(processors)
