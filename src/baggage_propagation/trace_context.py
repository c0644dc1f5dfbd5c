"""Trace context and the sentry-trace header."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

# {trace_id}-{span_id}-{sampled}, every part optional
TRACEPARENT_REGEXP = re.compile(
    r"^[ \t]*"
    r"([0-9a-f]{32})?"
    r"-?([0-9a-f]{16})?"
    r"-?([01])?"
    r"[ \t]*$"
)


@dataclass
class TraceparentData:
    """Identifiers read from a sentry-trace header or page marker."""

    trace_id: str | None
    parent_span_id: str | None
    parent_sampled: bool | None = None


def extract_traceparent_data(traceparent: str) -> TraceparentData | None:
    """Parse a sentry-trace value.

    Returns None for blank input or a value that does not match.
    """
    if not traceparent.strip():
        return None
    match = TRACEPARENT_REGEXP.match(traceparent)
    if match is None:
        return None
    trace_id, parent_span_id, sampled = match.groups()
    parent_sampled: bool | None = None
    if sampled == "1":
        parent_sampled = True
    elif sampled == "0":
        parent_sampled = False
    return TraceparentData(
        trace_id=trace_id,
        parent_span_id=parent_span_id,
        parent_sampled=parent_sampled,
    )


@dataclass
class TraceContext:
    """Trace context attached to a completed operation."""

    trace_id: str  # 32 hex chars
    span_id: str  # 16 hex chars
    op: str
    parent_span_id: str | None = None
    sampled: bool | None = None

    def to_sentry_trace(self) -> str:
        header = f"{self.trace_id}-{self.span_id}"
        if self.sampled is not None:
            header += "-1" if self.sampled else "-0"
        return header

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "parent_span_id": self.parent_span_id,
            "op": self.op,
        }
        if self.sampled is not None:
            d["sampled"] = self.sampled
        return d
