"""Span record."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Span:
    """A single timed unit of work inside an operation."""

    span_id: str
    trace_id: str
    op: str
    parent_span_id: str | None = None
    description: str | None = None
    start_timestamp: float = field(default_factory=time.time)
    end_timestamp: float | None = None
    status: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_finished(self) -> bool:
        return self.end_timestamp is not None

    def finish(self, status: str = "ok") -> None:
        """Mark the span as finished. Calling it again has no effect."""
        if self.end_timestamp is not None:
            return
        self.end_timestamp = time.time()
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        return {
            "span_id": self.span_id,
            "trace_id": self.trace_id,
            "parent_span_id": self.parent_span_id,
            "op": self.op,
            "description": self.description,
            "start_timestamp": self.start_timestamp,
            "timestamp": self.end_timestamp,
            "status": self.status,
            "data": self.data,
        }
