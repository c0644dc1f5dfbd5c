"""Trace id and span id generation."""

from __future__ import annotations

import uuid


def generate_trace_id() -> str:
    """Return a 32 character lowercase hex trace id."""
    return uuid.uuid4().hex


def generate_span_id() -> str:
    """Return a 16 character lowercase hex span id."""
    return uuid.uuid4().hex[16:]
