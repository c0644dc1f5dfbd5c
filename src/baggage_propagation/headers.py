"""Header names and wire-format limits."""

from __future__ import annotations

BAGGAGE_HEADER_NAME = "baggage"
SENTRY_TRACE_HEADER_NAME = "sentry-trace"

SENTRY_BAGGAGE_KEY_PREFIX = "sentry-"

# https://www.w3.org/TR/baggage/#limits
MAX_BAGGAGE_STRING_LENGTH = 8192
