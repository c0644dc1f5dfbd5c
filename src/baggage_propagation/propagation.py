"""Header propagation helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable, MutableMapping

from .baggage import Baggage, merge_and_serialize_baggage, parse_baggage_string
from .headers import BAGGAGE_HEADER_NAME, SENTRY_TRACE_HEADER_NAME
from .trace_context import TraceContext, TraceparentData, extract_traceparent_data


def _find_header(headers: MutableMapping[str, str], name: str) -> str | None:
    """Case-insensitive lookup of the actual key used for ``name``."""
    for key in headers:
        if key.lower() == name:
            return key
    return None


def inject_context(
    headers: MutableMapping[str, str],
    ctx: TraceContext,
    baggage: Baggage | None = None,
) -> None:
    """Set sentry-trace and baggage on outgoing request headers (in place).

    A baggage header already present on ``headers`` keeps its third-party
    entries; first-party entries come from ``baggage``.
    """
    headers[SENTRY_TRACE_HEADER_NAME] = ctx.to_sentry_trace()

    existing_key = _find_header(headers, BAGGAGE_HEADER_NAME)
    existing = headers.get(existing_key) if existing_key is not None else None
    merged = merge_and_serialize_baggage(baggage, existing)
    if not merged:
        return
    if existing_key is not None and existing_key != BAGGAGE_HEADER_NAME:
        del headers[existing_key]
    headers[BAGGAGE_HEADER_NAME] = merged


def extract_context(
    headers: MutableMapping[str, str],
) -> tuple[TraceparentData | None, Baggage]:
    """Read sentry-trace and baggage from incoming request headers."""
    trace_key = _find_header(headers, SENTRY_TRACE_HEADER_NAME)
    baggage_key = _find_header(headers, BAGGAGE_HEADER_NAME)
    traceparent = extract_traceparent_data(headers[trace_key]) if trace_key else None
    baggage = parse_baggage_string(headers[baggage_key]) if baggage_key else Baggage()
    return traceparent, baggage


def should_propagate_to(url: str, targets: Iterable[str]) -> bool:
    """True if ``url`` matches any target, either as a substring or a regex."""
    for target in targets:
        if target in url:
            return True
        try:
            if re.search(target, url):
                return True
        except re.error:
            continue
    return False
