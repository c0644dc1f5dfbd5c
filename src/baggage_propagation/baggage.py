"""Baggage header model, parsing, serialization and merging.

A baggage header is split into two parts:

- first-party entries, whose keys carry the ``sentry-`` prefix on the wire.
  They are decoded into ``Baggage.items`` with the prefix stripped.
- everything else, kept as one opaque comma-joined string in
  ``Baggage.third_party`` in its original order and never decoded.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

import structlog

from .headers import MAX_BAGGAGE_STRING_LENGTH, SENTRY_BAGGAGE_KEY_PREFIX

logger = structlog.stdlib.get_logger(__name__)

# Characters left unescaped by encodeURIComponent on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!*'()"


class Baggage:
    """First-party baggage items plus the untouched third-party remainder."""

    def __init__(self, items: dict[str, str] | None = None, third_party: str = "") -> None:
        self._items: dict[str, str] = dict(items) if items else {}
        self._third_party = third_party

    @property
    def items(self) -> dict[str, str]:
        return self._items

    @property
    def third_party(self) -> str:
        return self._third_party

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    @property
    def is_empty(self) -> bool:
        return len(self._items) == 0

    def to_header(self) -> str:
        return serialize_baggage(self)

    @classmethod
    def from_header(cls, s: str) -> Baggage:
        return parse_baggage_string(s)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Baggage):
            return NotImplemented
        return self._items == other._items and self._third_party == other._third_party

    def __repr__(self) -> str:
        return f"Baggage(items={self._items!r}, third_party={self._third_party!r})"


def create_baggage(init_items: dict[str, str], baggage_string: str = "") -> Baggage:
    """Create a Baggage holding a copy of ``init_items``."""
    return Baggage(init_items, baggage_string)


def get_baggage_value(baggage: Baggage, key: str) -> str | None:
    return baggage.get(key)


def set_baggage_value(baggage: Baggage, key: str, value: str) -> None:
    baggage.set(key, value)


def is_baggage_empty(baggage: Baggage) -> bool:
    """True when there are no first-party items. The remainder is not considered."""
    return baggage.is_empty


def get_third_party_baggage(baggage: Baggage) -> str:
    return baggage.third_party


def _encode(s: str) -> str:
    return quote(s, safe=_URI_COMPONENT_SAFE)


def serialize_baggage(baggage: Baggage) -> str:
    """Serialize ``baggage`` into a header value.

    The third-party remainder is emitted first and is never truncated.
    First-party entries follow in ``items`` order; an entry that would push
    the header past MAX_BAGGAGE_STRING_LENGTH is skipped and the next one
    is tried.
    """
    header = baggage.third_party
    for key, value in baggage.items.items():
        entry = f"{SENTRY_BAGGAGE_KEY_PREFIX}{_encode(key)}={_encode(value)}"
        candidate = f"{header},{entry}" if header else entry
        if len(candidate) > MAX_BAGGAGE_STRING_LENGTH:
            logger.warning(
                "Not adding baggage entry due to exceeding baggage size limits",
                key=key,
                value=value,
                limit=MAX_BAGGAGE_STRING_LENGTH,
            )
            continue
        header = candidate
    return header


def parse_baggage_string(input_baggage_string: str) -> Baggage:
    """Parse a raw baggage header value.

    ``sentry-`` prefixed entries are decoded into items (last one wins for a
    repeated key). Any other segment, including one without ``=``, is kept
    verbatim in the third-party remainder. Empty segments are dropped.
    """
    items: dict[str, str] = {}
    third_party: list[str] = []
    for segment in input_baggage_string.split(","):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        decoded_key = unquote(key.strip())
        if sep and decoded_key.startswith(SENTRY_BAGGAGE_KEY_PREFIX):
            items[decoded_key[len(SENTRY_BAGGAGE_KEY_PREFIX) :]] = unquote(value.strip())
        else:
            third_party.append(segment)
    return Baggage(items, ",".join(third_party))


def merge_and_serialize_baggage(
    incoming_baggage: Baggage | None = None,
    header_baggage_string: str | None = None,
) -> str:
    """Merge our baggage with a header already set on an outgoing request.

    Only the third-party part of ``header_baggage_string`` is kept. Any
    ``sentry-`` entries on it are dropped in favour of ``incoming_baggage``,
    which is the authoritative source of first-party values in this process.

    Args:
        incoming_baggage: baggage from the incoming request or page that may
            carry first-party entries
        header_baggage_string: baggage header a third party may already have
            put on the outgoing request

    Returns:
        the header value to send, or "" when there is nothing to send
    """
    if incoming_baggage is None and not header_baggage_string:
        return ""

    third_party = ""
    if header_baggage_string:
        third_party = parse_baggage_string(header_baggage_string).third_party

    items = incoming_baggage.items if incoming_baggage is not None else {}
    return serialize_baggage(create_baggage(items, third_party))
