"""Header propagation helper unit tests."""

import pytest

from baggage_propagation import (
    TraceContext,
    create_baggage,
    extract_context,
    inject_context,
    should_propagate_to,
)

TRACE_ID = "0af7651916cd43dd8448eb211c80319c"
SPAN_ID = "b7ad6b7169203331"


def _ctx() -> TraceContext:
    return TraceContext(trace_id=TRACE_ID, span_id=SPAN_ID, op="navigation", sampled=True)


def test_inject_context() -> None:
    headers: dict[str, str] = {}
    inject_context(headers, _ctx(), create_baggage({"trace_id": TRACE_ID}))
    assert headers["sentry-trace"] == f"{TRACE_ID}-{SPAN_ID}-1"
    assert headers["baggage"] == f"sentry-trace_id={TRACE_ID}"


def test_inject_without_baggage() -> None:
    headers: dict[str, str] = {}
    inject_context(headers, _ctx())
    assert "sentry-trace" in headers
    assert "baggage" not in headers


def test_inject_merges_existing_header() -> None:
    headers = {"Baggage": "vendor=1,sentry-trace_id=stale", "Accept": "application/json"}
    inject_context(headers, _ctx(), create_baggage({"trace_id": TRACE_ID}))
    assert "Baggage" not in headers
    assert headers["baggage"] == f"vendor=1,sentry-trace_id={TRACE_ID}"
    assert headers["Accept"] == "application/json"


def test_inject_without_baggage_drops_stale_first_party() -> None:
    headers = {"baggage": "vendor=1,sentry-trace_id=stale"}
    inject_context(headers, _ctx())
    assert headers["baggage"] == "vendor=1"


def test_extract_context() -> None:
    headers = {
        "Sentry-Trace": f"{TRACE_ID}-{SPAN_ID}-0",
        "BAGGAGE": "sentry-environment=prod,other=xyz",
    }
    traceparent, baggage = extract_context(headers)
    assert traceparent is not None
    assert traceparent.trace_id == TRACE_ID
    assert traceparent.parent_span_id == SPAN_ID
    assert traceparent.parent_sampled is False
    assert baggage.get("environment") == "prod"
    assert baggage.third_party == "other=xyz"


def test_extract_context_empty() -> None:
    traceparent, baggage = extract_context({})
    assert traceparent is None
    assert baggage.is_empty
    assert baggage.third_party == ""


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://localhost:3000/api", True),
        ("/api/users", True),
        ("https://example.com/api", False),
    ],
)
def test_should_propagate_to_default_targets(url: str, expected: bool) -> None:
    assert should_propagate_to(url, ["localhost", "^/"]) is expected


def test_should_propagate_to_regex_target() -> None:
    assert should_propagate_to("https://api.example.com/v1", [r"^https://api\.example\.com"])
    assert not should_propagate_to("https://example.org", ["[unclosed"])
