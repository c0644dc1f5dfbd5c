"""sentry-trace parsing and TraceContext unit tests."""

import pytest

from baggage_propagation import TraceContext, extract_traceparent_data, generate_span_id, generate_trace_id

TRACE_ID = "12312012123120121231201212312012"
PARENT_SPAN_ID = "1121201211212012"


def test_extract_full_header() -> None:
    data = extract_traceparent_data(f"{TRACE_ID}-{PARENT_SPAN_ID}-1")
    assert data is not None
    assert data.trace_id == TRACE_ID
    assert data.parent_span_id == PARENT_SPAN_ID
    assert data.parent_sampled is True


def test_extract_unsampled() -> None:
    data = extract_traceparent_data(f"{TRACE_ID}-{PARENT_SPAN_ID}-0")
    assert data is not None
    assert data.parent_sampled is False


def test_extract_without_sampled_flag() -> None:
    data = extract_traceparent_data(f"  {TRACE_ID}-{PARENT_SPAN_ID}\t")
    assert data is not None
    assert data.trace_id == TRACE_ID
    assert data.parent_sampled is None


@pytest.mark.parametrize(
    "value",
    ["", "   ", "not-a-trace", f"{TRACE_ID}-{PARENT_SPAN_ID}-2", "ABCDEF0123456789ABCDEF0123456789"],
)
def test_extract_invalid(value: str) -> None:
    assert extract_traceparent_data(value) is None


def test_to_sentry_trace() -> None:
    ctx = TraceContext(trace_id=TRACE_ID, span_id=PARENT_SPAN_ID, op="pageload")
    assert ctx.to_sentry_trace() == f"{TRACE_ID}-{PARENT_SPAN_ID}"
    ctx.sampled = True
    assert ctx.to_sentry_trace() == f"{TRACE_ID}-{PARENT_SPAN_ID}-1"
    ctx.sampled = False
    assert ctx.to_sentry_trace().endswith("-0")


def test_to_dict() -> None:
    ctx = TraceContext(
        trace_id=TRACE_ID,
        span_id="aaaaaaaaaaaaaaaa",
        op="pageload",
        parent_span_id=PARENT_SPAN_ID,
    )
    assert ctx.to_dict() == {
        "trace_id": TRACE_ID,
        "span_id": "aaaaaaaaaaaaaaaa",
        "parent_span_id": PARENT_SPAN_ID,
        "op": "pageload",
    }


def test_generated_ids() -> None:
    trace_id = generate_trace_id()
    span_id = generate_span_id()
    assert len(trace_id) == 32
    assert len(span_id) == 16
    assert all(c in "0123456789abcdef" for c in trace_id + span_id)
    assert len({generate_trace_id() for _ in range(100)}) == 100
