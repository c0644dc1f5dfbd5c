"""Operation bookkeeping for pageload and navigation traces.

An ``OperationCorrelator`` is owned by one document or session. It holds at
most one active ``Operation`` at a time; every span started while that
operation is active is parented to the operation's root span.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any

import structlog

from .baggage import Baggage, merge_and_serialize_baggage, parse_baggage_string
from .exceptions import PropagationError, PropagationErrorCodes
from .generator import generate_span_id, generate_trace_id
from .headers import BAGGAGE_HEADER_NAME, SENTRY_TRACE_HEADER_NAME
from .models import PropagationConfig
from .propagation import should_propagate_to
from .span import Span
from .trace_context import TraceContext, extract_traceparent_data

logger = structlog.stdlib.get_logger(__name__)

PAGELOAD_OP = "pageload"
NAVIGATION_OP = "navigation"


class CorrelatorState(str, Enum):
    NO_CONTEXT = "no_context"
    PAGELOAD = "pageload"
    NAVIGATION = "navigation"
    OTHER = "other"


class Operation:
    """A root span and the child spans created under it."""

    def __init__(
        self,
        op: str,
        name: str,
        trace_id: str | None = None,
        parent_span_id: str | None = None,
        sampled: bool | None = None,
        baggage: Baggage | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self.name = name
        self.trace_id = trace_id or generate_trace_id()
        self.sampled = sampled
        self.baggage = baggage if baggage is not None else Baggage()
        self.root = Span(
            span_id=generate_span_id(),
            trace_id=self.trace_id,
            op=op,
            parent_span_id=parent_span_id,
            description=name,
        )
        self._children: list[Span] = []

    @property
    def op(self) -> str:
        return self.root.op

    @property
    def is_finished(self) -> bool:
        return self.root.is_finished

    @property
    def spans(self) -> list[Span]:
        with self._lock:
            return list(self._children)

    @property
    def trace_context(self) -> TraceContext:
        return TraceContext(
            trace_id=self.trace_id,
            span_id=self.root.span_id,
            op=self.op,
            parent_span_id=self.root.parent_span_id,
            sampled=self.sampled,
        )

    def start_child(
        self,
        op: str,
        description: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> Span:
        """Start a span whose parent is this operation's root span.

        Raises:
            PropagationError: OPERATION_FINISHED once the root span has finished
        """
        with self._lock:
            if self.root.is_finished:
                logger.warning(
                    "Rejected span on finished operation",
                    operation=self.name,
                    trace_id=self.trace_id,
                    span_op=op,
                )
                raise PropagationError(
                    code=PropagationErrorCodes.OPERATION_FINISHED,
                    message=f"Operation '{self.name}' has already finished",
                )
            span = Span(
                span_id=generate_span_id(),
                trace_id=self.trace_id,
                op=op,
                parent_span_id=self.root.span_id,
                description=description,
                data=dict(data) if data else {},
            )
            self._children.append(span)
            return span

    def finish(self, status: str = "ok") -> None:
        """Finish the root span. Children still open are marked cancelled."""
        with self._lock:
            if self.root.is_finished:
                return
            for child in self._children:
                child.finish("cancelled")
            self.root.finish(status)
        logger.debug(
            "Operation finished",
            operation=self.name,
            op=self.op,
            trace_id=self.trace_id,
            status=status,
        )

    def to_event(self) -> dict[str, Any]:
        """Build the transaction payload for this operation."""
        return {
            "type": "transaction",
            "transaction": self.name,
            "start_timestamp": self.root.start_timestamp,
            "timestamp": self.root.end_timestamp,
            "contexts": {"trace": self.trace_context.to_dict()},
            "spans": [s.to_dict() for s in self.spans],
        }


class OperationCorrelator:
    """Tracks the active operation for one document or session."""

    def __init__(self, config: PropagationConfig | None = None) -> None:
        self._config = config or PropagationConfig()
        self._lock = threading.Lock()
        self._current: Operation | None = None
        self._state = CorrelatorState.NO_CONTEXT

    @property
    def current(self) -> Operation | None:
        with self._lock:
            return self._current

    @property
    def state(self) -> CorrelatorState:
        with self._lock:
            return self._state

    def start_pageload(
        self,
        sentry_trace: str | None = None,
        baggage: str | None = None,
        name: str = PAGELOAD_OP,
    ) -> Operation:
        """Start the initial pageload operation.

        Args:
            sentry_trace: trace marker discovered on the page, if any. Its
                trace id is inherited and its span id becomes the parent of
                the operation's root span.
            baggage: baggage marker discovered on the page, if any
            name: transaction name
        """
        marker = extract_traceparent_data(sentry_trace) if sentry_trace else None
        trace_id = marker.trace_id if marker else None
        parent_span_id = marker.parent_span_id if marker and trace_id else None
        sampled = marker.parent_sampled if marker and trace_id else None
        return self.start_operation(
            PAGELOAD_OP,
            name,
            trace_id=trace_id,
            parent_span_id=parent_span_id,
            sampled=sampled,
            baggage=_page_baggage(baggage, inherit_first_party=trace_id is not None),
        )

    def start_navigation(self, name: str = NAVIGATION_OP) -> Operation:
        """Start a navigation operation on a fresh trace."""
        return self.start_operation(NAVIGATION_OP, name)

    def start_operation(
        self,
        op: str,
        name: str,
        trace_id: str | None = None,
        parent_span_id: str | None = None,
        sampled: bool | None = None,
        baggage: Baggage | None = None,
    ) -> Operation:
        """Make a new operation current, finishing the previous one."""
        operation = Operation(
            op,
            name,
            trace_id=trace_id,
            parent_span_id=parent_span_id,
            sampled=sampled,
            baggage=baggage,
        )
        self._fill_baggage(operation)
        with self._lock:
            previous = self._current
            self._current = operation
            self._state = _state_for(op)
        if previous is not None:
            previous.finish()
        logger.debug(
            "Operation started",
            operation=name,
            op=op,
            trace_id=operation.trace_id,
            span_id=operation.root.span_id,
            parent_span_id=parent_span_id,
        )
        return operation

    def start_span(
        self,
        op: str,
        description: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> Span:
        """Start a child span on the current operation.

        Raises:
            PropagationError: NO_ACTIVE_OPERATION when nothing is running,
                OPERATION_FINISHED when the current operation has ended
        """
        return self._require_current().start_child(op, description, data)

    def finish_operation(self, status: str = "ok") -> Operation | None:
        """Finish and clear the current operation. Returns it, or None.

        The correlator is back in NO_CONTEXT afterwards.
        """
        with self._lock:
            operation = self._current
            self._current = None
            self._state = CorrelatorState.NO_CONTEXT
        if operation is not None:
            operation.finish(status)
        return operation

    def outgoing_headers(self, url: str, existing_baggage: str | None = None) -> dict[str, str]:
        """Headers to attach to an outgoing request made during the current operation.

        Returns an empty dict when tracing is disabled or ``url`` matches none
        of the configured propagation targets.

        Args:
            url: destination of the outgoing request
            existing_baggage: baggage value another layer already set on the request
        """
        operation = self._require_current()
        tracing = self._config.tracing
        if not tracing.enabled or not should_propagate_to(url, tracing.trace_propagation_targets):
            return {}
        headers = {SENTRY_TRACE_HEADER_NAME: operation.trace_context.to_sentry_trace()}
        if tracing.propagate_baggage:
            merged = merge_and_serialize_baggage(operation.baggage, existing_baggage)
        else:
            merged = existing_baggage or ""
        if merged:
            headers[BAGGAGE_HEADER_NAME] = merged
        return headers

    def _require_current(self) -> Operation:
        with self._lock:
            operation = self._current
        if operation is None:
            raise PropagationError(
                code=PropagationErrorCodes.NO_ACTIVE_OPERATION,
                message="No operation is active",
            )
        return operation

    def _fill_baggage(self, operation: Operation) -> None:
        # Upstream entries stay, but trace_id always names this operation's trace.
        inherited = not operation.baggage.is_empty
        operation.baggage.set("trace_id", operation.trace_id)
        if not inherited:
            operation.baggage.set("sample_rate", f"{self._config.tracing.sample_rate:g}")


def _page_baggage(raw: str | None, inherit_first_party: bool) -> Baggage | None:
    """Parse page baggage. First-party entries only belong to the marker's trace."""
    if not raw:
        return None
    parsed = parse_baggage_string(raw)
    if inherit_first_party:
        return parsed
    return Baggage(third_party=parsed.third_party)


def _state_for(op: str) -> CorrelatorState:
    if op == PAGELOAD_OP:
        return CorrelatorState.PAGELOAD
    if op == NAVIGATION_OP:
        return CorrelatorState.NAVIGATION
    return CorrelatorState.OTHER
