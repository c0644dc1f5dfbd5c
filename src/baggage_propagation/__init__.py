"""Baggage and trace-context propagation library."""

from .baggage import (
    Baggage,
    create_baggage,
    get_baggage_value,
    get_third_party_baggage,
    is_baggage_empty,
    merge_and_serialize_baggage,
    parse_baggage_string,
    serialize_baggage,
    set_baggage_value,
)
from .correlator import (
    NAVIGATION_OP,
    PAGELOAD_OP,
    CorrelatorState,
    Operation,
    OperationCorrelator,
)
from .exceptions import PropagationError, PropagationErrorCodes
from .generator import generate_span_id, generate_trace_id
from .headers import (
    BAGGAGE_HEADER_NAME,
    MAX_BAGGAGE_STRING_LENGTH,
    SENTRY_BAGGAGE_KEY_PREFIX,
    SENTRY_TRACE_HEADER_NAME,
)
from .loader import load
from .logger import logger_from_config, new_logger
from .models import LogSection, PropagationConfig, TracingSection
from .propagation import extract_context, inject_context, should_propagate_to
from .span import Span
from .trace_context import TraceContext, TraceparentData, extract_traceparent_data

__all__ = [
    "BAGGAGE_HEADER_NAME",
    "MAX_BAGGAGE_STRING_LENGTH",
    "SENTRY_BAGGAGE_KEY_PREFIX",
    "SENTRY_TRACE_HEADER_NAME",
    "Baggage",
    "create_baggage",
    "get_baggage_value",
    "set_baggage_value",
    "is_baggage_empty",
    "get_third_party_baggage",
    "parse_baggage_string",
    "serialize_baggage",
    "merge_and_serialize_baggage",
    "TraceContext",
    "TraceparentData",
    "extract_traceparent_data",
    "Span",
    "Operation",
    "OperationCorrelator",
    "CorrelatorState",
    "PAGELOAD_OP",
    "NAVIGATION_OP",
    "generate_trace_id",
    "generate_span_id",
    "extract_context",
    "inject_context",
    "should_propagate_to",
    "PropagationConfig",
    "LogSection",
    "TracingSection",
    "load",
    "new_logger",
    "logger_from_config",
    "PropagationError",
    "PropagationErrorCodes",
]
