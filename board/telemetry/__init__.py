"""Telemetry helpers and metrics."""

from .metrics import (
    ERROR_COUNTER,
    MESSAGES_CREATED,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    SANITIZE_FAILURES,
    increment_messages_created,
    increment_sanitize_failure,
    observe_request,
)

__all__ = [
    "ERROR_COUNTER",
    "MESSAGES_CREATED",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "SANITIZE_FAILURES",
    "increment_messages_created",
    "increment_sanitize_failure",
    "observe_request",
]
