"""Telemetry helpers for strokes-gained instrumentation."""

from .events import (  # noqa: F401
    record_round_summary,
    record_rounds_aggregate,
    set_sg_telemetry_emitter,
)

__all__ = [
    "record_round_summary",
    "record_rounds_aggregate",
    "set_sg_telemetry_emitter",
]
