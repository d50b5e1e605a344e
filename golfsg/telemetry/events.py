"""Telemetry helpers for strokes-gained instrumentation."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, MutableMapping, Optional

SGTelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_emitter: Optional[SGTelemetryEmitter] = None
_logger = logging.getLogger("golfsg.telemetry.events")


def set_sg_telemetry_emitter(candidate: SGTelemetryEmitter | None) -> None:
    """Register a telemetry emitter used for strokes-gained instrumentation."""

    global _emitter
    _emitter = candidate if callable(candidate) else None


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    if not _emitter:
        _logger.debug("telemetry emitter not configured for event %s", event)
        return
    try:
        _emitter(event, dict(payload))
    except Exception:  # pragma: no cover
        _logger.exception("failed to emit telemetry event %s", event)


def record_round_summary(
    round_id: str,
    duration_ms: float,
    *,
    shots: int,
    unratable: int,
) -> None:
    payload: Dict[str, object] = {
        "roundId": round_id,
        "durationMs": int(max(0, round(duration_ms))),
        "shots": int(shots),
        "unratable": int(unratable),
        "ts": _now_ms(),
    }
    _safe_emit("sg.round.summary", payload)


def record_rounds_aggregate(
    duration_ms: float, *, rounds: int, last: int | None = None
) -> None:
    payload: Dict[str, object] = {
        "durationMs": int(max(0, round(duration_ms))),
        "rounds": int(rounds),
        "ts": _now_ms(),
    }
    if last is not None:
        payload["last"] = int(last)
    _safe_emit("sg.rounds.aggregate", payload)


def _now_ms() -> int:
    from time import time

    return int(time() * 1000)


__all__ = [
    "set_sg_telemetry_emitter",
    "record_round_summary",
    "record_rounds_aggregate",
]
