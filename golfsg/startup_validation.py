from __future__ import annotations

import logging
import os
from typing import List

from golfsg.config import env_bool
from golfsg.sg.baseline import baseline_is_complete, monotonic_violations

_LOG = logging.getLogger(__name__)


def check_baseline() -> bool:
    """Log the baseline health; returns whether every required curve is present."""

    complete = baseline_is_complete()
    if not complete:
        _LOG.warning("PGA baseline is incomplete; strokes gained may be unratable")

    for lie, points in monotonic_violations().items():
        _LOG.info(
            "baseline curve %s dips at %s",
            lie.value,
            ", ".join(f"{distance:g}" for distance, _ in points),
        )
    return complete


def validate_startup() -> None:
    """Fail fast on missing critical configuration."""

    errors: List[str] = []

    if env_bool("REQUIRE_API_KEY") and not (
        os.getenv("API_KEY") or os.getenv("API_KEYS")
    ):
        errors.append("API_KEY must be set when REQUIRE_API_KEY=1")

    if errors:
        joined = "; ".join(errors)
        raise RuntimeError(f"Startup validation failed: {joined}")

    check_baseline()


__all__ = ["check_baseline", "validate_startup"]
