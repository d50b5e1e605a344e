"""Expected strokes interpolation over the baseline curves."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from .baseline import PGA_BASELINE, BaselineTable, Lie

_LOG = logging.getLogger(__name__)

FEET_PER_METER = 3.28084
METERS_PER_YARD = 0.9144


def meters_to_feet(distance_m: float) -> float:
    return distance_m * FEET_PER_METER


def meters_to_yards(distance_m: float) -> float:
    return distance_m / METERS_PER_YARD


def interpolate(points: List[Tuple[float, float]], distance: float) -> float:
    """Piecewise-linear interpolation helper, clamped at both ends."""

    if not points:
        raise ValueError("points must not be empty")

    if distance <= points[0][0]:
        return points[0][1]

    if distance >= points[-1][0]:
        return points[-1][1]

    for (d0, s0), (d1, s1) in zip(points, points[1:]):
        if d0 <= distance <= d1:
            fraction = (distance - d0) / (d1 - d0)
            return s0 + fraction * (s1 - s0)

    return points[-1][1]  # pragma: no cover - unreachable for validated curves


def _resolve_lie(lie: Lie | str) -> Lie:
    value = Lie(lie)
    if value is Lie.FRINGE:
        return Lie.FAIRWAY
    return value


def expected_strokes(
    lie: Lie | str,
    distance_m: float,
    *,
    table: BaselineTable | None = None,
) -> Optional[float]:
    """Expected strokes to hole out, or ``None`` when no baseline covers the lie.

    Distances are always metres; green lookups convert to feet and every other
    lie converts to yards before interpolating.
    """

    distance = float(distance_m)
    if not math.isfinite(distance) or distance <= 0:
        return 0.0

    source = PGA_BASELINE if table is None else table
    requested = Lie(lie)
    lookup = _resolve_lie(requested)
    points = source.get(lookup)
    if not points:
        if requested is not Lie.FRINGE:
            _LOG.warning("missing baseline curve for lie %s", requested.value)
        return None

    if lookup is Lie.GREEN:
        return interpolate(points, meters_to_feet(distance))
    return interpolate(points, meters_to_yards(distance))


def format_distance(distance_m: float, lie: Lie | str) -> str:
    """Display form of a distance: feet on the green, metres elsewhere."""

    if Lie(lie) is Lie.GREEN:
        return f"{meters_to_feet(distance_m):.1f} ft"
    return f"{distance_m:.0f} m"


__all__ = [
    "FEET_PER_METER",
    "METERS_PER_YARD",
    "expected_strokes",
    "format_distance",
    "interpolate",
    "meters_to_feet",
    "meters_to_yards",
]
