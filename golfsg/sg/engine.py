"""Pure strokes-gained computation helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .baseline import BaselineTable, Lie
from .curves import expected_strokes
from .schemas import Shot, ShotCategory, ShotDetail, ShotSG

ARG_MAX_DISTANCE_M = 30.0
SG_DECIMALS = 3


def round_half_away_from_zero(value: float, places: int = SG_DECIMALS) -> float:
    """Round on the decimal form of ``value``; ties move away from zero."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def categorize_shot(shot: Shot) -> ShotCategory:
    """Bucket a shot by where it started; the outcome never matters."""

    lie = shot.start_lie
    if lie is Lie.TEE:
        return ShotCategory.OTT
    if lie is Lie.GREEN:
        return ShotCategory.PUTT
    if lie is Lie.FRINGE:
        return ShotCategory.ARG
    if lie in (Lie.BUNKER, Lie.RECOVERY):
        return ShotCategory.ARG
    if shot.start_distance <= ARG_MAX_DISTANCE_M:
        return ShotCategory.ARG
    return ShotCategory.APP


def is_holed(shot: Shot) -> bool:
    if shot.end_lie is Lie.GREEN and shot.end_distance == 0:
        return True
    return shot.is_putting_sequence


def strokes_used(shot: Shot) -> int:
    if shot.is_putting_sequence:
        return shot.putts + shot.penalty_strokes
    return 1 + shot.penalty_strokes


def shot_detail(shot: Shot, *, table: BaselineTable | None = None) -> ShotDetail:
    """Strokes gained for one shot along with the expectations behind it."""

    category = categorize_shot(shot)
    holed = is_holed(shot)
    used = strokes_used(shot)

    expected_before = expected_strokes(shot.start_lie, shot.start_distance, table=table)
    expected_after: Optional[float]
    if holed:
        expected_after = 0.0
    else:
        expected_after = expected_strokes(shot.end_lie, shot.end_distance, table=table)

    sg: Optional[float] = None
    valid = expected_before is not None and expected_after is not None
    if valid:
        sg = round_half_away_from_zero(expected_before - expected_after - used)

    return ShotDetail(
        sg=sg,
        category=category,
        is_valid=valid,
        hole_number=shot.hole_number,
        shot_number=shot.shot_number,
        start_lie=shot.start_lie,
        start_distance=shot.start_distance,
        end_lie=shot.end_lie,
        end_distance=shot.end_distance,
        expected_before=expected_before,
        expected_after=expected_after,
        strokes_used=used,
        is_holed=holed,
        putts=shot.putts,
    )


def strokes_gained(shot: Shot, *, table: BaselineTable | None = None) -> ShotSG:
    """Strokes gained for a single shot.

    Missing baseline coverage for either end of the shot yields an invalid
    result (``sg`` is ``None``) instead of raising, so batches keep going.
    """

    detail = shot_detail(shot, table=table)
    return ShotSG(sg=detail.sg, category=detail.category, is_valid=detail.is_valid)


__all__ = [
    "ARG_MAX_DISTANCE_M",
    "SG_DECIMALS",
    "categorize_shot",
    "is_holed",
    "round_half_away_from_zero",
    "shot_detail",
    "strokes_gained",
    "strokes_used",
]
