"""Strokes gained core package."""

from .aggregate import (  # noqa: F401
    aggregate_rounds,
    round_totals,
    sg_trend,
    summarize_round,
)
from .baseline import (  # noqa: F401
    BASELINE_COMPLETE,
    PGA_BASELINE,
    Lie,
    baseline_is_complete,
)
from .curves import expected_strokes  # noqa: F401
from .engine import categorize_shot, strokes_gained  # noqa: F401
from .schemas import Round, Shot, ShotCategory, ShotSG  # noqa: F401
