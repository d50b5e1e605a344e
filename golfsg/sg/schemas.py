"""Pydantic models for shots, rounds and strokes-gained results."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .baseline import Lie


class ShotCategory(str, Enum):
    OTT = "OTT"
    APP = "APP"
    ARG = "ARG"
    PUTT = "PUTT"


CATEGORY_LABELS = {
    ShotCategory.OTT: "Tee shots",
    ShotCategory.APP: "Approach shots",
    ShotCategory.ARG: "Short game",
    ShotCategory.PUTT: "Putting",
}


class DistanceBucket(str, Enum):
    SHORT = "short"
    MID = "mid"
    LONG = "long"
    PUTTING = "putting"


BUCKET_LABELS = {
    DistanceBucket.SHORT: "short shots (under 100 m)",
    DistanceBucket.MID: "mid-range shots (100-200 m)",
    DistanceBucket.LONG: "long shots (200 m and beyond)",
    DistanceBucket.PUTTING: "putting",
}


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys and serializes to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Shot(CamelModel):
    """One stroke, or a putting sequence that finishes the hole."""

    hole_number: int = Field(ge=1)
    shot_number: int = Field(ge=1)
    start_lie: Lie
    start_distance: float
    end_lie: Lie
    end_distance: float
    penalty_strokes: int = Field(default=0, ge=0)
    putts: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    @model_validator(mode="after")
    def _putts_only_on_green(self) -> "Shot":
        if self.putts is not None and self.start_lie is not Lie.GREEN:
            raise ValueError(
                "putts may only be recorded for shots starting on the green"
            )
        return self

    @property
    def is_putting_sequence(self) -> bool:
        return self.start_lie is Lie.GREEN and self.putts is not None


class Round(CamelModel):
    id: str
    created_at: datetime
    course_name: Optional[str] = None
    target_holes: Literal[9, 18] = 18
    ended_at: Optional[datetime] = None
    shots: List[Shot] = Field(default_factory=list)

    @field_validator("created_at", "ended_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are read as UTC so rounds always sort together.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ShotSG(CamelModel):
    sg: Optional[float]
    category: ShotCategory
    is_valid: bool


class ShotDetail(ShotSG):
    hole_number: int
    shot_number: int
    start_lie: Lie
    start_distance: float
    end_lie: Lie
    end_distance: float
    expected_before: Optional[float] = None
    expected_after: Optional[float] = None
    strokes_used: int
    is_holed: bool
    putts: Optional[int] = None


class SGTotals(BaseModel):
    ott: float = Field(default=0.0, alias="OTT")
    app: float = Field(default=0.0, alias="APP")
    arg: float = Field(default=0.0, alias="ARG")
    putt: float = Field(default=0.0, alias="PUTT")
    total: float = Field(default=0.0, alias="TOTAL")

    model_config = ConfigDict(populate_by_name=True)

    def get(self, category: ShotCategory) -> float:
        return getattr(self, category.value.lower())


class RoundsAggregate(CamelModel):
    rounds: int
    average: SGTotals
    best: float
    worst: float


class TrendPoint(CamelModel):
    round_id: str
    created_at: datetime
    total: float
    running_avg: float


class HoleSummary(CamelModel):
    hole_number: int
    strokes: int
    penalties: int
    sg: float
    has_unratable: bool = False


class BucketTotal(CamelModel):
    bucket: DistanceBucket
    sg: float
    shots: int


class BucketInsight(BucketTotal):
    label: str
    message: str


class HoleBreakdown(CamelModel):
    hole_number: int
    total_strokes: int
    total_sg: float
    shots: List[ShotDetail]


class CategoryHighlight(CamelModel):
    category: ShotCategory
    label: str
    value: float


class CategoryExtremes(CamelModel):
    strength: Optional[CategoryHighlight] = None
    weakness: Optional[CategoryHighlight] = None


class KeyMoment(CamelModel):
    label: str
    sg: float
    hole_number: int
    shot_number: int


class KeyMoments(CamelModel):
    gains: List[KeyMoment] = Field(default_factory=list)
    losses: List[KeyMoment] = Field(default_factory=list)


class CumulativePoint(CamelModel):
    index: int
    total: float


class ScoreSummary(CamelModel):
    total_strokes: int
    penalties: int
    adjusted_score: int
    holes_played: int


class SanityCheck(CamelModel):
    expected_from_tee_total: float
    actual_strokes_total: int
    delta: float


class RoundSGSummary(CamelModel):
    round_id: str
    course_name: Optional[str] = None
    totals: SGTotals
    baseline_incomplete: bool
    shots: List[ShotSG]
    holes: List[HoleSummary]
    worst_bucket: Optional[BucketInsight] = None


class RoundReport(RoundSGSummary):
    buckets: List[BucketTotal]
    breakdown: List[HoleBreakdown]
    extremes: CategoryExtremes
    key_moments: KeyMoments
    cumulative: List[CumulativePoint]
    score: ScoreSummary
    sanity: SanityCheck


__all__ = [
    "BUCKET_LABELS",
    "BucketInsight",
    "BucketTotal",
    "CATEGORY_LABELS",
    "CamelModel",
    "CategoryExtremes",
    "CategoryHighlight",
    "CumulativePoint",
    "DistanceBucket",
    "HoleBreakdown",
    "HoleSummary",
    "KeyMoment",
    "KeyMoments",
    "Round",
    "RoundReport",
    "RoundSGSummary",
    "RoundsAggregate",
    "SGTotals",
    "SanityCheck",
    "ScoreSummary",
    "Shot",
    "ShotCategory",
    "ShotDetail",
    "ShotSG",
    "TrendPoint",
]
