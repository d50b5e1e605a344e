from __future__ import annotations

import logging
from time import perf_counter
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field

from golfsg.config import get_settings
from golfsg.security import require_api_key
from golfsg.sg.aggregate import (
    aggregate_rounds,
    build_round_report,
    select_recent_rounds,
    sg_trend,
)
from golfsg.sg.baseline import (
    PGA_BASELINE,
    Lie,
    baseline_is_complete,
    monotonic_violations,
)
from golfsg.sg.curves import expected_strokes
from golfsg.sg.engine import shot_detail
from golfsg.sg.schemas import (
    CamelModel,
    Round,
    RoundReport,
    RoundsAggregate,
    Shot,
    ShotDetail,
    TrendPoint,
)
from golfsg.telemetry.events import record_round_summary, record_rounds_aggregate

router = APIRouter(
    prefix="/api/sg", tags=["sg"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


class BaselineResponse(CamelModel):
    complete: bool
    curves: Dict[Lie, List[List[float]]]
    flagged_dips: Dict[Lie, List[List[float]]] = Field(default_factory=dict)


class ExpectedStrokesRequest(CamelModel):
    lie: Lie
    distance_m: float


class ExpectedStrokesResponse(CamelModel):
    lie: Lie
    distance_m: float
    expected_strokes: Optional[float] = None
    available: bool


class AggregateRequest(CamelModel):
    rounds: List[Round] = Field(default_factory=list)
    last: Optional[int] = Field(default=None, ge=1)
    all_rounds: bool = False


class AggregateResponse(CamelModel):
    aggregate: RoundsAggregate
    trend: List[TrendPoint]
    round_ids: List[str]


def _as_lists(points) -> List[List[float]]:
    return [[float(distance), float(value)] for distance, value in points]


@router.get("/baseline", response_model=BaselineResponse)
def get_baseline() -> BaselineResponse:
    return BaselineResponse(
        complete=baseline_is_complete(),
        curves={lie: _as_lists(points) for lie, points in PGA_BASELINE.items()},
        flagged_dips={
            lie: _as_lists(points) for lie, points in monotonic_violations().items()
        },
    )


@router.post("/expected", response_model=ExpectedStrokesResponse)
def post_expected_strokes(payload: ExpectedStrokesRequest) -> ExpectedStrokesResponse:
    value = expected_strokes(payload.lie, payload.distance_m)
    return ExpectedStrokesResponse(
        lie=payload.lie,
        distance_m=payload.distance_m,
        expected_strokes=value,
        available=value is not None,
    )


@router.post("/shots", response_model=ShotDetail)
def post_shot(payload: Shot) -> ShotDetail:
    return shot_detail(payload)


@router.post("/rounds/summary", response_model=RoundReport)
def post_round_summary(payload: Round) -> RoundReport:
    start = perf_counter()
    report = build_round_report(payload, moments=get_settings().key_moments)
    unratable = sum(1 for shot in report.shots if not shot.is_valid)
    if unratable:
        logger.info("round %s has %d unratable shots", payload.id, unratable)
    record_round_summary(
        payload.id,
        (perf_counter() - start) * 1000,
        shots=len(report.shots),
        unratable=unratable,
    )
    return report


@router.post("/rounds/aggregate", response_model=AggregateResponse)
def post_rounds_aggregate(payload: AggregateRequest) -> AggregateResponse:
    start = perf_counter()
    limit: int | None = None
    if not payload.all_rounds:
        limit = payload.last or get_settings().recent_rounds_default
    selected = select_recent_rounds(payload.rounds, limit)
    result = AggregateResponse(
        aggregate=aggregate_rounds(selected),
        trend=sg_trend(selected),
        round_ids=[item.id for item in selected],
    )
    record_rounds_aggregate(
        (perf_counter() - start) * 1000, rounds=len(selected), last=limit
    )
    return result


__all__ = [
    "router",
    "get_baseline",
    "post_expected_strokes",
    "post_shot",
    "post_round_summary",
    "post_rounds_aggregate",
]
