"""Round-level and cross-round strokes-gained aggregation."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from .baseline import BaselineTable, Lie, baseline_is_complete
from .curves import expected_strokes
from .engine import round_half_away_from_zero, shot_detail, strokes_gained
from .schemas import (
    BUCKET_LABELS,
    CATEGORY_LABELS,
    BucketInsight,
    BucketTotal,
    CategoryExtremes,
    CategoryHighlight,
    CumulativePoint,
    DistanceBucket,
    HoleBreakdown,
    HoleSummary,
    KeyMoment,
    KeyMoments,
    Round,
    RoundReport,
    RoundSGSummary,
    RoundsAggregate,
    SanityCheck,
    ScoreSummary,
    SGTotals,
    Shot,
    ShotCategory,
    TrendPoint,
)

SHORT_BUCKET_MAX_M = 100.0
MID_BUCKET_MAX_M = 200.0


def _recorded_strokes(shot: Shot) -> int:
    return shot.putts if shot.putts is not None else 1


def round_totals(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> SGTotals:
    """Sum valid SG per category; unratable shots contribute nothing."""

    sums: Dict[ShotCategory, float] = {category: 0.0 for category in ShotCategory}
    for shot in shots:
        result = strokes_gained(shot, table=table)
        if not result.is_valid or result.sg is None:
            continue
        sums[result.category] += result.sg

    return SGTotals(
        ott=sums[ShotCategory.OTT],
        app=sums[ShotCategory.APP],
        arg=sums[ShotCategory.ARG],
        putt=sums[ShotCategory.PUTT],
        total=sum(sums.values()),
    )


def has_unratable_shots(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> bool:
    return any(not strokes_gained(shot, table=table).is_valid for shot in shots)


def select_recent_rounds(rounds: Iterable[Round], limit: int | None) -> List[Round]:
    """Newest rounds first, truncated to ``limit`` (``None`` keeps all)."""

    ordered = sorted(rounds, key=lambda item: item.created_at, reverse=True)
    if limit is None:
        return ordered
    return ordered[: max(0, limit)]


def aggregate_rounds(
    rounds: Sequence[Round], *, table: BaselineTable | None = None
) -> RoundsAggregate:
    """Per-round averages and best/worst round TOTAL.

    Averages divide by the number of rounds, not shots. An empty selection is
    reported as zeros rather than an error.
    """

    if not rounds:
        return RoundsAggregate(rounds=0, average=SGTotals(), best=0.0, worst=0.0)

    per_round = [round_totals(item.shots, table=table) for item in rounds]
    count = len(per_round)
    average = SGTotals(
        ott=sum(t.ott for t in per_round) / count,
        app=sum(t.app for t in per_round) / count,
        arg=sum(t.arg for t in per_round) / count,
        putt=sum(t.putt for t in per_round) / count,
        total=sum(t.total for t in per_round) / count,
    )
    totals = [t.total for t in per_round]
    return RoundsAggregate(
        rounds=count, average=average, best=max(totals), worst=min(totals)
    )


def sg_trend(
    rounds: Iterable[Round], *, table: BaselineTable | None = None
) -> List[TrendPoint]:
    """Round TOTALs oldest first with the running average up to each round."""

    oldest_first = sorted(rounds, key=lambda item: item.created_at)
    points: List[TrendPoint] = []
    running = 0.0
    for idx, item in enumerate(oldest_first, start=1):
        total = round_totals(item.shots, table=table).total
        running += total
        points.append(
            TrendPoint(
                round_id=item.id,
                created_at=item.created_at,
                total=total,
                running_avg=running / idx,
            )
        )
    return points


def hole_summaries(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> List[HoleSummary]:
    strokes: Dict[int, int] = defaultdict(int)
    penalties: Dict[int, int] = defaultdict(int)
    sums: Dict[int, float] = defaultdict(float)
    unratable: set[int] = set()
    for shot in shots:
        hole = shot.hole_number
        strokes[hole] += _recorded_strokes(shot)
        penalties[hole] += shot.penalty_strokes
        result = strokes_gained(shot, table=table)
        if result.is_valid and result.sg is not None:
            sums[hole] += result.sg
        else:
            unratable.add(hole)

    return [
        HoleSummary(
            hole_number=hole,
            strokes=strokes[hole],
            penalties=penalties[hole],
            sg=sums[hole],
            has_unratable=hole in unratable,
        )
        for hole in sorted(strokes)
    ]


def distance_bucket(shot: Shot) -> DistanceBucket:
    if shot.start_lie is Lie.GREEN:
        return DistanceBucket.PUTTING
    if shot.start_distance < SHORT_BUCKET_MAX_M:
        return DistanceBucket.SHORT
    if shot.start_distance < MID_BUCKET_MAX_M:
        return DistanceBucket.MID
    return DistanceBucket.LONG


def bucket_totals(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> List[BucketTotal]:
    """Valid SG per distance bucket; buckets without a valid shot are omitted."""

    sums: Dict[DistanceBucket, float] = defaultdict(float)
    counts: Dict[DistanceBucket, int] = defaultdict(int)
    for shot in shots:
        result = strokes_gained(shot, table=table)
        if not result.is_valid or result.sg is None:
            continue
        bucket = distance_bucket(shot)
        sums[bucket] += result.sg
        counts[bucket] += 1

    return [
        BucketTotal(bucket=bucket, sg=sums[bucket], shots=counts[bucket])
        for bucket in DistanceBucket
        if counts[bucket]
    ]


def worst_bucket(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> Optional[BucketInsight]:
    totals = bucket_totals(shots, table=table)
    if not totals:
        return None

    worst = min(totals, key=lambda entry: entry.sg)
    label = BUCKET_LABELS[worst.bucket]
    if worst.sg < 0:
        message = (
            f"Most strokes lost on {label}: {worst.sg:.2f} over {worst.shots} shots."
        )
    else:
        message = (
            f"No strokes lost anywhere; {label} gained the least ({worst.sg:+.2f})."
        )
    return BucketInsight(
        bucket=worst.bucket,
        sg=worst.sg,
        shots=worst.shots,
        label=label,
        message=message,
    )


def round_breakdown(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> List[HoleBreakdown]:
    by_hole: Dict[int, List[Shot]] = defaultdict(list)
    for shot in shots:
        by_hole[shot.hole_number].append(shot)

    breakdown: List[HoleBreakdown] = []
    for hole_number in sorted(by_hole):
        hole_shots = sorted(by_hole[hole_number], key=lambda item: item.shot_number)
        details = [shot_detail(shot, table=table) for shot in hole_shots]
        breakdown.append(
            HoleBreakdown(
                hole_number=hole_number,
                total_strokes=sum(
                    _recorded_strokes(shot) + shot.penalty_strokes
                    for shot in hole_shots
                ),
                total_sg=sum(d.sg for d in details if d.is_valid and d.sg is not None),
                shots=details,
            )
        )
    return breakdown


def category_extremes(totals: SGTotals) -> CategoryExtremes:
    """Strongest and weakest category; a category sitting at exactly 0 is not news."""

    entries = [
        CategoryHighlight(
            category=category,
            label=CATEGORY_LABELS[category],
            value=totals.get(category),
        )
        for category in ShotCategory
    ]
    best = max(entries, key=lambda entry: entry.value)
    worst = min(entries, key=lambda entry: entry.value)
    return CategoryExtremes(
        strength=best if best.value != 0 else None,
        weakness=worst if worst.value != 0 else None,
    )


def key_moments(
    shots: Iterable[Shot], *, limit: int = 2, table: BaselineTable | None = None
) -> KeyMoments:
    moments: List[KeyMoment] = []
    for shot in shots:
        result = strokes_gained(shot, table=table)
        if not result.is_valid or result.sg is None:
            continue
        route = f"{shot.start_lie.value} → {shot.end_lie.value}"
        moments.append(
            KeyMoment(
                label=f"Hole {shot.hole_number}: {route}",
                sg=result.sg,
                hole_number=shot.hole_number,
                shot_number=shot.shot_number,
            )
        )

    gains = sorted((m for m in moments if m.sg > 0), key=lambda m: -m.sg)[:limit]
    losses = sorted((m for m in moments if m.sg < 0), key=lambda m: m.sg)[:limit]
    return KeyMoments(gains=gains, losses=losses)


def cumulative_sg(
    shots: Iterable[Shot], *, table: BaselineTable | None = None
) -> List[CumulativePoint]:
    points: List[CumulativePoint] = []
    running = 0.0
    for idx, shot in enumerate(shots, start=1):
        result = strokes_gained(shot, table=table)
        if result.is_valid and result.sg is not None:
            running += result.sg
        points.append(
            CumulativePoint(index=idx, total=round_half_away_from_zero(running))
        )
    return points


def score_summary(shots: Sequence[Shot]) -> ScoreSummary:
    strokes = sum(_recorded_strokes(shot) for shot in shots)
    penalties = sum(shot.penalty_strokes for shot in shots)
    return ScoreSummary(
        total_strokes=strokes,
        penalties=penalties,
        adjusted_score=strokes + penalties,
        holes_played=len({shot.hole_number for shot in shots}),
    )


def tee_sanity_check(
    shots: Sequence[Shot], *, table: BaselineTable | None = None
) -> SanityCheck:
    """Compare what the baseline expected from each hole's first shot to the card."""

    expected_total = 0.0
    seen: set[int] = set()
    for shot in shots:
        if shot.shot_number != 1 or shot.hole_number in seen:
            continue
        seen.add(shot.hole_number)
        expected = expected_strokes(shot.start_lie, shot.start_distance, table=table)
        if expected is not None:
            expected_total += expected

    actual = score_summary(shots).adjusted_score
    return SanityCheck(
        expected_from_tee_total=expected_total,
        actual_strokes_total=actual,
        delta=expected_total - actual,
    )


def _baseline_incomplete(
    shots: Sequence[Shot], table: BaselineTable | None
) -> bool:
    return not baseline_is_complete(table) or has_unratable_shots(shots, table=table)


def summarize_round(
    round_: Round, *, table: BaselineTable | None = None
) -> RoundSGSummary:
    shots = list(round_.shots)
    return RoundSGSummary(
        round_id=round_.id,
        course_name=round_.course_name,
        totals=round_totals(shots, table=table),
        baseline_incomplete=_baseline_incomplete(shots, table),
        shots=[strokes_gained(shot, table=table) for shot in shots],
        holes=hole_summaries(shots, table=table),
        worst_bucket=worst_bucket(shots, table=table),
    )


def build_round_report(
    round_: Round, *, moments: int = 2, table: BaselineTable | None = None
) -> RoundReport:
    summary = summarize_round(round_, table=table)
    shots = list(round_.shots)
    return RoundReport(
        **dict(summary),
        buckets=bucket_totals(shots, table=table),
        breakdown=round_breakdown(shots, table=table),
        extremes=category_extremes(summary.totals),
        key_moments=key_moments(shots, limit=moments, table=table),
        cumulative=cumulative_sg(shots, table=table),
        score=score_summary(shots),
        sanity=tee_sanity_check(shots, table=table),
    )


__all__ = [
    "MID_BUCKET_MAX_M",
    "SHORT_BUCKET_MAX_M",
    "aggregate_rounds",
    "bucket_totals",
    "build_round_report",
    "category_extremes",
    "cumulative_sg",
    "distance_bucket",
    "has_unratable_shots",
    "hole_summaries",
    "key_moments",
    "round_breakdown",
    "round_totals",
    "score_summary",
    "select_recent_rounds",
    "sg_trend",
    "summarize_round",
    "tee_sanity_check",
]
