"""Round totals, cross-round aggregates and trend."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from golfsg.rounds.codec import parse_rounds
from golfsg.sg.aggregate import (
    aggregate_rounds,
    has_unratable_shots,
    hole_summaries,
    round_totals,
    select_recent_rounds,
    sg_trend,
    summarize_round,
)
from golfsg.sg.baseline import PGA_BASELINE, Lie
from golfsg.sg.engine import strokes_gained
from golfsg.sg.schemas import Round, Shot, ShotCategory

_START = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

# Tiny table with round numbers; ROUGH deliberately missing.
CLEAN_TABLE = {
    Lie.TEE: [(100, 3.35)],
    Lie.FAIRWAY: [(20, 2.0), (40, 2.35)],
    Lie.ROUGH: [],
    Lie.BUNKER: [(20, 2.6)],
    Lie.RECOVERY: [(100, 3.8)],
    Lie.FRINGE: [],
    Lie.GREEN: [(3, 1.0), (10, 1.6)],
}


def build_shot(
    hole: int,
    shot: int,
    start_lie: Lie,
    start: float,
    end_lie: Lie,
    end: float,
    *,
    penalty: int = 0,
    putts: int | None = None,
) -> Shot:
    return Shot(
        hole_number=hole,
        shot_number=shot,
        start_lie=start_lie,
        start_distance=start,
        end_lie=end_lie,
        end_distance=end,
        penalty_strokes=penalty,
        putts=putts,
    )


def build_round(round_id: str, shots: list[Shot], *, days: int = 0) -> Round:
    return Round(id=round_id, created_at=_START + timedelta(days=days), shots=shots)


def sample_hole(hole: int = 1) -> list[Shot]:
    return [
        build_shot(hole, 1, Lie.TEE, 360.0, Lie.FAIRWAY, 140.0),
        build_shot(hole, 2, Lie.FAIRWAY, 140.0, Lie.BUNKER, 15.0),
        build_shot(hole, 3, Lie.BUNKER, 15.0, Lie.GREEN, 4.0),
        build_shot(hole, 4, Lie.GREEN, 4.0, Lie.GREEN, 0.0, putts=2),
    ]


def test_round_totals_group_by_category() -> None:
    shots = sample_hole()
    totals = round_totals(shots)

    by_category = {category: 0.0 for category in ShotCategory}
    for shot in shots:
        result = strokes_gained(shot)
        by_category[result.category] += result.sg

    assert totals.ott == pytest.approx(by_category[ShotCategory.OTT])
    assert totals.app == pytest.approx(by_category[ShotCategory.APP])
    assert totals.arg == pytest.approx(by_category[ShotCategory.ARG])
    assert totals.putt == pytest.approx(by_category[ShotCategory.PUTT])
    assert totals.total == pytest.approx(sum(by_category.values()))


def test_invalid_shot_is_excluded_and_flagged() -> None:
    valid = build_shot(1, 1, Lie.TEE, 100.0, Lie.FAIRWAY, 10.0)
    invalid = build_shot(1, 2, Lie.ROUGH, 60.0, Lie.GREEN, 2.0)
    round_ = build_round("r-mixed", [valid, invalid])

    assert strokes_gained(valid, table=CLEAN_TABLE).sg == pytest.approx(0.35)

    summary = summarize_round(round_, table=CLEAN_TABLE)
    assert summary.totals.total == pytest.approx(0.35)
    assert summary.totals.ott == pytest.approx(0.35)
    assert summary.totals.app == 0.0
    assert summary.baseline_incomplete is True
    assert [s.is_valid for s in summary.shots] == [True, False]
    assert summary.holes[0].has_unratable is True
    assert summary.holes[0].sg == pytest.approx(0.35)


def test_complete_round_is_not_flagged() -> None:
    summary = summarize_round(build_round("r-clean", sample_hole()))
    assert summary.baseline_incomplete is False
    assert has_unratable_shots(sample_hole()) is False


def test_aggregate_of_no_rounds_is_zero() -> None:
    result = aggregate_rounds([])
    assert result.rounds == 0
    assert result.best == 0.0
    assert result.worst == 0.0
    assert result.average.model_dump() == {
        "ott": 0.0,
        "app": 0.0,
        "arg": 0.0,
        "putt": 0.0,
        "total": 0.0,
    }


def test_aggregate_averages_per_round() -> None:
    wayward = build_shot(1, 1, Lie.TEE, 300.0, Lie.RECOVERY, 120.0)
    rounds = [
        build_round("a", sample_hole(), days=0),
        build_round("b", sample_hole() + sample_hole(2), days=1),
        build_round("c", [wayward], days=2),
    ]
    totals = [round_totals(item.shots) for item in rounds]

    result = aggregate_rounds(rounds)

    assert result.rounds == 3
    assert result.average.total == pytest.approx(sum(t.total for t in totals) / 3)
    assert result.average.putt == pytest.approx(sum(t.putt for t in totals) / 3)
    assert result.best == pytest.approx(max(t.total for t in totals))
    assert result.worst == pytest.approx(min(t.total for t in totals))


def test_select_recent_rounds_newest_first() -> None:
    rounds = [build_round(f"r{i}", [], days=i) for i in range(5)]
    shuffled = [rounds[2], rounds[0], rounds[4], rounds[1], rounds[3]]

    assert [r.id for r in select_recent_rounds(shuffled, 3)] == ["r4", "r3", "r2"]
    assert [r.id for r in select_recent_rounds(shuffled, None)] == [
        "r4",
        "r3",
        "r2",
        "r1",
        "r0",
    ]
    assert select_recent_rounds(shuffled, 0) == []


def test_trend_running_average_oldest_first() -> None:
    short_drive = build_shot(1, 1, Lie.TEE, 100.0, Lie.FAIRWAY, 10.0)
    level_drive = build_shot(1, 1, Lie.TEE, 200.0, Lie.FAIRWAY, 40.0)
    rounds = [
        build_round("late", sample_hole(), days=2),
        build_round("early", [short_drive], days=0),
        build_round("mid", [level_drive], days=1),
    ]

    points = sg_trend(rounds, table=CLEAN_TABLE)

    assert [p.round_id for p in points] == ["early", "mid", "late"]
    totals = [p.total for p in points]
    assert totals[0] == pytest.approx(0.35)
    assert totals[1] == pytest.approx(0.0)
    assert points[0].running_avg == pytest.approx(totals[0])
    assert points[1].running_avg == pytest.approx((totals[0] + totals[1]) / 2)
    assert points[2].running_avg == pytest.approx(sum(totals) / 3)


def test_trend_of_no_rounds_is_empty() -> None:
    assert sg_trend([]) == []


def test_round_without_shots_totals_zero() -> None:
    summary = summarize_round(build_round("empty", []))
    assert summary.totals.total == 0.0
    assert summary.holes == []
    assert summary.worst_bucket is None
    assert summary.baseline_incomplete is False


def test_shots_with_full_baseline_table_match_default() -> None:
    shots = sample_hole()
    assert round_totals(shots, table=PGA_BASELINE) == round_totals(shots)


def test_naive_and_epoch_created_at_sort_together() -> None:
    rounds = parse_rounds(
        '[{"id": "naive", "createdAt": "2024-05-01T09:00:00", "shots": []},'
        ' {"id": "epoch", "createdAt": 1714557600000, "shots": []}]'
    )

    assert all(item.created_at.tzinfo is not None for item in rounds)
    assert [r.id for r in select_recent_rounds(rounds, None)] == ["epoch", "naive"]
    assert [p.round_id for p in sg_trend(rounds)] == ["naive", "epoch"]
    assert aggregate_rounds(rounds).rounds == 2


def test_naive_datetimes_are_read_as_utc() -> None:
    naive = Round(
        id="naive",
        created_at=datetime(2024, 5, 1, 9, 0),
        ended_at=datetime(2024, 5, 1, 13, 30),
    )
    assert naive.created_at == datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    assert naive.ended_at == datetime(2024, 5, 1, 13, 30, tzinfo=timezone.utc)


def test_hole_with_only_unratable_shots() -> None:
    shots = [
        build_shot(1, 1, Lie.TEE, 100.0, Lie.FAIRWAY, 10.0),
        build_shot(2, 1, Lie.ROUGH, 60.0, Lie.GREEN, 2.0, penalty=1),
    ]
    holes = hole_summaries(shots, table=CLEAN_TABLE)

    assert [h.hole_number for h in holes] == [1, 2]
    assert holes[0].has_unratable is False
    assert holes[1].has_unratable is True
    assert holes[1].sg == 0.0
    assert holes[1].strokes == 1
    assert holes[1].penalties == 1
