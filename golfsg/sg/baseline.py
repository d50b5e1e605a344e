"""PGA Tour expected-strokes reference curves per lie."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Mapping, Tuple


class Lie(str, Enum):
    TEE = "TEE"
    FAIRWAY = "FAIRWAY"
    ROUGH = "ROUGH"
    BUNKER = "BUNKER"
    RECOVERY = "RECOVERY"
    FRINGE = "FRINGE"
    GREEN = "GREEN"


Curve = List[Tuple[float, float]]
BaselineTable = Mapping[Lie, Curve]

# GREEN distances are feet, every other curve is yards. FRINGE has no curve of
# its own; lookups resolve it to FAIRWAY.
PGA_BASELINE: Dict[Lie, Curve] = {
    Lie.TEE: [
        (100, 2.92),
        (120, 2.99),
        (140, 2.97),
        (160, 2.99),
        (180, 3.05),
        (200, 3.12),
        (220, 3.17),
        (240, 3.25),
        (260, 3.45),
        (280, 3.65),
        (300, 3.71),
        (320, 3.79),
        (340, 3.86),
        (360, 3.92),
        (380, 3.96),
        (400, 3.99),
        (420, 4.02),
        (440, 4.08),
        (460, 4.17),
        (480, 4.28),
        (500, 4.41),
        (520, 4.54),
        (540, 4.65),
        (560, 4.74),
        (580, 4.79),
        (600, 4.82),
    ],
    Lie.FAIRWAY: [
        (20, 2.40),
        (40, 2.60),
        (60, 2.70),
        (80, 2.75),
        (100, 2.80),
        (120, 2.85),
        (140, 2.91),
        (160, 2.98),
        (180, 3.08),
        (200, 3.19),
        (220, 3.32),
        (240, 3.45),
        (260, 3.58),
        (280, 3.69),
        (300, 3.78),
        (320, 3.84),
        (340, 3.88),
        (360, 3.95),
        (380, 4.03),
        (400, 4.11),
        (420, 4.15),
        (440, 4.20),
        (460, 4.29),
        (480, 4.40),
        (500, 4.53),
        (520, 4.66),
        (540, 4.78),
        (560, 4.86),
        (580, 4.91),
        (600, 4.94),
    ],
    Lie.ROUGH: [
        (20, 2.59),
        (40, 2.78),
        (60, 2.91),
        (80, 2.96),
        (100, 3.02),
        (120, 3.08),
        (140, 3.15),
        (160, 3.23),
        (180, 3.31),
        (200, 3.42),
        (220, 3.53),
        (240, 3.64),
        (260, 3.74),
        (280, 3.83),
        (300, 3.90),
        (320, 3.95),
        (340, 4.02),
        (360, 4.11),
        (380, 4.21),
        (400, 4.30),
        (420, 4.34),
        (440, 4.39),
        (460, 4.48),
        (480, 4.59),
        (500, 4.72),
        (520, 4.85),
        (540, 4.97),
        (560, 5.05),
        (580, 5.10),
        (600, 5.13),
    ],
    Lie.BUNKER: [
        (20, 2.53),
        (40, 2.82),
        (60, 3.15),
        (80, 3.24),
        (100, 3.23),
        (120, 3.21),
        (140, 3.22),
        (160, 3.28),
        (180, 3.40),
        (200, 3.55),
        (220, 3.70),
        (240, 3.84),
        (260, 3.93),
        (280, 4.00),
        (300, 4.04),
        (320, 4.12),
        (340, 4.26),
        (360, 4.41),
        (380, 4.55),
        (400, 4.69),
        (420, 4.73),
        (440, 4.78),
        (460, 4.87),
        (480, 4.98),
        (500, 5.11),
        (520, 5.24),
        (540, 5.36),
        (560, 5.44),
        (580, 5.49),
        (600, 5.52),
    ],
    Lie.RECOVERY: [
        (100, 3.80),
        (120, 3.78),
        (140, 3.80),
        (160, 3.81),
        (180, 3.82),
        (200, 3.87),
        (220, 3.92),
        (240, 3.97),
        (260, 4.03),
        (280, 4.10),
        (300, 4.20),
        (320, 4.31),
        (340, 4.44),
        (360, 4.56),
        (380, 4.66),
        (400, 4.75),
        (420, 4.79),
        (440, 4.84),
        (460, 4.93),
        (480, 5.04),
        (500, 5.17),
        (520, 5.30),
        (540, 5.42),
        (560, 5.50),
        (580, 5.55),
        (600, 5.58),
    ],
    Lie.FRINGE: [],
    Lie.GREEN: [
        (3, 1.04),
        (4, 1.13),
        (5, 1.23),
        (6, 1.34),
        (7, 1.42),
        (8, 1.50),
        (9, 1.56),
        (10, 1.61),
        (15, 1.78),
        (20, 1.87),
        (30, 1.98),
        (40, 2.06),
        (50, 2.14),
        (60, 2.21),
        (90, 2.40),
    ],
}

REQUIRED_LIES: Tuple[Lie, ...] = (
    Lie.TEE,
    Lie.FAIRWAY,
    Lie.ROUGH,
    Lie.BUNKER,
    Lie.RECOVERY,
    Lie.GREEN,
)


def validate_curve(points: Iterable[Tuple[float, float]]) -> None:
    """Ensure points are strictly increasing in distance."""

    last_distance = None
    for distance, _ in points:
        if last_distance is not None and distance <= last_distance:
            raise ValueError("Curve distances must be strictly increasing")
        last_distance = distance


for _lie, _points in PGA_BASELINE.items():
    validate_curve(_points)


def baseline_is_complete(table: BaselineTable | None = None) -> bool:
    """Return True when every required lie has a non-empty curve."""

    source = PGA_BASELINE if table is None else table
    return all(source.get(lie) for lie in REQUIRED_LIES)


def monotonic_violations(
    table: BaselineTable | None = None,
) -> Dict[Lie, List[Tuple[float, float]]]:
    """Control points whose value drops below the preceding point.

    The reference data is hand-authored and carries a few small dips; they are
    reported here rather than smoothed away.
    """

    source = PGA_BASELINE if table is None else table
    flagged: Dict[Lie, List[Tuple[float, float]]] = {}
    for lie, points in source.items():
        dips = [
            (d1, s1)
            for (_d0, s0), (d1, s1) in zip(points, points[1:])
            if s1 < s0
        ]
        if dips:
            flagged[Lie(lie)] = dips
    return flagged


BASELINE_COMPLETE = baseline_is_complete()


__all__ = [
    "BASELINE_COMPLETE",
    "BaselineTable",
    "Curve",
    "Lie",
    "PGA_BASELINE",
    "REQUIRED_LIES",
    "baseline_is_complete",
    "monotonic_violations",
    "validate_curve",
]
