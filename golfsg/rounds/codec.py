"""JSON import/export for rounds handed over by the storage layer.

Payloads are tolerant on the way in: legacy distance keys are mapped, missing
fields get their defaults and anything that still fails validation is dropped
with a log line instead of failing the whole batch.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Literal, Mapping

from pydantic import ValidationError

from golfsg.sg.schemas import Round

logger = logging.getLogger(__name__)

ImportMode = Literal["merge", "replace"]

_LEGACY_DISTANCE_KEYS = {
    "startDistance": "startDistanceM",
    "endDistance": "endDistanceM",
}


def _normalize_shot(payload: Mapping[str, Any]) -> Dict[str, Any]:
    shot = dict(payload)
    for key, legacy in _LEGACY_DISTANCE_KEYS.items():
        value = shot.get(key)
        if value is None:
            value = shot.pop(legacy, None)
        else:
            shot.pop(legacy, None)
        shot[key] = 0 if value is None else value
    return shot


def _normalize_created_at(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if math.isfinite(value):
            return value
    elif isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.now(timezone.utc)


def normalize_round_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill defaults and map legacy keys on a raw round mapping."""

    data = dict(payload)
    data["createdAt"] = _normalize_created_at(
        data.pop("createdAt", data.pop("created_at", None))
    )
    if data.get("targetHoles") is None and data.get("target_holes") is None:
        data["targetHoles"] = 18
    shots = data.get("shots")
    data["shots"] = (
        [_normalize_shot(shot) for shot in shots if isinstance(shot, Mapping)]
        if isinstance(shots, list)
        else []
    )
    return data


def _validate_rounds(items: Iterable[Any]) -> List[Round]:
    rounds: List[Round] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        try:
            rounds.append(Round.model_validate(normalize_round_payload(item)))
        except ValidationError as exc:
            logger.warning(
                "dropping invalid round %s: %d errors",
                item.get("id", "<unknown>"),
                exc.error_count(),
            )
    return rounds


def parse_rounds(text: str | None) -> List[Round]:
    """Parse a JSON array of rounds; malformed input yields an empty list."""

    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("rounds payload is not valid JSON")
        return []
    if not isinstance(data, list):
        return []
    return _validate_rounds(data)


def export_rounds(rounds: Iterable[Round]) -> str:
    payload = [item.model_dump(mode="json", by_alias=True) for item in rounds]
    return json.dumps(payload, indent=2)


def import_rounds(
    text: str,
    existing: Iterable[Round],
    mode: ImportMode = "merge",
) -> List[Round]:
    """Combine imported rounds with ``existing``.

    Unparseable input, or input without a single valid round, leaves the
    existing rounds untouched. ``merge`` keeps existing order and lets imported
    rounds win on id clashes; ``replace`` returns only the imported rounds.
    """

    current = list(existing)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("import ignored: payload is not valid JSON")
        return current
    if not isinstance(parsed, list):
        return current

    imported = _validate_rounds(parsed)
    if not imported:
        return current

    if mode == "replace":
        return imported

    by_id: Dict[str, Round] = {item.id: item for item in current}
    for item in imported:
        by_id[item.id] = item
    return list(by_id.values())


__all__ = [
    "ImportMode",
    "export_rounds",
    "import_rounds",
    "normalize_round_payload",
    "parse_rounds",
]
