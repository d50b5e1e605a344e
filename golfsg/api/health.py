import platform
import time
from typing import Any, Dict

from golfsg.config import env_bool
from golfsg.sg.baseline import (
    PGA_BASELINE,
    baseline_is_complete,
    monotonic_violations,
)

BUILD_VERSION = "0.1.0"


async def health() -> Dict[str, Any]:
    dips = monotonic_violations()
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "ts": time.time(),
        "baseline": {
            "complete": baseline_is_complete(),
            "curves": sorted(
                lie.value for lie, points in PGA_BASELINE.items() if points
            ),
            "flaggedDips": sum(len(points) for points in dips.values()),
        },
        "auth": {"apiKeyRequired": env_bool("REQUIRE_API_KEY")},
        "runtime": {
            "python": platform.python_version(),
        },
    }
