"""Shared pytest fixtures for golfsg tests."""

from __future__ import annotations

import pytest

from golfsg.config import reset_settings_cache
from golfsg.telemetry.events import set_sg_telemetry_emitter


@pytest.fixture(autouse=True)
def _reset_state():
    reset_settings_cache()
    set_sg_telemetry_emitter(None)
    yield
    reset_settings_cache()
    set_sg_telemetry_emitter(None)
