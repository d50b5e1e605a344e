from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from golfsg.app import app


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.delenv("REQUIRE_API_KEY", raising=False)
    with TestClient(app) as test_client:
        yield test_client
