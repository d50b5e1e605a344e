"""Security helpers for API authentication."""

from __future__ import annotations

import os
from typing import Set

from fastapi import Header, HTTPException, Query, status

from golfsg.config import env_bool


def _allowed_keys() -> Set[str]:
    keys = {key.strip() for key in os.getenv("API_KEYS", "").split(",") if key.strip()}
    primary = os.getenv("API_KEY")
    if primary:
        keys.add(primary)
    return keys


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    api_key_query: str | None = Query(default=None, alias="apiKey"),
) -> str | None:
    """Require a matching API key header when enabled via env."""

    candidate = x_api_key or api_key_query

    if not env_bool("REQUIRE_API_KEY"):
        return candidate

    allowed = _allowed_keys()
    if not allowed or candidate not in allowed:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )

    return candidate


__all__ = ["require_api_key"]
