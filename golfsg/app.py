from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from golfsg.api.health import health as _health_handler
from golfsg.api.routers.sg import router as sg_router
from golfsg.config import get_settings
from golfsg.startup_validation import validate_startup


@asynccontextmanager
async def lifespan(app: FastAPI):
    level = get_settings().log_level.upper()
    logging.getLogger("golfsg").setLevel(getattr(logging, level, logging.INFO))
    validate_startup()
    yield


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sg_router)
app.add_api_route("/health", _health_handler, methods=["GET"])


__all__ = ["app"]
