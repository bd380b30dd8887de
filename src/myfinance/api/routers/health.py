"""
Health router (public).

Endpoints:
    GET /health/live     Process is up; never touches the database
    GET /health/ready    200 when ``SELECT 1`` succeeds, 503 otherwise
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from myfinance.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    status: Literal["alive"] = "alive"


class ReadinessResponse(BaseModel):
    status: Literal["ready", "unavailable"]
    database: Literal["ok", "unreachable"]


async def check_database(engine: AsyncEngine) -> None:
    """Round-trip ``SELECT 1``; raises whatever the driver raises."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get("/ready", response_model=ReadinessResponse, responses={503: {"model": ReadinessResponse}})
async def readiness(request: Request) -> JSONResponse:
    try:
        await check_database(request.app.state.engine)
    except (SQLAlchemyError, OSError) as e:
        logger.warning("readiness_check_failed", error_type=type(e).__name__)
        body = ReadinessResponse(status="unavailable", database="unreachable")
        return JSONResponse(status_code=503, content=body.model_dump())
    return JSONResponse(status_code=200, content=ReadinessResponse(status="ready", database="ok").model_dump())
