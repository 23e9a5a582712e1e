"""
Liveness and readiness probes.

Readiness means the store is open and its schema answers queries.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokemaster.db.database import get_session
from pokemaster.models.db import CardDB, SetDB

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class ProbeResponse(BaseModel):
    """Probe result; store details are only filled in by /ready."""

    status: str
    database: str | None = None
    cards: int | None = None
    sets: int | None = None


@router.get("/health", response_model=ProbeResponse)
async def health() -> ProbeResponse:
    """Liveness probe. Never touches the store."""
    return ProbeResponse(status="healthy")


@router.get(
    "/ready",
    response_model=ProbeResponse,
    responses={503: {"model": ProbeResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProbeResponse:
    """
    Readiness probe.

    Counts owned cards and known sets; 503 if the store cannot be queried.
    """
    try:
        cards = await session.scalar(select(func.count()).select_from(CardDB))
        sets = await session.scalar(select(func.count()).select_from(SetDB))
    except SQLAlchemyError as e:
        logger.warning("Store not ready: %s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ProbeResponse(status="not ready", database="disconnected")

    return ProbeResponse(status="ready", database="connected", cards=cards, sets=sets)
