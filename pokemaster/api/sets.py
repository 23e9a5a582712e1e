"""
Set API endpoints.

Lists the card sets known to the store and imports them from the catalog.
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from pokemaster.db import list_sets, set_to_model, upsert_set
from pokemaster.db.database import get_session
from pokemaster.jobs.import_sets import import_sets
from pokemaster.models.card_set import CardSet
from pokemaster.services.pokemon_tcg import create_client

router = APIRouter(prefix="/sets", tags=["sets"])


class SetRequest(BaseModel):
    """Request model for saving a set."""

    name: str
    series: str | None = None
    printed_total: int | None = None
    total: int | None = None
    release_date: str | None = None
    symbol_url: str | None = None
    logo_url: str | None = None


class SetResponse(BaseModel):
    """Response model for a set."""

    id: str
    name: str
    series: str | None = None
    printed_total: int | None = None
    total: int | None = None
    release_date: str | None = None
    symbol_url: str | None = None
    logo_url: str | None = None


class ImportResponse(BaseModel):
    """Response model for a set import."""

    imported: int


@router.get("", response_model=list[SetResponse])
async def get_sets(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[SetResponse]:
    """
    Get all sets.

    Returns sets ordered by release date, most recent first.
    """
    db_sets = await list_sets(session)
    return [SetResponse(**asdict(set_to_model(s))) for s in db_sets]


@router.post("/import", response_model=ImportResponse)
async def import_catalog_sets(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Import every set from the Pokémon TCG API.

    Existing sets are overwritten with the catalog's data.
    """
    async with create_client() as client:
        count = await import_sets(session, client)

    return ImportResponse(imported=count)


@router.put("/{set_id}", response_model=SetResponse)
async def save_set(
    set_id: str,
    request: SetRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SetResponse:
    """
    Create or overwrite a set by id.
    """
    db_set = await upsert_set(session, CardSet(id=set_id, **request.model_dump()))
    return SetResponse(**asdict(set_to_model(db_set)))
