"""
Catalog API endpoints.

Searches the Pokémon TCG API so a card can be picked before it is added
with POST /cards/import. Nothing here touches the store.
"""

from dataclasses import asdict
from typing import Annotated, Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from pokemaster.services.pokemon_tcg import (
    MAX_PAGE_SIZE,
    SEARCH_PAGE_SIZE,
    create_client,
    fetch_set_cards,
    parse_card,
    search_catalog_cards,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


class CatalogCardResponse(BaseModel):
    """A catalog card, flattened the same way an imported card is stored."""

    tcg_card_id: str = Field(..., description="Id to pass to POST /cards/import")
    name: str
    set_id: str
    set_name: str
    number: str | None = None
    rarity: str | None = None
    type: str | None = None
    supertype: str | None = None
    subtype: str | None = None
    hp: int | None = None
    image_url: str | None = None
    small_image_url: str | None = None
    large_image_url: str | None = None
    tcgplayer_id: str | None = None
    cardmarket_id: str | None = None


class CatalogSearchResponse(BaseModel):
    """One page of catalog search results."""

    page: int
    page_size: int
    total_count: int
    cards: list[CatalogCardResponse]


def _card_response(data: dict[str, Any]) -> CatalogCardResponse:
    fields = asdict(parse_card(data))
    for key in ("id", "condition", "grade", "quantity", "notes", "date_added", "date_updated"):
        fields.pop(key)
    return CatalogCardResponse(tcg_card_id=data["id"], **fields)


@router.get("/cards", response_model=CatalogSearchResponse)
async def search_cards_in_catalog(
    q: Annotated[str | None, Query(description="Card name prefix")] = None,
    set_id: str | None = None,
    rarity: str | None = None,
    type: Annotated[str | None, Query(description="Energy type, e.g. Fire")] = None,
    supertype: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = SEARCH_PAGE_SIZE,
) -> CatalogSearchResponse:
    """
    Search the catalog by name prefix and optional filters.

    Returns 502 if the catalog cannot be reached.
    """
    async with create_client() as client:
        result = await search_catalog_cards(
            client,
            q,
            set_id=set_id,
            rarity=rarity,
            card_type=type,
            supertype=supertype,
            page=page,
            page_size=page_size,
        )

    return CatalogSearchResponse(
        page=result.page,
        page_size=result.page_size,
        total_count=result.total_count,
        cards=[_card_response(c) for c in result.cards],
    )


@router.get("/sets/{set_id}/cards", response_model=list[CatalogCardResponse])
async def get_catalog_set_cards(set_id: str) -> list[CatalogCardResponse]:
    """Get every catalog card of one set; empty for an unknown set."""
    async with create_client() as client:
        cards = await fetch_set_cards(client, set_id)

    return [_card_response(c) for c in cards]
