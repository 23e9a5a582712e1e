"""
Card API endpoints.

Provides listing, search and CRUD for owned cards, plus the price quotes
recorded for each card.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from pokemaster.config import DEFAULT_CONDITION
from pokemaster.db import (
    add_card,
    add_price,
    card_to_model,
    delete_card,
    get_card,
    list_cards,
    list_prices,
    price_to_model,
    search_cards,
    update_card,
    upsert_set,
)
from pokemaster.db.database import get_session
from pokemaster.models.card import Card
from pokemaster.models.db import CardDB
from pokemaster.models.price import Price
from pokemaster.services.pokemon_tcg import create_client, fetch_card, parse_card, parse_set

router = APIRouter(prefix="/cards", tags=["cards"])


class CardRequest(BaseModel):
    """Request model for adding or updating a card."""

    id: int | None = Field(
        default=None,
        description="Ignored; the store assigns ids",
    )
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
    condition: str | None = None
    grade: str | None = None
    quantity: int | None = Field(
        default=None,
        description="Copies owned; stored as 1 when omitted",
    )
    notes: str | None = None

    def to_model(self) -> Card:
        return Card(**self.model_dump(exclude={"id"}))


class CardResponse(BaseModel):
    """Response model for a stored card."""

    id: int
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
    condition: str | None = None
    grade: str | None = None
    quantity: int | None = None
    notes: str | None = None
    date_added: datetime | None = None
    date_updated: datetime | None = None


class CardImportRequest(BaseModel):
    """Request model for adding a card straight from the Pokémon TCG API."""

    tcg_card_id: str = Field(
        ...,
        description="Catalog card id",
        examples=["base1-58"],
    )
    quantity: int = Field(default=1, ge=1)
    condition: str = Field(default=DEFAULT_CONDITION)


class CreatedResponse(BaseModel):
    """Response model for create operations."""

    id: int


class UpdateResponse(BaseModel):
    """Response model for update operations."""

    card_id: int
    updated: bool


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    card_id: int
    deleted: bool
    message: str = Field(
        default="",
        description="User-friendly message about the deletion",
    )


class PriceRequest(BaseModel):
    """Request model for recording a price quote."""

    source: str = Field(..., examples=["tcgplayer"])
    low_price: float | None = None
    mid_price: float | None = None
    high_price: float | None = None
    market_price: float | None = None
    direct_low_price: float | None = None
    trend_price: float | None = None
    currency: str | None = None


class PriceResponse(BaseModel):
    """Response model for a stored price quote."""

    id: int
    card_id: int
    source: str
    low_price: float | None = None
    mid_price: float | None = None
    high_price: float | None = None
    market_price: float | None = None
    direct_low_price: float | None = None
    trend_price: float | None = None
    currency: str | None = None
    last_updated: datetime | None = None


def _card_responses(db_cards: list[CardDB]) -> list[CardResponse]:
    return [CardResponse(**asdict(card_to_model(c))) for c in db_cards]


@router.get("", response_model=list[CardResponse])
async def get_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[CardResponse]:
    """
    Get all owned cards.

    Returns cards ordered by date added, newest first.
    """
    return _card_responses(await list_cards(session))


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    request: CardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CreatedResponse:
    """
    Add a card to the collection.

    Returns the id assigned by the store. The set is not checked here;
    an unknown set id is rejected by the database's foreign key.
    """
    card_id = await add_card(session, request.to_model())
    return CreatedResponse(id=card_id)


@router.post("/import", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def import_card(
    request: CardImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CreatedResponse:
    """
    Add a card looked up in the Pokémon TCG API.

    Saves the card's set first so the new card always references a known set.
    """
    async with create_client() as client:
        data = await fetch_card(client, request.tcg_card_id)

    await upsert_set(session, parse_set(data["set"]))
    card = parse_card(data, quantity=request.quantity, condition=request.condition)
    card_id = await add_card(session, card)
    return CreatedResponse(id=card_id)


@router.get("/search", response_model=list[CardResponse])
async def search_user_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    q: Annotated[str, Query(description="Text to find in card or set names")] = "",
) -> list[CardResponse]:
    """
    Search owned cards by card name or set name.

    Matching is case-insensitive and results are ordered by name.
    An empty query returns every card.
    """
    return _card_responses(await search_cards(session, q))


@router.get("/{card_id}", response_model=CardResponse)
async def get_user_card(
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Get one owned card.

    Returns 404 if the card does not exist.
    """
    db_card = await get_card(session, card_id)

    if db_card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card {card_id} not found",
        )

    return CardResponse(**asdict(card_to_model(db_card)))


@router.put("/{card_id}", response_model=UpdateResponse)
async def update_user_card(
    card_id: int,
    request: CardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UpdateResponse:
    """
    Overwrite an owned card.

    Updating an unknown id succeeds without changing anything;
    `updated` is false in that case.
    """
    updated = await update_card(session, card_id, request.to_model())
    return UpdateResponse(card_id=card_id, updated=updated)


@router.delete("/{card_id}", response_model=DeleteResponse)
async def delete_user_card(
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """
    Delete an owned card and its price quotes.

    Deleting an unknown id succeeds; `deleted` is false in that case.
    """
    deleted = await delete_card(session, card_id)

    if deleted:
        message = "Card removed from your collection."
    else:
        message = "No card with this id was found. Nothing to delete."

    return DeleteResponse(card_id=card_id, deleted=deleted, message=message)


@router.get("/{card_id}/prices", response_model=list[PriceResponse])
async def get_card_prices(
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[PriceResponse]:
    """
    Get the price quotes recorded for a card, most recent first.

    Returns an empty list when there are none.
    """
    db_prices = await list_prices(session, card_id)
    return [PriceResponse(**asdict(price_to_model(p))) for p in db_prices]


@router.post(
    "/{card_id}/prices",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_card_price(
    card_id: int,
    request: PriceRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CreatedResponse:
    """
    Record a price quote for a card.

    Returns 404 if the card does not exist.
    """
    if await get_card(session, card_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card {card_id} not found",
        )

    price_id = await add_price(session, Price(card_id=card_id, **request.model_dump()))
    return CreatedResponse(id=price_id)
