"""
Database CRUD operations.

Provides async functions for listing, adding, updating, deleting and
searching owned cards, plus the set and price lookups that go with them.
Each function runs one statement on the session it is given; committing is
left to the caller.
"""

import logging
from typing import Any

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pokemaster.config import DEFAULT_CURRENCY, DEFAULT_QUANTITY
from pokemaster.models.card import Card
from pokemaster.models.card_set import CardSet
from pokemaster.models.db import CardDB, PriceDB, SetDB
from pokemaster.models.price import Price

logger = logging.getLogger(__name__)


# --- Card Operations ---


def _card_values(card: Card) -> dict[str, Any]:
    """Column values for every mutable card field."""
    return {
        "name": card.name,
        "set_id": card.set_id,
        "set_name": card.set_name,
        "number": card.number,
        "rarity": card.rarity,
        "type": card.type,
        "supertype": card.supertype,
        "subtype": card.subtype,
        "hp": card.hp,
        "image_url": card.image_url,
        "small_image_url": card.small_image_url,
        "large_image_url": card.large_image_url,
        "tcgplayer_id": card.tcgplayer_id,
        "cardmarket_id": card.cardmarket_id,
        "condition": card.condition,
        "grade": card.grade,
        "quantity": card.quantity if card.quantity is not None else DEFAULT_QUANTITY,
        "notes": card.notes,
    }


async def list_cards(session: AsyncSession) -> list[CardDB]:
    """Get all owned cards, newest first."""
    result = await session.execute(
        select(CardDB).order_by(CardDB.date_added.desc(), CardDB.id.desc())
    )
    return list(result.scalars().all())


async def get_card(session: AsyncSession, card_id: int) -> CardDB | None:
    """
    Get one card by id.

    Returns None if no card has this id.
    """
    result = await session.execute(select(CardDB).where(CardDB.id == card_id))
    return result.scalar_one_or_none()


async def add_card(session: AsyncSession, card: Card) -> int:
    """
    Add a card to the collection.

    Any id on the input is ignored. Quantity defaults to 1; other missing
    fields are stored as NULL, overriding column defaults, the same way
    update_card writes them. The referenced set is not looked up here.

    Returns:
        The id assigned to the new card
    """
    result = await session.execute(
        insert(CardDB).values(**_card_values(card)).returning(CardDB.id)
    )
    card_id: int = result.scalar_one()
    logger.debug("Added card %d (%s)", card_id, card.name)
    return card_id


async def update_card(session: AsyncSession, card_id: int, card: Card) -> bool:
    """
    Overwrite every mutable field of a card and stamp date_updated.

    Updating an id that does not exist changes nothing and is not an error.

    Returns:
        True if a card matched the id, False otherwise.
    """
    result = await session.execute(
        update(CardDB)
        .where(CardDB.id == card_id)
        .values(**_card_values(card), date_updated=func.now())
        .execution_options(synchronize_session="fetch")
    )
    # rowcount is available on UPDATE results; type stubs incomplete for async
    matched = int(result.rowcount) > 0  # type: ignore[attr-defined]
    logger.debug("Updated card %d (matched=%s)", card_id, matched)
    return matched


async def delete_card(session: AsyncSession, card_id: int) -> bool:
    """
    Delete a card.

    Prices, price history and tag links of the card are removed by the
    database's cascading foreign keys. Deleting an unknown id is not an error.

    Returns:
        True if a card was deleted, False if none had this id.
    """
    result = await session.execute(
        delete(CardDB)
        .where(CardDB.id == card_id)
        .execution_options(synchronize_session="fetch")
    )
    deleted = int(result.rowcount) > 0  # type: ignore[attr-defined]
    logger.debug("Deleted card %d (deleted=%s)", card_id, deleted)
    return deleted


async def search_cards(session: AsyncSession, query: str) -> list[CardDB]:
    """
    Find cards whose name or set name contains the query.

    Uses SQLite LIKE, which ignores case for ASCII letters. An empty query
    matches every card. Results are ordered by card name.
    """
    pattern = f"%{query}%"
    result = await session.execute(
        select(CardDB)
        .where(or_(CardDB.name.like(pattern), CardDB.set_name.like(pattern)))
        .order_by(CardDB.name, CardDB.id)
    )
    return list(result.scalars().all())


def card_to_model(db_card: CardDB) -> Card:
    """Convert a database card to a domain model."""
    return Card(
        id=db_card.id,
        name=db_card.name,
        set_id=db_card.set_id,
        set_name=db_card.set_name,
        number=db_card.number,
        rarity=db_card.rarity,
        type=db_card.type,
        supertype=db_card.supertype,
        subtype=db_card.subtype,
        hp=db_card.hp,
        image_url=db_card.image_url,
        small_image_url=db_card.small_image_url,
        large_image_url=db_card.large_image_url,
        tcgplayer_id=db_card.tcgplayer_id,
        cardmarket_id=db_card.cardmarket_id,
        condition=db_card.condition,
        grade=db_card.grade,
        quantity=db_card.quantity,
        notes=db_card.notes,
        date_added=db_card.date_added,
        date_updated=db_card.date_updated,
    )


# --- Set Operations ---


async def list_sets(session: AsyncSession) -> list[SetDB]:
    """
    Get all sets, most recently released first.

    Sets without a release date sort where SQLite puts NULLs (last, for DESC).
    """
    result = await session.execute(select(SetDB).order_by(SetDB.release_date.desc()))
    return list(result.scalars().all())


async def get_set(session: AsyncSession, set_id: str) -> SetDB | None:
    """Get a set by its catalog id."""
    result = await session.execute(select(SetDB).where(SetDB.id == set_id))
    return result.scalar_one_or_none()


async def upsert_set(session: AsyncSession, card_set: CardSet) -> SetDB:
    """
    Insert or update a set.

    If a set with the same id exists, overwrites its fields.
    Otherwise creates a new record.
    """
    existing = await get_set(session, card_set.id)

    if existing:
        existing.name = card_set.name
        existing.series = card_set.series
        existing.printed_total = card_set.printed_total
        existing.total = card_set.total
        existing.release_date = card_set.release_date
        existing.symbol_url = card_set.symbol_url
        existing.logo_url = card_set.logo_url
        await session.flush()
        logger.debug("Updated set %s", card_set.id)
        return existing

    db_set = SetDB(
        id=card_set.id,
        name=card_set.name,
        series=card_set.series,
        printed_total=card_set.printed_total,
        total=card_set.total,
        release_date=card_set.release_date,
        symbol_url=card_set.symbol_url,
        logo_url=card_set.logo_url,
    )
    session.add(db_set)
    await session.flush()
    logger.debug("Added set %s", card_set.id)
    return db_set


def set_to_model(db_set: SetDB) -> CardSet:
    """Convert a database set to a domain model."""
    return CardSet(
        id=db_set.id,
        name=db_set.name,
        series=db_set.series,
        printed_total=db_set.printed_total,
        total=db_set.total,
        release_date=db_set.release_date,
        symbol_url=db_set.symbol_url,
        logo_url=db_set.logo_url,
    )


# --- Price Operations ---


async def list_prices(session: AsyncSession, card_id: int) -> list[PriceDB]:
    """
    Get all price quotes for a card, most recent first.

    Returns an empty list when the card has no quotes or does not exist.
    """
    result = await session.execute(
        select(PriceDB)
        .where(PriceDB.card_id == card_id)
        .order_by(PriceDB.last_updated.desc(), PriceDB.id.desc())
    )
    return list(result.scalars().all())


async def add_price(session: AsyncSession, price: Price) -> int:
    """
    Record a price quote for a card.

    Currency defaults to USD. Raises IntegrityError if the card does not exist.

    Returns:
        The id assigned to the new quote
    """
    db_price = PriceDB(
        card_id=price.card_id,
        source=price.source,
        low_price=price.low_price,
        mid_price=price.mid_price,
        high_price=price.high_price,
        market_price=price.market_price,
        direct_low_price=price.direct_low_price,
        trend_price=price.trend_price,
        currency=price.currency or DEFAULT_CURRENCY,
    )
    session.add(db_price)
    await session.flush()
    logger.debug("Added %s price %d for card %d", db_price.source, db_price.id, db_price.card_id)
    return db_price.id


def price_to_model(db_price: PriceDB) -> Price:
    """Convert a database price to a domain model."""
    return Price(
        id=db_price.id,
        card_id=db_price.card_id,
        source=db_price.source,
        low_price=db_price.low_price,
        mid_price=db_price.mid_price,
        high_price=db_price.high_price,
        market_price=db_price.market_price,
        direct_low_price=db_price.direct_low_price,
        trend_price=db_price.trend_price,
        currency=db_price.currency,
        last_updated=db_price.last_updated,
    )
