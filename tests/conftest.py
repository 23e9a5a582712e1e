from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from pokemaster.db.database import Store, get_session, open_store
from pokemaster.main import app
from pokemaster.models.card import Card
from pokemaster.models.card_set import CardSet


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    return tmp_path / "pokemaster.db"


@pytest.fixture
async def store(database_path: Path) -> AsyncGenerator[Store, None]:
    """Open a store on a temporary database file."""
    store = await open_store(f"sqlite+aiosqlite:///{database_path}")
    yield store
    await store.close()


@pytest.fixture
async def session(store: Store) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests."""
    async with store.session_factory() as session:
        yield session


@pytest.fixture
async def client(store: Store) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client with overridden database session."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with store.session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def base_set() -> CardSet:
    return CardSet(
        id="base1",
        name="Base Set",
        series="Base",
        printed_total=102,
        total=102,
        release_date="1999/01/09",
        symbol_url="https://images.pokemontcg.io/base1/symbol.png",
        logo_url="https://images.pokemontcg.io/base1/logo.png",
    )


@pytest.fixture
def jungle_set() -> CardSet:
    return CardSet(id="base2", name="Jungle", series="Base", release_date="1999/06/16")


@pytest.fixture
def pikachu() -> Card:
    return Card(
        name="Pikachu",
        set_id="base1",
        set_name="Base Set",
        number="58",
        rarity="Common",
        type="Lightning",
        supertype="Pokémon",
        subtype="Basic",
        hp=40,
    )


@pytest.fixture
def catalog_set() -> dict:
    """Set object as returned by the Pokémon TCG API."""
    return {
        "id": "base1",
        "name": "Base",
        "series": "Base",
        "printedTotal": 102,
        "total": 102,
        "releaseDate": "1999/01/09",
        "images": {
            "symbol": "https://images.pokemontcg.io/base1/symbol.png",
            "logo": "https://images.pokemontcg.io/base1/logo.png",
        },
    }


@pytest.fixture
def catalog_card(catalog_set: dict) -> dict:
    """Card object as returned by the Pokémon TCG API."""
    return {
        "id": "base1-58",
        "name": "Pikachu",
        "supertype": "Pokémon",
        "subtypes": ["Basic"],
        "hp": "40",
        "types": ["Lightning"],
        "set": catalog_set,
        "number": "58",
        "rarity": "Common",
        "images": {
            "small": "https://images.pokemontcg.io/base1/58.png",
            "large": "https://images.pokemontcg.io/base1/58_hires.png",
        },
        "tcgplayer": {"url": "https://prices.pokemontcg.io/tcgplayer/base1-58"},
        "cardmarket": {"url": "https://prices.pokemontcg.io/cardmarket/base1-58"},
    }
