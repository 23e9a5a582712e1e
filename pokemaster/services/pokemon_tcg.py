"""
Pokémon TCG API client.

Fetches sets, searches cards and fetches single cards from the public catalog,
and converts them to domain models. API docs: https://docs.pokemontcg.io/
"""

from dataclasses import dataclass
from typing import Any

import httpx

from pokemaster.config import DEFAULT_CONDITION, Settings, settings
from pokemaster.models.card import Card
from pokemaster.models.card_set import CardSet
from pokemaster.models.errors import CatalogError

# Largest page size the API accepts
MAX_PAGE_SIZE = 250

# Page size for interactive card searches
SEARCH_PAGE_SIZE = 20


def create_client(config: Settings = settings) -> httpx.AsyncClient:
    """Create an HTTP client for the catalog, sending the API key when configured."""
    headers = {"User-Agent": "PokeMaster/1.0"}
    if config.pokemon_tcg_api_key:
        headers["X-Api-Key"] = config.pokemon_tcg_api_key

    return httpx.AsyncClient(
        base_url=config.pokemon_tcg_api_url,
        headers=headers,
        follow_redirects=True,
        timeout=30.0,
    )


def _parse_int(value: Any) -> int | None:
    """Parse catalog numbers that may arrive as strings (e.g., hp "60")."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _first(values: list[str] | None) -> str | None:
    return values[0] if values else None


def parse_set(data: dict[str, Any]) -> CardSet:
    """
    Convert a catalog set payload to a CardSet.

    Args:
        data: Set object as returned by /sets or embedded in a card

    Returns:
        CardSet with image references taken from the "images" object
    """
    images = data.get("images") or {}
    return CardSet(
        id=data["id"],
        name=data["name"],
        series=data.get("series"),
        printed_total=_parse_int(data.get("printedTotal")),
        total=_parse_int(data.get("total")),
        release_date=data.get("releaseDate"),
        symbol_url=images.get("symbol"),
        logo_url=images.get("logo"),
    )


def parse_card(
    data: dict[str, Any],
    quantity: int = 1,
    condition: str = DEFAULT_CONDITION,
) -> Card:
    """
    Convert a catalog card payload to a Card ready to be added.

    Only the first energy type and first subtype are kept. The large image
    doubles as the main image; the TCGplayer product URL is kept as its id.

    Args:
        data: Card object as returned by /cards/{id}
        quantity: Number of copies owned
        condition: Condition of the physical copy
    """
    card_set = data.get("set") or {}
    images = data.get("images") or {}
    tcgplayer = data.get("tcgplayer") or {}
    cardmarket = data.get("cardmarket") or {}

    return Card(
        name=data["name"],
        set_id=card_set["id"],
        set_name=card_set["name"],
        number=data.get("number"),
        rarity=data.get("rarity"),
        type=_first(data.get("types")),
        supertype=data.get("supertype"),
        subtype=_first(data.get("subtypes")),
        hp=_parse_int(data.get("hp")),
        image_url=images.get("large"),
        small_image_url=images.get("small"),
        large_image_url=images.get("large"),
        tcgplayer_id=tcgplayer.get("url"),
        cardmarket_id=cardmarket.get("url"),
        condition=condition,
        quantity=quantity,
    )


@dataclass(frozen=True, slots=True)
class CatalogPage:
    """
    One page of catalog card search results.

    Attributes:
        cards: Raw card payloads, ready for parse_card
        total_count: Number of matches across all pages
    """

    cards: list[dict[str, Any]]
    page: int
    page_size: int
    total_count: int


def _quoted(value: str) -> str:
    # The query syntax has no escape for embedded quotes
    return '"' + value.replace('"', "") + '"'


def build_card_query(
    name: str | None = None,
    set_id: str | None = None,
    rarity: str | None = None,
    card_type: str | None = None,
    supertype: str | None = None,
) -> str:
    """
    Build a catalog card query from optional criteria.

    Names match as a prefix (name:"Pika"*); the other criteria match exactly.
    Criteria are joined with spaces, which the catalog treats as AND.
    An empty string means no filter.
    """
    parts: list[str] = []
    if name:
        parts.append(f"name:{_quoted(name)}*")
    if set_id:
        parts.append(f"set.id:{_quoted(set_id)}")
    if rarity:
        parts.append(f"rarity:{_quoted(rarity)}")
    if card_type:
        parts.append(f"types:{_quoted(card_type)}")
    if supertype:
        parts.append(f"supertype:{_quoted(supertype)}")
    return " ".join(parts)


async def _get_json(client: httpx.AsyncClient, path: str, **params: Any) -> dict[str, Any]:
    """
    GET a catalog path and decode its JSON envelope.

    Raises:
        CatalogError: On transport errors, error statuses, a body that is not
            JSON, or a body without a "data" member
    """
    try:
        response = await client.get(path, params=params or None)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CatalogError(f"Failed to fetch {path}: HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise CatalogError(f"Failed to fetch {path}: {e}") from e

    try:
        body = response.json()
    except ValueError as e:
        raise CatalogError(f"Failed to fetch {path}: response is not JSON") from e

    if not isinstance(body, dict) or "data" not in body:
        raise CatalogError(f"Failed to fetch {path}: response has no data")

    data: dict[str, Any] = body
    return data


async def _fetch_all(
    client: httpx.AsyncClient, path: str, **params: Any
) -> list[dict[str, Any]]:
    """Page through a list endpoint until the reported total count is reached."""
    entries: list[dict[str, Any]] = []
    page = 1

    while True:
        data = await _get_json(client, path, page=page, pageSize=MAX_PAGE_SIZE, **params)
        batch = data["data"]
        entries.extend(batch)

        total_count = data.get("totalCount", 0)
        if not batch or page * MAX_PAGE_SIZE >= total_count:
            break
        page += 1

    return entries


async def fetch_sets(client: httpx.AsyncClient) -> list[CardSet]:
    """
    Fetch every set in the catalog.

    Raises:
        CatalogError: If any page request fails
    """
    return [parse_set(entry) for entry in await _fetch_all(client, "/sets")]


async def fetch_set_cards(client: httpx.AsyncClient, set_id: str) -> list[dict[str, Any]]:
    """
    Fetch every card payload of one set (e.g., "base1").

    Returns an empty list for an unknown set id.

    Raises:
        CatalogError: If any page request fails
    """
    return await _fetch_all(client, "/cards", q=build_card_query(set_id=set_id))


async def search_catalog_cards(
    client: httpx.AsyncClient,
    name: str | None = None,
    *,
    set_id: str | None = None,
    rarity: str | None = None,
    card_type: str | None = None,
    supertype: str | None = None,
    page: int = 1,
    page_size: int = SEARCH_PAGE_SIZE,
) -> CatalogPage:
    """
    Search catalog cards by name prefix and optional filters, one page at a time.

    Raises:
        CatalogError: If the request fails
    """
    query = build_card_query(name, set_id, rarity, card_type, supertype)
    data = await _get_json(client, "/cards", q=query, page=page, pageSize=page_size)

    return CatalogPage(
        cards=data["data"],
        page=data.get("page", page),
        page_size=data.get("pageSize", page_size),
        total_count=data.get("totalCount", len(data["data"])),
    )


async def fetch_card(client: httpx.AsyncClient, tcg_card_id: str) -> dict[str, Any]:
    """
    Fetch one card payload by catalog id (e.g., "base1-58").

    Raises:
        CatalogError: If the request fails or the card does not exist
    """
    data = await _get_json(client, f"/cards/{tcg_card_id}")
    card: dict[str, Any] = data["data"]
    return card
