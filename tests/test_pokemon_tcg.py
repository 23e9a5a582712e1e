"""Tests for the Pokémon TCG API client."""

import httpx
import pytest
import respx

from pokemaster.config import Settings
from pokemaster.models.errors import CatalogError
from pokemaster.services.pokemon_tcg import (
    MAX_PAGE_SIZE,
    SEARCH_PAGE_SIZE,
    build_card_query,
    create_client,
    fetch_card,
    fetch_set_cards,
    fetch_sets,
    parse_card,
    parse_set,
    search_catalog_cards,
)

API_URL = "https://api.pokemontcg.io/v2"


def _set_entry(index: int) -> dict:
    return {"id": f"set{index}", "name": f"Set {index}"}


@pytest.fixture
def config() -> Settings:
    return Settings(pokemon_tcg_api_url=API_URL, pokemon_tcg_api_key="")


class TestParseSet:
    def test_parses_full_set(self, catalog_set: dict) -> None:
        """Catalog field names map onto the set record."""
        card_set = parse_set(catalog_set)

        assert card_set.id == "base1"
        assert card_set.printed_total == 102
        assert card_set.release_date == "1999/01/09"
        assert card_set.symbol_url == "https://images.pokemontcg.io/base1/symbol.png"
        assert card_set.logo_url == "https://images.pokemontcg.io/base1/logo.png"

    def test_missing_optional_fields(self) -> None:
        """Absent fields become None."""
        card_set = parse_set({"id": "promo", "name": "Promo"})

        assert card_set.series is None
        assert card_set.total is None
        assert card_set.logo_url is None


class TestParseCard:
    def test_parses_card(self, catalog_card: dict) -> None:
        """Card payload is flattened onto the card record."""
        card = parse_card(catalog_card, quantity=3, condition="Played")

        assert card.id is None
        assert card.name == "Pikachu"
        assert card.set_id == "base1"
        assert card.set_name == "Base"
        assert card.type == "Lightning"
        assert card.subtype == "Basic"
        assert card.hp == 40
        assert card.image_url == "https://images.pokemontcg.io/base1/58_hires.png"
        assert card.small_image_url == "https://images.pokemontcg.io/base1/58.png"
        assert card.tcgplayer_id == "https://prices.pokemontcg.io/tcgplayer/base1-58"
        assert card.quantity == 3
        assert card.condition == "Played"

    def test_trainer_without_hp_or_types(self, catalog_set: dict) -> None:
        """Cards without hp, types or market links still parse."""
        card = parse_card(
            {"name": "Bill", "supertype": "Trainer", "set": catalog_set, "number": "91"}
        )

        assert card.hp is None
        assert card.type is None
        assert card.subtype is None
        assert card.tcgplayer_id is None
        assert card.condition == "Near Mint"
        assert card.quantity == 1

    def test_non_numeric_hp(self, catalog_card: dict) -> None:
        """Unparseable hp is dropped rather than failing."""
        card = parse_card({**catalog_card, "hp": "None"})

        assert card.hp is None


class TestCreateClient:
    def test_sends_api_key_when_configured(self) -> None:
        """The API key header is set only when a key is configured."""
        client = create_client(Settings(pokemon_tcg_api_key="secret"))

        assert client.headers["X-Api-Key"] == "secret"
        assert str(client.base_url).startswith("https://api.pokemontcg.io/v2")

    def test_no_api_key_header_by_default(self, config: Settings) -> None:
        client = create_client(config)

        assert "X-Api-Key" not in client.headers


class TestFetchSets:
    @respx.mock
    async def test_single_page(self, config: Settings, catalog_set: dict) -> None:
        """A short catalog is fetched in one request."""
        route = respx.get(f"{API_URL}/sets").mock(
            return_value=httpx.Response(200, json={"data": [catalog_set], "totalCount": 1})
        )

        async with create_client(config) as client:
            sets = await fetch_sets(client)

        assert [s.id for s in sets] == ["base1"]
        assert route.call_count == 1
        assert route.calls[0].request.url.params["pageSize"] == str(MAX_PAGE_SIZE)

    @respx.mock
    async def test_pages_until_total_count(self, config: Settings) -> None:
        """Pages are requested until every set has been read."""
        total = MAX_PAGE_SIZE + 1

        def page_response(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            start = (page - 1) * MAX_PAGE_SIZE
            entries = [_set_entry(i) for i in range(start, min(start + MAX_PAGE_SIZE, total))]
            return httpx.Response(200, json={"data": entries, "totalCount": total})

        route = respx.get(f"{API_URL}/sets").mock(side_effect=page_response)

        async with create_client(config) as client:
            sets = await fetch_sets(client)

        assert len(sets) == total
        assert sets[-1].id == f"set{total - 1}"
        assert route.call_count == 2

    @respx.mock
    async def test_stops_on_empty_page(self, config: Settings) -> None:
        """An empty page ends paging even if the reported total is higher."""
        respx.get(f"{API_URL}/sets").mock(
            return_value=httpx.Response(200, json={"data": [], "totalCount": 500})
        )

        async with create_client(config) as client:
            sets = await fetch_sets(client)

        assert sets == []

    @respx.mock
    async def test_raises_on_http_error(self, config: Settings) -> None:
        """HTTP errors are wrapped in CatalogError."""
        respx.get(f"{API_URL}/sets").mock(return_value=httpx.Response(503))

        async with create_client(config) as client:
            with pytest.raises(CatalogError, match="Failed to fetch /sets: HTTP 503"):
                await fetch_sets(client)

    @respx.mock
    async def test_raises_on_connection_error(self, config: Settings) -> None:
        """Transport errors are wrapped in CatalogError."""
        respx.get(f"{API_URL}/sets").mock(side_effect=httpx.ConnectError("refused"))

        async with create_client(config) as client:
            with pytest.raises(CatalogError, match="Failed to fetch /sets"):
                await fetch_sets(client)


class TestFetchCard:
    @respx.mock
    async def test_returns_card_payload(self, config: Settings, catalog_card: dict) -> None:
        """The card object is unwrapped from the response envelope."""
        respx.get(f"{API_URL}/cards/base1-58").mock(
            return_value=httpx.Response(200, json={"data": catalog_card})
        )

        async with create_client(config) as client:
            data = await fetch_card(client, "base1-58")

        assert data["name"] == "Pikachu"
        assert data["set"]["id"] == "base1"

    @respx.mock
    async def test_unknown_card_raises(self, config: Settings) -> None:
        """A missing catalog card is a CatalogError."""
        respx.get(f"{API_URL}/cards/nope-1").mock(return_value=httpx.Response(404))

        async with create_client(config) as client:
            with pytest.raises(CatalogError, match="HTTP 404"):
                await fetch_card(client, "nope-1")

    @respx.mock
    async def test_non_json_body_raises(self, config: Settings) -> None:
        """A 200 response that is not JSON is a CatalogError."""
        respx.get(f"{API_URL}/cards/base1-58").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        async with create_client(config) as client:
            with pytest.raises(CatalogError, match="not JSON"):
                await fetch_card(client, "base1-58")

    @respx.mock
    async def test_body_without_data_raises(self, config: Settings) -> None:
        """A JSON body without the data envelope is a CatalogError."""
        respx.get(f"{API_URL}/cards/base1-58").mock(
            return_value=httpx.Response(200, json={"error": "rate limited"})
        )

        async with create_client(config) as client:
            with pytest.raises(CatalogError, match="no data"):
                await fetch_card(client, "base1-58")


class TestBuildCardQuery:
    def test_name_is_prefix_match(self) -> None:
        assert build_card_query("Pika") == 'name:"Pika"*'

    def test_combines_criteria(self) -> None:
        """Every given criterion is added, in a fixed order."""
        query = build_card_query(
            "Charizard",
            set_id="base1",
            rarity="Rare Holo",
            card_type="Fire",
            supertype="Pokémon",
        )

        assert query == (
            'name:"Charizard"* set.id:"base1" rarity:"Rare Holo" '
            'types:"Fire" supertype:"Pokémon"'
        )

    def test_no_criteria(self) -> None:
        assert build_card_query() == ""

    def test_strips_embedded_quotes(self) -> None:
        assert build_card_query('Farfetch"d') == 'name:"Farfetchd"*'


class TestSearchCatalogCards:
    @respx.mock
    async def test_sends_name_query_and_paging(
        self, config: Settings, catalog_card: dict
    ) -> None:
        """The name is sent as a prefix query with the requested page."""
        route = respx.get(f"{API_URL}/cards").mock(
            return_value=httpx.Response(
                200,
                json={"data": [catalog_card], "page": 2, "pageSize": 5, "totalCount": 6},
            )
        )

        async with create_client(config) as client:
            result = await search_catalog_cards(client, "Pika", page=2, page_size=5)

        params = route.calls[0].request.url.params
        assert params["q"] == 'name:"Pika"*'
        assert params["page"] == "2"
        assert params["pageSize"] == "5"
        assert result.page == 2
        assert result.page_size == 5
        assert result.total_count == 6
        assert [c["id"] for c in result.cards] == ["base1-58"]

    @respx.mock
    async def test_default_page_size(self, config: Settings) -> None:
        route = respx.get(f"{API_URL}/cards").mock(
            return_value=httpx.Response(200, json={"data": []})
        )

        async with create_client(config) as client:
            result = await search_catalog_cards(client, "Mew", rarity="Rare")

        params = route.calls[0].request.url.params
        assert params["q"] == 'name:"Mew"* rarity:"Rare"'
        assert params["pageSize"] == str(SEARCH_PAGE_SIZE)
        assert result.total_count == 0

    @respx.mock
    async def test_raises_on_http_error(self, config: Settings) -> None:
        respx.get(f"{API_URL}/cards").mock(return_value=httpx.Response(429))

        async with create_client(config) as client:
            with pytest.raises(CatalogError, match="Failed to fetch /cards: HTTP 429"):
                await search_catalog_cards(client, "Pika")


class TestFetchSetCards:
    @respx.mock
    async def test_pages_through_set(self, config: Settings, catalog_card: dict) -> None:
        """All pages of the set are read with a set.id query."""
        total = MAX_PAGE_SIZE + 2

        def page_response(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            size = MAX_PAGE_SIZE if page == 1 else 2
            entries = [{**catalog_card, "id": f"base1-{page}-{i}"} for i in range(size)]
            return httpx.Response(200, json={"data": entries, "totalCount": total})

        route = respx.get(f"{API_URL}/cards").mock(side_effect=page_response)

        async with create_client(config) as client:
            cards = await fetch_set_cards(client, "base1")

        assert len(cards) == total
        assert route.call_count == 2
        assert route.calls[0].request.url.params["q"] == 'set.id:"base1"'
        assert route.calls[1].request.url.params["page"] == "2"

    @respx.mock
    async def test_unknown_set_is_empty(self, config: Settings) -> None:
        respx.get(f"{API_URL}/cards").mock(
            return_value=httpx.Response(200, json={"data": [], "totalCount": 0})
        )

        async with create_client(config) as client:
            assert await fetch_set_cards(client, "nope") == []
