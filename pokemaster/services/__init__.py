"""
PokeMaster services.

Catalog access and price synchronization.
"""

from pokemaster.services.pokemon_tcg import (
    CatalogPage,
    build_card_query,
    create_client,
    fetch_card,
    fetch_set_cards,
    fetch_sets,
    parse_card,
    parse_set,
    search_catalog_cards,
)
from pokemaster.services.price_sync import PRICE_SYNC_NOT_IMPLEMENTED, sync_prices

__all__ = [
    "PRICE_SYNC_NOT_IMPLEMENTED",
    "CatalogPage",
    "build_card_query",
    "create_client",
    "fetch_card",
    "fetch_set_cards",
    "fetch_sets",
    "parse_card",
    "parse_set",
    "search_catalog_cards",
    "sync_prices",
]
