from pokemaster.models.card import Card
from pokemaster.models.card_set import CardSet
from pokemaster.models.errors import (
    CatalogError,
    ConfigurationError,
    PokeMasterError,
    StoreError,
)
from pokemaster.models.price import Price

__all__ = [
    "Card",
    "CardSet",
    "CatalogError",
    "ConfigurationError",
    "PokeMasterError",
    "Price",
    "StoreError",
]
