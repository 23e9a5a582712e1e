from pokemaster.api.cards import router as cards_router
from pokemaster.api.catalog import router as catalog_router
from pokemaster.api.health import router as health_router
from pokemaster.api.prices import router as prices_router
from pokemaster.api.sets import router as sets_router

__all__ = [
    "cards_router",
    "catalog_router",
    "health_router",
    "prices_router",
    "sets_router",
]
