from pokemaster.db.database import (
    Store,
    acquire_store,
    close_store,
    get_session,
    open_store,
)
from pokemaster.db.operations import (
    add_card,
    add_price,
    card_to_model,
    delete_card,
    get_card,
    get_set,
    list_cards,
    list_prices,
    list_sets,
    price_to_model,
    search_cards,
    set_to_model,
    update_card,
    upsert_set,
)

__all__ = [
    "Store",
    "acquire_store",
    "add_card",
    "add_price",
    "card_to_model",
    "close_store",
    "delete_card",
    "get_card",
    "get_session",
    "get_set",
    "list_cards",
    "list_prices",
    "list_sets",
    "open_store",
    "price_to_model",
    "search_cards",
    "set_to_model",
    "update_card",
    "upsert_set",
]
