from dataclasses import dataclass
from datetime import datetime


@dataclass
class Price:
    """
    A point-in-time price quote for a card from one marketplace.

    Attributes:
        card_id: Id of the owned card the quote belongs to
        source: Marketplace name (e.g., "tcgplayer", "cardmarket")
        id: Store-assigned id, None until the quote is saved
        currency: ISO currency code; the store uses USD when None
        last_updated: Set by the store on insert
    """

    card_id: int
    source: str
    id: int | None = None
    low_price: float | None = None
    mid_price: float | None = None
    high_price: float | None = None
    market_price: float | None = None
    direct_low_price: float | None = None
    trend_price: float | None = None
    currency: str | None = None
    last_updated: datetime | None = None
