from dataclasses import dataclass
from datetime import datetime


@dataclass
class Card:
    """
    One owned card in the collection.

    Attributes:
        name: Card name as printed (e.g., "Pikachu")
        set_id: Catalog id of the set the card belongs to (e.g., "base1")
        set_name: Copy of the set name, kept for display and search
        id: Store-assigned id, None until the card is saved
        number: Card number within the set (e.g., "58")
        type: First energy type (e.g., "Lightning")
        supertype: Pokémon, Trainer or Energy
        subtype: First subtype (e.g., "Basic", "Stage 1")
        hp: Hit points, if the card has any
        tcgplayer_id: TCGplayer product reference
        cardmarket_id: Cardmarket product reference
        condition: Free-text grade of the physical copy (e.g., "Near Mint")
        grade: Professional grading result (e.g., "PSA 10")
        quantity: Number of copies owned; the store uses 1 when None
        date_added: Set by the store on insert
        date_updated: Set by the store on insert and on every update
    """

    name: str
    set_id: str
    set_name: str
    id: int | None = None
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
