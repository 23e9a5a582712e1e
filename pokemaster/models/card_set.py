from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardSet:
    """
    A released expansion that groups cards.

    Attributes:
        id: Catalog identifier (e.g., "base1", "sv3pt5")
        name: Display name (e.g., "Base Set")
        series: Series the set belongs to (e.g., "Scarlet & Violet")
        printed_total: Card count printed on the cards
        total: Card count including secret rares
        release_date: Release date as given by the catalog ("YYYY/MM/DD")
    """

    id: str
    name: str
    series: str | None = None
    printed_total: int | None = None
    total: int | None = None
    release_date: str | None = None
    symbol_url: str | None = None
    logo_url: str | None = None
