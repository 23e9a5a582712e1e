"""
SQLAlchemy ORM models for persistent storage.

Table names, column names and declared column types match existing
pokemaster.db files, so the schema can be created over an old database
without migration.
"""

from datetime import datetime

from sqlalchemy import (
    REAL,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    func,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SetDB(Base):
    """
    A card set (expansion) imported from the catalog.

    Keyed by the catalog's own set id.
    """

    __tablename__ = "sets"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    series: Mapped[str | None] = mapped_column(Text)
    printed_total: Mapped[int | None] = mapped_column(Integer)
    total: Mapped[int | None] = mapped_column(Integer)
    release_date: Mapped[str | None] = mapped_column(Text)
    symbol_url: Mapped[str | None] = mapped_column(Text)
    logo_url: Mapped[str | None] = mapped_column(Text)
    date_added: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<SetDB(id={self.id}, name={self.name})>"


class CardDB(Base):
    """
    One owned card.

    set_name is a denormalized copy of the set's name so listing and
    searching never need a join.
    """

    __tablename__ = "cards"
    __table_args__ = (
        Index("idx_cards_name", "name"),
        Index("idx_cards_set_id", "set_id"),
        Index("idx_cards_tcgplayer_id", "tcgplayer_id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    set_id: Mapped[str] = mapped_column(Text, ForeignKey("sets.id"), nullable=False)
    set_name: Mapped[str] = mapped_column(Text, nullable=False)
    number: Mapped[str | None] = mapped_column(Text)
    rarity: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(Text)
    supertype: Mapped[str | None] = mapped_column(Text)
    subtype: Mapped[str | None] = mapped_column(Text)
    hp: Mapped[int | None] = mapped_column(Integer)
    image_url: Mapped[str | None] = mapped_column(Text)
    small_image_url: Mapped[str | None] = mapped_column(Text)
    large_image_url: Mapped[str | None] = mapped_column(Text)
    tcgplayer_id: Mapped[str | None] = mapped_column(Text)
    cardmarket_id: Mapped[str | None] = mapped_column(Text)
    condition: Mapped[str | None] = mapped_column(Text, server_default="Near Mint")
    grade: Mapped[str | None] = mapped_column(Text)
    quantity: Mapped[int | None] = mapped_column(Integer, server_default=text("1"))
    notes: Mapped[str | None] = mapped_column(Text)

    # Timestamps
    date_added: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())
    date_updated: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name}, set={self.set_id})>"


class PriceDB(Base):
    """A price quote for a card from one marketplace."""

    __tablename__ = "prices"
    __table_args__ = (
        Index("idx_prices_card_id", "card_id"),
        Index("idx_prices_last_updated", "last_updated"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id", ondelete="CASCADE"), nullable=False
    )
    source: Mapped[str] = mapped_column(Text, nullable=False)
    low_price: Mapped[float | None] = mapped_column(REAL)
    mid_price: Mapped[float | None] = mapped_column(REAL)
    high_price: Mapped[float | None] = mapped_column(REAL)
    market_price: Mapped[float | None] = mapped_column(REAL)
    direct_low_price: Mapped[float | None] = mapped_column(REAL)
    trend_price: Mapped[float | None] = mapped_column(REAL)
    currency: Mapped[str | None] = mapped_column(Text, server_default="USD")
    last_updated: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<PriceDB(card_id={self.card_id}, source={self.source})>"


class PriceHistoryDB(Base):
    """One recorded price point for a card, source and price type."""

    __tablename__ = "price_history"
    __table_args__ = (
        Index("idx_price_history_card_id", "card_id"),
        Index("idx_price_history_recorded_at", "recorded_at"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id", ondelete="CASCADE"), nullable=False
    )
    source: Mapped[str] = mapped_column(Text, nullable=False)
    price_type: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(REAL, nullable=False)
    recorded_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())


class TagDB(Base):
    """A named, colored label for cards."""

    __tablename__ = "tags"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    color: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())


class CardTagDB(Base):
    """Join row between a card and a tag."""

    __tablename__ = "card_tags"

    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )


class WishlistDB(Base):
    """A card the collector wants but does not own yet."""

    __tablename__ = "wishlist"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_name: Mapped[str] = mapped_column(Text, nullable=False)
    set_id: Mapped[str | None] = mapped_column(Text, ForeignKey("sets.id"))
    set_name: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[int | None] = mapped_column(Integer, server_default=text("5"))
    max_price: Mapped[float | None] = mapped_column(REAL)
    notes: Mapped[str | None] = mapped_column(Text)
    date_added: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())
