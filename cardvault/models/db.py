"""
SQLAlchemy ORM models for persistent storage.

Each record table is keyed by a server-generated string id and scoped by
the owning username. Enum membership, numeric ranges and note length are
also enforced here with CHECK constraints, so a write that bypasses the
API schemas is still rejected.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cardvault.config import (
    DEFAULT_CARD_IMAGE,
    DEFAULT_PRIORITY,
    DEFAULT_RARITY,
    LABEL_MAX_LENGTH,
    NAME_MAX_LENGTH,
)
from cardvault.models.records import CARD_TYPES, CONDITIONS, WISHLIST_CONDITIONS


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _in(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join("'" + v.replace("'", "''") + "'" for v in values)
    return f"{column} IN ({quoted})"


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserDB(Base):
    """A registered user. Records reference users by username only."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<UserDB(username={self.username})>"


class CardDB(Base):
    """A card in a user's collection."""

    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint(_in("condition", CONDITIONS), name="ck_card_condition"),
        CheckConstraint(_in("type", CARD_TYPES), name="ck_card_type"),
        CheckConstraint("price >= 0", name="ck_card_price"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    owner: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), index=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    set: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    condition: Mapped[str] = mapped_column(String(32))
    price: Mapped[float] = mapped_column(Float)
    image: Mapped[str] = mapped_column(Text, default=DEFAULT_CARD_IMAGE)
    type: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH))
    rarity: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH), default=DEFAULT_RARITY)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name}, owner={self.owner})>"


class NoteDB(Base):
    """A short note attached to one card."""

    __tablename__ = "notes"
    __table_args__ = (
        CheckConstraint("length(content) BETWEEN 1 AND 200", name="ck_note_content"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    owner: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), index=True)
    card_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("cards.id", ondelete="CASCADE"), index=True
    )
    content: Mapped[str] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<NoteDB(id={self.id}, card_id={self.card_id})>"


class TradeDB(Base):
    """A card offered for trade."""

    __tablename__ = "trades"
    __table_args__ = (
        CheckConstraint(_in("condition", CONDITIONS), name="ck_trade_condition"),
        CheckConstraint(_in("type", CARD_TYPES), name="ck_trade_type"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    owner: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), index=True)
    card_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    set: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    condition: Mapped[str] = mapped_column(String(32))
    type: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH))
    looking_for: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<TradeDB(id={self.id}, card_name={self.card_name})>"


class WishlistItemDB(Base):
    """A card the user wants to acquire."""

    __tablename__ = "wishlist_items"
    __table_args__ = (
        CheckConstraint(_in("condition", WISHLIST_CONDITIONS), name="ck_wishlist_condition"),
        CheckConstraint(_in("type", CARD_TYPES), name="ck_wishlist_type"),
        CheckConstraint("max_price >= 0", name="ck_wishlist_max_price"),
        CheckConstraint("priority BETWEEN 1 AND 5", name="ck_wishlist_priority"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    owner: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), index=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    set: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    condition: Mapped[str] = mapped_column(String(32))
    max_price: Mapped[float] = mapped_column(Float)
    type: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH))
    priority: Mapped[int] = mapped_column(Integer, default=DEFAULT_PRIORITY)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<WishlistItemDB(id={self.id}, name={self.name})>"
