"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
users and the four owner-scoped record kinds. Every record lookup takes
the owning username: a record that belongs to someone else is
indistinguishable from one that does not exist.
"""

from typing import TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.models.db import Base, CardDB, NoteDB, TradeDB, UserDB, WishlistItemDB
from cardvault.models.records import (
    Card,
    CardFields,
    Note,
    NoteFields,
    Trade,
    TradeFields,
    WishlistFields,
    WishlistItem,
)

RecordDB = TypeVar("RecordDB", CardDB, NoteDB, TradeDB, WishlistItemDB)

# --- Generic owner-scoped helpers ---


async def _list(
    session: AsyncSession, model: type[RecordDB], owner: str, *criteria
) -> list[RecordDB]:
    result = await session.execute(
        select(model)
        .where(model.owner == owner, *criteria)
        .order_by(model.created_at.desc())
    )
    return list(result.scalars().all())


async def _count(session: AsyncSession, model: type[RecordDB], owner: str) -> int:
    result = await session.execute(
        select(func.count()).select_from(model).where(model.owner == owner)
    )
    return int(result.scalar_one())


async def _get(
    session: AsyncSession, model: type[RecordDB], owner: str, record_id: str
) -> RecordDB | None:
    result = await session.execute(
        select(model).where(model.id == record_id, model.owner == owner)
    )
    return result.scalar_one_or_none()


async def _add(session: AsyncSession, record: Base) -> None:
    session.add(record)
    await session.flush()


async def _delete(
    session: AsyncSession, model: type[RecordDB], owner: str, record_id: str
) -> bool:
    # Single statement: a row already removed by a concurrent request matches nothing
    result = await session.execute(
        delete(model).where(model.id == record_id, model.owner == owner)
    )
    return result.rowcount == 1


async def _replace(
    session: AsyncSession, record: Base, fields: CardFields | WishlistFields
) -> None:
    # Wholesale replacement of the mutable fields; id, owner and
    # created_at are never part of a Fields model.
    for name, value in fields.model_dump().items():
        setattr(record, name, value)
    await session.flush()


# --- User Operations ---


async def get_user(session: AsyncSession, username: str) -> UserDB | None:
    """Get a user by username. Returns None if no such user exists."""
    result = await session.execute(select(UserDB).where(UserDB.username == username))
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, username: str, hashed_password: str) -> UserDB:
    """
    Create a new user.

    Raises IntegrityError if the username is already taken.
    """
    user = UserDB(username=username, hashed_password=hashed_password)
    await _add(session, user)
    return user


# --- Card Operations ---


async def list_cards(session: AsyncSession, owner: str) -> list[CardDB]:
    """All of a user's cards, newest first."""
    return await _list(session, CardDB, owner)


async def count_cards(session: AsyncSession, owner: str) -> int:
    return await _count(session, CardDB, owner)


async def get_card(session: AsyncSession, owner: str, card_id: str) -> CardDB | None:
    return await _get(session, CardDB, owner, card_id)


async def create_card(session: AsyncSession, owner: str, fields: CardFields) -> CardDB:
    card = CardDB(owner=owner, **fields.model_dump())
    await _add(session, card)
    return card


async def replace_card(session: AsyncSession, card: CardDB, fields: CardFields) -> CardDB:
    await _replace(session, card, fields)
    return card


async def delete_card(session: AsyncSession, owner: str, card_id: str) -> bool:
    """
    Delete a card together with its notes.

    Both deletes run in the caller's transaction. Returns True if deleted,
    False if not found.
    """
    await session.execute(
        delete(NoteDB).where(NoteDB.card_id == card_id, NoteDB.owner == owner)
    )
    return await _delete(session, CardDB, owner, card_id)


def card_to_model(card: CardDB) -> Card:
    """Convert a database card to a record model."""
    return Card.model_validate(card)


# --- Note Operations ---


async def list_notes(session: AsyncSession, owner: str, card_id: str | None = None) -> list[NoteDB]:
    """A user's notes, optionally only those attached to one card."""
    criteria = [NoteDB.card_id == card_id] if card_id is not None else []
    return await _list(session, NoteDB, owner, *criteria)


async def count_notes(session: AsyncSession, owner: str) -> int:
    return await _count(session, NoteDB, owner)


async def get_note(session: AsyncSession, owner: str, note_id: str) -> NoteDB | None:
    return await _get(session, NoteDB, owner, note_id)


async def create_note(session: AsyncSession, owner: str, fields: NoteFields) -> NoteDB:
    """
    Attach a note to a card.

    The caller is responsible for checking that the card exists and is owned
    by `owner`; the foreign key only guarantees existence.
    """
    note = NoteDB(owner=owner, **fields.model_dump())
    await _add(session, note)
    return note


async def delete_note(session: AsyncSession, owner: str, note_id: str) -> bool:
    return await _delete(session, NoteDB, owner, note_id)


def note_to_model(note: NoteDB) -> Note:
    return Note.model_validate(note)


# --- Trade Operations ---


async def list_trades(session: AsyncSession, owner: str) -> list[TradeDB]:
    return await _list(session, TradeDB, owner)


async def count_trades(session: AsyncSession, owner: str) -> int:
    return await _count(session, TradeDB, owner)


async def get_trade(session: AsyncSession, owner: str, trade_id: str) -> TradeDB | None:
    return await _get(session, TradeDB, owner, trade_id)


async def create_trade(session: AsyncSession, owner: str, fields: TradeFields) -> TradeDB:
    trade = TradeDB(owner=owner, **fields.model_dump())
    await _add(session, trade)
    return trade


async def delete_trade(session: AsyncSession, owner: str, trade_id: str) -> bool:
    return await _delete(session, TradeDB, owner, trade_id)


def trade_to_model(trade: TradeDB) -> Trade:
    return Trade.model_validate(trade)


# --- Wishlist Operations ---


async def list_wishlist_items(session: AsyncSession, owner: str) -> list[WishlistItemDB]:
    return await _list(session, WishlistItemDB, owner)


async def count_wishlist_items(session: AsyncSession, owner: str) -> int:
    return await _count(session, WishlistItemDB, owner)


async def get_wishlist_item(
    session: AsyncSession, owner: str, item_id: str
) -> WishlistItemDB | None:
    return await _get(session, WishlistItemDB, owner, item_id)


async def create_wishlist_item(
    session: AsyncSession, owner: str, fields: WishlistFields
) -> WishlistItemDB:
    item = WishlistItemDB(owner=owner, **fields.model_dump())
    await _add(session, item)
    return item


async def replace_wishlist_item(
    session: AsyncSession, item: WishlistItemDB, fields: WishlistFields
) -> WishlistItemDB:
    await _replace(session, item, fields)
    return item


async def delete_wishlist_item(session: AsyncSession, owner: str, item_id: str) -> bool:
    return await _delete(session, WishlistItemDB, owner, item_id)


def wishlist_item_to_model(item: WishlistItemDB) -> WishlistItem:
    return WishlistItem.model_validate(item)
