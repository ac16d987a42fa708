from cardvault.db.database import get_session, init_db
from cardvault.db.operations import (
    card_to_model,
    count_cards,
    count_notes,
    count_trades,
    count_wishlist_items,
    create_card,
    create_note,
    create_trade,
    create_user,
    create_wishlist_item,
    delete_card,
    delete_note,
    delete_trade,
    delete_wishlist_item,
    get_card,
    get_note,
    get_trade,
    get_user,
    get_wishlist_item,
    list_cards,
    list_notes,
    list_trades,
    list_wishlist_items,
    note_to_model,
    replace_card,
    replace_wishlist_item,
    trade_to_model,
    wishlist_item_to_model,
)

__all__ = [
    "card_to_model",
    "count_cards",
    "count_notes",
    "count_trades",
    "count_wishlist_items",
    "create_card",
    "create_note",
    "create_trade",
    "create_user",
    "create_wishlist_item",
    "delete_card",
    "delete_note",
    "delete_trade",
    "delete_wishlist_item",
    "get_card",
    "get_note",
    "get_session",
    "get_trade",
    "get_user",
    "get_wishlist_item",
    "init_db",
    "list_cards",
    "list_notes",
    "list_trades",
    "list_wishlist_items",
    "note_to_model",
    "replace_card",
    "replace_wishlist_item",
    "trade_to_model",
    "wishlist_item_to_model",
]
