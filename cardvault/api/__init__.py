from cardvault.api.auth import router as auth_router
from cardvault.api.cards import router as cards_router
from cardvault.api.health import router as health_router
from cardvault.api.notes import router as notes_router
from cardvault.api.trades import router as trades_router
from cardvault.api.wishlist import router as wishlist_router

__all__ = [
    "auth_router",
    "cards_router",
    "health_router",
    "notes_router",
    "trades_router",
    "wishlist_router",
]
