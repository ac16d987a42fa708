from cardvault.models.failure import (
    ApiResponse,
    AuthError,
    FailureDetail,
    FailureKind,
    KnownError,
    NetworkError,
    NotFoundError,
    OutcomeType,
    UsernameTakenError,
    ValidationFailedError,
    error_from_detail,
)
from cardvault.models.records import (
    CARD_TYPES,
    CONDITIONS,
    WISHLIST_CONDITIONS,
    Card,
    CardFields,
    Note,
    NoteFields,
    Record,
    Trade,
    TradeFields,
    WishlistFields,
    WishlistItem,
    field_errors,
    validate_fields,
)

__all__ = [
    "ApiResponse",
    "AuthError",
    "CARD_TYPES",
    "CONDITIONS",
    "Card",
    "CardFields",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "NetworkError",
    "Note",
    "NoteFields",
    "NotFoundError",
    "OutcomeType",
    "Record",
    "Trade",
    "TradeFields",
    "UsernameTakenError",
    "ValidationFailedError",
    "WISHLIST_CONDITIONS",
    "WishlistFields",
    "WishlistItem",
    "error_from_detail",
    "field_errors",
    "validate_fields",
]
