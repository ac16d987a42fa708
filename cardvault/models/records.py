"""
Record types and their validation schemas.

Four tagged record kinds (card, note, trade, wishlist) each come as a pair:
a ``*Fields`` model holding the user-editable fields, validated at the API
boundary, and a record model adding the server-assigned id, owner and
creation timestamp. JSON uses camelCase names (``maxPrice``, ``lookingFor``,
``createdAt``); Python attributes are snake_case.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, ClassVar, Literal, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from cardvault.config import (
    DEFAULT_CARD_IMAGE,
    DEFAULT_PRIORITY,
    DEFAULT_RARITY,
    MIN_PASSWORD_LENGTH,
    LABEL_MAX_LENGTH,
    MIN_USERNAME_LENGTH,
    NAME_MAX_LENGTH,
    NOTE_MAX_LENGTH,
)
from cardvault.models.failure import ValidationFailedError

Condition = Literal["Mint", "Near Mint", "Excellent", "Good", "Fair", "Poor"]
WishlistCondition = Literal["Mint", "Near Mint", "Excellent", "Good", "Fair", "Poor", "Any"]
CardType = Literal["Pokemon", "Yu-Gi-Oh", "Magic: The Gathering", "Comic Book", "Other"]
RecordKind = Literal["card", "note", "trade", "wishlist"]

CONDITIONS: tuple[str, ...] = get_args(Condition)
WISHLIST_CONDITIONS: tuple[str, ...] = get_args(WishlistCondition)
CARD_TYPES: tuple[str, ...] = get_args(CardType)


class RecordSchema(BaseModel):
    """Base for request and record models: camelCase JSON, trimmed strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        from_attributes=True,
    )

    # Messages shown for a missing or too-short field, keyed by JSON name
    error_messages: ClassVar[dict[str, str]] = {}

    @field_validator("created_at", check_fields=False)
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite drops the offset; stored timestamps are always UTC
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# --- Cards ---


class CardFields(RecordSchema):
    """User-editable card fields."""

    error_messages: ClassVar[dict[str, str]] = {
        "name": "Please provide a card name",
        "set": "Please provide a set name",
        "condition": "Please provide a condition",
        "price": "Please provide a price",
        "type": "Please specify the type of card",
    }

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    set: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    condition: Condition
    price: float = Field(..., ge=0, allow_inf_nan=False)
    image: str = DEFAULT_CARD_IMAGE
    type: CardType
    rarity: str = Field(default=DEFAULT_RARITY, max_length=LABEL_MAX_LENGTH)

    @field_validator("image")
    @classmethod
    def _default_image(cls, value: str) -> str:
        return value or DEFAULT_CARD_IMAGE

    @field_validator("rarity")
    @classmethod
    def _default_rarity(cls, value: str) -> str:
        return value or DEFAULT_RARITY


class Card(CardFields):
    kind: Literal["card"] = "card"
    id: str
    owner: str
    created_at: datetime


# --- Notes ---


class NoteFields(RecordSchema):
    """A note to attach to one of the caller's cards."""

    error_messages: ClassVar[dict[str, str]] = {
        "cardId": "Card ID is required",
        "content": "Please provide note content",
    }

    card_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=NOTE_MAX_LENGTH)


class Note(NoteFields):
    kind: Literal["note"] = "note"
    id: str
    owner: str
    created_at: datetime


# --- Trades ---


class TradeFields(RecordSchema):
    """User-editable trade listing fields."""

    error_messages: ClassVar[dict[str, str]] = {
        "cardName": "Please provide a card name",
        "set": "Please provide a set name",
        "condition": "Please provide a condition",
        "type": "Please specify the type of card",
        "lookingFor": "Please specify what you are looking for",
    }

    card_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    set: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    condition: Condition
    type: CardType
    looking_for: str = Field(..., min_length=1)


class Trade(TradeFields):
    kind: Literal["trade"] = "trade"
    id: str
    owner: str
    created_at: datetime


# --- Wishlist ---


class WishlistFields(RecordSchema):
    """User-editable wishlist item fields. Priority 1 is the most urgent."""

    error_messages: ClassVar[dict[str, str]] = {
        "name": "Please provide a card name",
        "set": "Please provide a set name",
        "condition": "Please provide a condition",
        "maxPrice": "Please provide a max price",
        "type": "Please specify the type of card",
    }

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    set: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    condition: WishlistCondition
    max_price: float = Field(..., ge=0, allow_inf_nan=False)
    type: CardType
    priority: int = Field(default=DEFAULT_PRIORITY, ge=1, le=5)


class WishlistItem(WishlistFields):
    kind: Literal["wishlist"] = "wishlist"
    id: str
    owner: str
    created_at: datetime


Record = Card | Note | Trade | WishlistItem

RECORD_MODELS: dict[str, type[RecordSchema]] = {
    "card": Card,
    "note": Note,
    "trade": Trade,
    "wishlist": WishlistItem,
}


class CountResponse(BaseModel):
    count: int


# --- Auth payloads ---


class RegisterRequest(RecordSchema):
    model_config = ConfigDict(str_strip_whitespace=False)

    error_messages: ClassVar[dict[str, str]] = {
        "username": f"Username must be at least {MIN_USERNAME_LENGTH} characters",
        "password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
    }

    username: str = Field(..., min_length=MIN_USERNAME_LENGTH, max_length=NAME_MAX_LENGTH)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class LoginRequest(RecordSchema):
    model_config = ConfigDict(str_strip_whitespace=False)

    error_messages: ClassVar[dict[str, str]] = {
        "username": "Username is required",
        "password": "Password is required",
    }

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(RecordSchema):
    username: str
    created_at: datetime


class TokenResponse(RecordSchema):
    token: str
    token_type: str = "bearer"
    user: UserOut


# --- Field-level error mapping ---

# Error types that fall back to the model's own message for the field
_GENERIC_ERROR_TYPES = frozenset({"missing", "string_too_short", "string_type", "none_required"})


def field_errors(
    errors: Iterable[Mapping[str, Any]],
    messages: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """
    Collapse pydantic error dicts into one message per field.

    The key is the last element of each error's location (the JSON field
    name). The first error reported for a field wins.
    """
    messages = messages or {}
    result: dict[str, str] = {}
    for error in errors:
        loc = error.get("loc") or ("__root__",)
        field = str(loc[-1])
        if field in result:
            continue

        error_type = error.get("type", "")
        blank = error.get("input") in ("", None)
        if field in messages and (error_type in _GENERIC_ERROR_TYPES or blank):
            result[field] = messages[field]
        elif error_type == "literal_error":
            result[field] = f"'{error.get('input')}' is not a valid {field}"
        elif error_type == "string_too_long" and "max_length" in (error.get("ctx") or {}):
            result[field] = f"Must be at most {error['ctx']['max_length']} characters"
        else:
            result[field] = str(error.get("msg", "Invalid value"))
    return result


SchemaT = TypeVar("SchemaT", bound=RecordSchema)


def validate_fields(schema: type[SchemaT], data: Mapping[str, Any]) -> SchemaT:
    """
    Validate raw field data against a schema.

    Raises ValidationFailedError carrying every offending field at once.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailedError(field_errors(e.errors(), schema.error_messages)) from e
