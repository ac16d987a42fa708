"""
Client-side form validation.

Runs before any request is sent, so a form with mistakes never reaches the
network. Each check returns a mapping of JSON field name to message; an
empty mapping means the form can be submitted.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from cardvault.models.records import (
    CardFields,
    LoginRequest,
    NoteFields,
    RecordSchema,
    RegisterRequest,
    TradeFields,
    WishlistFields,
    field_errors,
)

FORM_SCHEMAS: dict[str, type[RecordSchema]] = {
    "card": CardFields,
    "note": NoteFields,
    "trade": TradeFields,
    "wishlist": WishlistFields,
}


def schema_errors(schema: type[RecordSchema], data: Mapping[str, Any]) -> dict[str, str]:
    try:
        schema.model_validate(data)
    except ValidationError as e:
        return field_errors(e.errors(), schema.error_messages)
    return {}


def registration_errors(username: str, password: str, confirm_password: str) -> dict[str, str]:
    """
    Check a registration form.

    The confirmation check runs independently of the password rules, so a
    short password and a mismatched confirmation are reported together.
    """
    errors = schema_errors(RegisterRequest, {"username": username, "password": password})
    if not confirm_password:
        errors["confirmPassword"] = "Confirm password is required"
    elif confirm_password != password:
        errors["confirmPassword"] = "Passwords don't match"
    return errors


def login_errors(username: str, password: str) -> dict[str, str]:
    return schema_errors(LoginRequest, {"username": username, "password": password})


def record_errors(kind: str, data: Mapping[str, Any]) -> dict[str, str]:
    """Check an add/edit form for one of the record kinds."""
    return schema_errors(FORM_SCHEMAS[kind], data)
