"""
Async HTTP client for the CardVault API.

Plays the part of the browser: validates forms before sending them, keeps
the AuthSession, presents its token on every record call, and turns every
failure into one of the KnownError classes from the failure envelope.

    async with CardVaultClient("http://localhost:8000") as client:
        await client.login("alice", "secret1")
        cards = await client.list_cards(ListParams(search_term="char"))
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from cardvault.client.forms import FORM_SCHEMAS, login_errors, registration_errors
from cardvault.client.session import AuthSession
from cardvault.models.failure import (
    ApiResponse,
    AuthError,
    KnownError,
    NetworkError,
    UnknownError,
    ValidationFailedError,
    error_from_detail,
)
from cardvault.models.records import (
    RECORD_MODELS,
    Card,
    Note,
    Record,
    TokenResponse,
    Trade,
    UserOut,
    WishlistItem,
    validate_fields,
)
from cardvault.services.list_engine import ListParams, render

logger = logging.getLogger(__name__)

RECORD_PATHS: dict[str, str] = {
    "card": "/cards",
    "note": "/notes",
    "trade": "/trades",
    "wishlist": "/wishlist",
}

EDITABLE_KINDS = frozenset({"card", "wishlist"})

DEFAULT_TIMEOUT = 10.0


def _error_from_response(response: httpx.Response) -> KnownError:
    try:
        envelope = ApiResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        envelope = None

    if envelope is not None:
        return error_from_detail(envelope.failure)
    return UnknownError(
        "An error occurred. Please try again.",
        detail=f"Unexpected response {response.status_code} from {response.request.url.path}",
    )


class CardVaultClient:
    """Client for one user session against a CardVault server."""

    def __init__(
        self,
        base_url: str,
        session: AuthSession | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.session = session or AuthSession()
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "CardVaultClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, str] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        headers = self.session.auth_headers() if authenticated else {}
        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(detail=f"{type(e).__name__}: {e}") from e

        if response.is_success:
            return response

        error = _error_from_response(response)
        if authenticated and isinstance(error, AuthError):
            self.session.invalidate()
        raise error

    def _require_login(self) -> None:
        if not self.session.is_authenticated:
            raise AuthError("Not authenticated", suggestion="Log in to continue.")

    # --- Authentication ---

    async def _authenticate(self, path: str, payload: dict[str, str]) -> UserOut:
        self.session.begin()
        try:
            response = await self._request("POST", path, json=payload, authenticated=False)
            result = TokenResponse.model_validate(response.json())
        except (KnownError, ValueError):
            self.session.fail()
            raise
        self.session.succeed(result.user.username, result.token)
        return result.user

    async def register(self, username: str, password: str, confirm_password: str) -> UserOut:
        """
        Create an account and log in as it.

        Form mistakes raise ValidationFailedError without touching the network.
        """
        errors = registration_errors(username, password, confirm_password)
        if errors:
            raise ValidationFailedError(errors)
        user = await self._authenticate(
            "/auth/register", {"username": username, "password": password}
        )
        logger.info("Registered and logged in as %s", user.username)
        return user

    async def login(self, username: str, password: str) -> UserOut:
        errors = login_errors(username, password)
        if errors:
            raise ValidationFailedError(errors)
        return await self._authenticate(
            "/auth/login", {"username": username, "password": password}
        )

    def logout(self) -> None:
        self.session.logout()

    async def me(self) -> UserOut:
        self._require_login()
        response = await self._request("GET", "/auth/me")
        return UserOut.model_validate(response.json())

    # --- Generic record operations ---

    def _parse(self, kind: str, data: Any) -> Record:
        return RECORD_MODELS[kind].model_validate(data)

    async def list_records(
        self,
        kind: str,
        params: ListParams | None = None,
        query: Mapping[str, str] | None = None,
    ) -> list[Record]:
        """
        Fetch every record of a kind. When `params` is given, the list is
        searched, filtered and sorted for display.
        """
        self._require_login()
        response = await self._request("GET", RECORD_PATHS[kind], params=query)
        records = [self._parse(kind, item) for item in response.json()]
        return render(records, params) if params is not None else records

    async def count_records(self, kind: str) -> int:
        self._require_login()
        response = await self._request("GET", f"{RECORD_PATHS[kind]}/count")
        return int(response.json()["count"])

    async def get_record(self, kind: str, record_id: str) -> Record:
        self._require_login()
        response = await self._request("GET", f"{RECORD_PATHS[kind]}/{record_id}")
        return self._parse(kind, response.json())

    def _checked_payload(self, kind: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        # Raises ValidationFailedError before anything is sent
        validated = validate_fields(FORM_SCHEMAS[kind], fields)
        return validated.model_dump(mode="json", by_alias=True)

    async def create_record(self, kind: str, fields: Mapping[str, Any]) -> Record:
        payload = self._checked_payload(kind, fields)
        self._require_login()
        response = await self._request("POST", RECORD_PATHS[kind], json=payload)
        return self._parse(kind, response.json())

    async def update_record(self, kind: str, record_id: str, fields: Mapping[str, Any]) -> Record:
        if kind not in EDITABLE_KINDS:
            raise ValueError(f"{kind} records cannot be edited")
        payload = self._checked_payload(kind, fields)
        self._require_login()
        response = await self._request("PUT", f"{RECORD_PATHS[kind]}/{record_id}", json=payload)
        return self._parse(kind, response.json())

    async def delete_record(self, kind: str, record_id: str) -> None:
        self._require_login()
        await self._request("DELETE", f"{RECORD_PATHS[kind]}/{record_id}")

    # --- Per-kind conveniences ---

    async def list_cards(self, params: ListParams | None = None) -> list[Card]:
        return await self.list_records("card", params)

    async def create_card(self, fields: Mapping[str, Any]) -> Card:
        return await self.create_record("card", fields)

    async def list_trades(self, params: ListParams | None = None) -> list[Trade]:
        return await self.list_records("trade", params)

    async def create_trade(self, fields: Mapping[str, Any]) -> Trade:
        return await self.create_record("trade", fields)

    async def list_wishlist(self, params: ListParams | None = None) -> list[WishlistItem]:
        return await self.list_records("wishlist", params)

    async def create_wishlist_item(self, fields: Mapping[str, Any]) -> WishlistItem:
        return await self.create_record("wishlist", fields)

    async def list_notes(self, card_id: str) -> list[Note]:
        return await self.list_records("note", query={"cardId": card_id})

    async def add_note(self, card_id: str, content: str) -> Note:
        return await self.create_record("note", {"cardId": card_id, "content": content})

    async def dashboard_stats(self) -> dict[str, int]:
        """Counts shown on the dashboard."""
        return {
            "cards": await self.count_records("card"),
            "wishlist": await self.count_records("wishlist"),
            "trades": await self.count_records("trade"),
        }
