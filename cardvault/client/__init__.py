"""Client side of CardVault: session state, form checks and the HTTP client."""

from cardvault.client.api_client import CardVaultClient
from cardvault.client.forms import login_errors, record_errors, registration_errors
from cardvault.client.session import AuthSession, InvalidTransition, SessionState

__all__ = [
    "AuthSession",
    "CardVaultClient",
    "InvalidTransition",
    "SessionState",
    "login_errors",
    "record_errors",
    "registration_errors",
]
