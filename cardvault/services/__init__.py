"""
CardVault services.

Credential handling and the list engine shared by the API and the client.
"""

from cardvault.services.credentials import (
    INVALID,
    hash_password,
    issue_token,
    token_subject,
    validate_token,
    verify_password,
)
from cardvault.services.list_engine import (
    CONDITION_RANK,
    ListParams,
    default_params,
    filter_records,
    render,
    sort_records,
)

__all__ = [
    "CONDITION_RANK",
    "INVALID",
    "ListParams",
    "default_params",
    "filter_records",
    "hash_password",
    "issue_token",
    "render",
    "sort_records",
    "token_subject",
    "validate_token",
    "verify_password",
]
