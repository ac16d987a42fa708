"""Tests for password hashing and session tokens."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from cardvault.config import settings
from cardvault.services.credentials import (
    INVALID,
    hash_password,
    issue_token,
    token_subject,
    validate_token,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_is_not_the_password(self) -> None:
        hashed = hash_password("secret1")

        assert hashed != "secret1"
        assert "secret1" not in hashed

    def test_same_password_hashes_differently(self) -> None:
        """Salt is random per call."""
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_correct_password(self) -> None:
        hashed = hash_password("secret1")

        assert verify_password("secret1", hashed) is True

    def test_verify_wrong_password(self) -> None:
        hashed = hash_password("secret1")

        assert verify_password("secret2", hashed) is False

    def test_verify_against_garbage_hash(self) -> None:
        assert verify_password("secret1", "not-a-hash") is False


class TestIssueToken:
    def test_token_carries_claims(self) -> None:
        token = issue_token({"sub": "alice", "role": "collector"})

        claims = validate_token(token)

        assert claims["sub"] == "alice"
        assert claims["role"] == "collector"

    def test_token_expires_after_seven_days(self) -> None:
        now = datetime.now(timezone.utc)
        token = issue_token({"sub": "alice"}, now=now)

        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

    def test_subject_required(self) -> None:
        with pytest.raises(ValueError, match="sub"):
            issue_token({"role": "collector"})


class TestValidateToken:
    def test_valid_token(self) -> None:
        assert token_subject(issue_token({"sub": "alice"})) == "alice"

    def test_expired_token_is_invalid(self) -> None:
        long_ago = datetime.now(timezone.utc) - timedelta(days=8)
        token = issue_token({"sub": "alice"}, now=long_ago)

        assert validate_token(token) is INVALID

    def test_token_just_inside_expiry_is_valid(self) -> None:
        issued = datetime.now(timezone.utc) - timedelta(days=6, hours=23)
        token = issue_token({"sub": "alice"}, now=issued)

        assert token_subject(token) == "alice"

    def test_bad_signature_is_invalid(self) -> None:
        forged = jwt.encode(
            {"sub": "alice", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )

        assert validate_token(forged) is INVALID

    def test_tampered_payload_is_invalid(self) -> None:
        header, _payload, signature = issue_token({"sub": "alice"}).split(".")
        other_payload = issue_token({"sub": "mallory"}).split(".")[1]

        assert validate_token(f"{header}.{other_payload}.{signature}") is INVALID

    @pytest.mark.parametrize(
        "garbage",
        ["", "not-a-token", "a.b.c", "....", None, 42, b"bytes", {"sub": "alice"}],
    )
    def test_garbage_never_raises(self, garbage) -> None:
        assert validate_token(garbage) is INVALID

    def test_token_without_subject_is_invalid(self) -> None:
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(days=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        assert validate_token(token) is INVALID
        assert token_subject(token) is None

    def test_invalid_is_falsy(self) -> None:
        assert not INVALID
        assert repr(INVALID) == "INVALID"
