"""Tests for the failure envelope and error taxonomy."""

import pytest

from cardvault.models.failure import (
    UNKNOWN_FAILURE_MESSAGE,
    ApiResponse,
    AuthError,
    FailureKind,
    KnownError,
    NetworkError,
    NotFoundError,
    OutcomeType,
    UnknownError,
    UsernameTakenError,
    ValidationFailedError,
    error_from_detail,
)


class TestKnownErrors:
    def test_not_found_message(self) -> None:
        error = NotFoundError("card", "abc")

        assert error.message == "Card not found"
        assert error.status_code == 404
        assert "abc" in error.detail

    def test_username_taken_marks_field(self) -> None:
        error = UsernameTakenError("alice")

        assert error.kind is FailureKind.USERNAME_TAKEN
        assert error.status_code == 409
        assert error.fields == {"username": "Username already exists"}

    def test_validation_carries_fields(self) -> None:
        error = ValidationFailedError({"price": "Please provide a price"})

        detail = error.to_detail()

        assert detail.kind is FailureKind.VALIDATION_FAILED
        assert detail.fields == {"price": "Please provide a price"}

    def test_network_error_uses_generic_message(self) -> None:
        assert NetworkError("ConnectError").message == UNKNOWN_FAILURE_MESSAGE

    def test_network_error_has_no_http_status_of_its_own(self) -> None:
        assert "status_code" not in vars(NetworkError)

    def test_envelope_shape(self) -> None:
        body = AuthError("Not authenticated").to_response().model_dump(mode="json")

        assert body["outcome"] == "known_failure"
        assert body["failure"]["kind"] == "auth_failed"
        assert body["failure"]["message"] == "Not authenticated"
        assert set(body) == {"outcome", "failure"}

    def test_unknown_failure_envelope(self) -> None:
        response = ApiResponse.unknown_failure(detail="KeyError")

        assert response.outcome is OutcomeType.UNKNOWN_FAILURE
        assert response.failure.message == UNKNOWN_FAILURE_MESSAGE
        assert response.failure.detail == "KeyError"


class TestErrorFromDetail:
    @pytest.mark.parametrize(
        "error",
        [
            ValidationFailedError({"name": "Please provide a card name"}),
            NotFoundError("trade", "t1"),
            AuthError("Invalid username or password"),
            UsernameTakenError("alice"),
            NetworkError("timeout"),
        ],
    )
    def test_rebuilds_same_class(self, error: KnownError) -> None:
        rebuilt = error_from_detail(error.to_detail())

        assert type(rebuilt) is type(error)
        assert rebuilt.message == error.message
        assert rebuilt.fields == error.fields
        assert rebuilt.status_code == error.status_code
        assert vars(rebuilt) == vars(error)

    def test_unknown_kind(self) -> None:
        failure = ApiResponse.unknown_failure().failure

        assert isinstance(error_from_detail(failure), UnknownError)

    def test_rebuilt_not_found_keeps_detail(self) -> None:
        rebuilt = error_from_detail(NotFoundError("card", "abc").to_detail())

        assert isinstance(rebuilt, NotFoundError)
        assert rebuilt.detail == "No card with id 'abc'"

    def test_rebuilt_username_taken_keeps_detail(self) -> None:
        rebuilt = error_from_detail(UsernameTakenError("alice").to_detail())

        assert rebuilt.detail == "The username 'alice' is already registered"
        assert rebuilt.suggestion == "Choose a different username."
