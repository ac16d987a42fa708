"""
Failure envelope and error taxonomy.

Every failure the API reports to the client travels in the same envelope:

    {"outcome": "known_failure", "failure": {"kind": ..., "message": ...}}

Failure kinds:
- validation_failed: missing/malformed field or invalid enum value (per-field)
- not_found: the target identifier does not exist for the caller
- auth_failed: bad credentials or a missing/invalid/expired token
- username_taken: registration with an existing username
- network_error: transport failure (raised by the client only)
- unknown: anything the system cannot explain

Handlers and the client both speak this module's vocabulary, so an error
raised in a route handler comes back out of the client as the same class.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    AUTH_FAILED = "auth_failed"
    USERNAME_TAKEN = "username_taken"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """Which kind of failure an envelope reports."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


UNKNOWN_FAILURE_MESSAGE = "An error occurred. Please try again."


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Human-readable explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )
    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Per-field messages keyed by the JSON field name",
    )


class ApiResponse(BaseModel):
    """
    Response envelope for failures.

    Successful calls return the record or count directly, never an envelope.
    """

    outcome: OutcomeType
    failure: FailureDetail

    @classmethod
    def known_failure(cls, failure: FailureDetail) -> "ApiResponse":
        """Create a known failure response."""
        return cls(outcome=OutcomeType.KNOWN_FAILURE, failure=failure)

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse":
        """
        Create an unknown failure response.

        The message is fixed; only the technical detail varies.
        """
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message=UNKNOWN_FAILURE_MESSAGE,
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    kind: FailureKind = FailureKind.UNKNOWN
    status_code: int = 400

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        fields: dict[str, str] | None = None,
    ):
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.fields = dict(fields or {})
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            fields=self.fields,
        )

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(self.to_detail())


class ValidationFailedError(KnownError):
    """One or more fields are missing, malformed, or outside their enum."""

    kind = FailureKind.VALIDATION_FAILED
    status_code = 422

    def __init__(
        self, fields: dict[str, str], message: str = "Please correct the highlighted fields."
    ):
        super().__init__(message, fields=fields)


class NotFoundError(KnownError):
    """The operation targets an identifier that does not exist for the caller."""

    kind = FailureKind.NOT_FOUND
    status_code = 404

    def __init__(self, record_kind: str, record_id: str):
        super().__init__(
            f"{record_kind.capitalize()} not found",
            detail=f"No {record_kind} with id '{record_id}'",
        )


class AuthError(KnownError):
    """Bad credentials, or a missing, invalid or expired session token."""

    kind = FailureKind.AUTH_FAILED
    status_code = 401


class UsernameTakenError(KnownError):
    """Registration attempted with a username that already exists."""

    kind = FailureKind.USERNAME_TAKEN
    status_code = 409

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            detail=f"The username '{username}' is already registered",
            suggestion="Choose a different username.",
            fields={"username": "Username already exists"},
        )


class NetworkError(KnownError):
    """The request never produced a response (client side only)."""

    kind = FailureKind.NETWORK_ERROR

    def __init__(self, detail: str | None = None):
        super().__init__(UNKNOWN_FAILURE_MESSAGE, detail=detail)


class UnknownError(KnownError):
    """The server reported a failure it could not classify."""

    kind = FailureKind.UNKNOWN
    status_code = 500


_ERRORS_BY_KIND: dict[FailureKind, type[KnownError]] = {
    FailureKind.VALIDATION_FAILED: ValidationFailedError,
    FailureKind.NOT_FOUND: NotFoundError,
    FailureKind.AUTH_FAILED: AuthError,
    FailureKind.USERNAME_TAKEN: UsernameTakenError,
    FailureKind.NETWORK_ERROR: NetworkError,
    FailureKind.UNKNOWN: UnknownError,
}


def error_from_detail(failure: FailureDetail) -> KnownError:
    """
    Rebuild the matching KnownError from a failure envelope.

    Constructors differ between subclasses, so the instance is created
    without __init__ and populated from the envelope directly.
    """
    cls = _ERRORS_BY_KIND.get(failure.kind, UnknownError)
    error = cls.__new__(cls)
    KnownError.__init__(
        error,
        failure.message,
        detail=failure.detail,
        suggestion=failure.suggestion,
        fields=failure.fields,
    )
    return error
