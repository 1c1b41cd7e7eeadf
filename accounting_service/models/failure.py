"""
Failure classification for the accounting service.

Every error the service raises on purpose derives from ``KnownError``.
Each carries a ``FailureKind`` and the HTTP status it maps to, and the
application renders it as a ``FailureDetail`` body (see ``main.py``).

Taxonomy:
- NotFound: a referenced identifier does not resolve
- InvalidKey: a URL segment cannot be converted to the expected key type
- IdentifierConflict: the target identifier of a rename is already in use
- ValidationFailed: one or more field-level constraints were violated
- RepositoryFailure: the store failed; always surfaced, never retried here
"""

from enum import Enum

from fastapi import status
from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    NOT_FOUND = "not_found"
    INVALID_KEY = "invalid_key"
    IDENTIFIER_CONFLICT = "identifier_conflict"
    VALIDATION_FAILED = "validation_failed"
    REPOSITORY_FAILURE = "repository_failure"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    errors: dict[str, list[str]] | None = Field(
        default=None,
        description="Field-level validation messages, keyed by field name",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail body."""
        return FailureDetail(kind=self.kind, message=self.message, detail=self.detail)


class NotFoundError(KnownError):
    """Raised when a key does not resolve to a stored record."""

    def __init__(self, resource: str, key: object):
        self.resource = resource
        self.key = key
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"No {resource} with id '{key}' exists.",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class InvalidKeyError(KnownError):
    """
    Raised when a URL segment cannot be converted to a key.

    Recovered at the request boundary as "resource absent", so it maps
    to 404 just like NotFoundError.
    """

    def __init__(self, segment: str, key_type: type, detail: str | None = None):
        self.segment = segment
        self.key_type = key_type
        super().__init__(
            kind=FailureKind.INVALID_KEY,
            message=f"'{segment}' is not a valid {key_type.__name__} key.",
            detail=detail,
            status_code=status.HTTP_404_NOT_FOUND,
        )


class IndexOutOfRangeError(InvalidKeyError):
    """Raised when a positional key lookup points outside the URL path."""

    def __init__(self, url: str, position: int, key_type: type):
        self.url = url
        self.position = position
        super().__init__(
            segment=url,
            key_type=key_type,
            detail=f"Position {position} is outside the path of '{url}'",
        )


class IdentifierConflictError(KnownError):
    """Raised when a rename targets an identifier that is already in use."""

    def __init__(self, resource: str, key: object):
        self.resource = resource
        self.key = key
        super().__init__(
            kind=FailureKind.IDENTIFIER_CONFLICT,
            message=f"A {resource} with id '{key}' already exists.",
            status_code=status.HTTP_409_CONFLICT,
        )


class ValidationFailedError(KnownError):
    """
    Raised when a resource fails its field-level checks.

    ``errors`` maps each offending field to its messages.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(
            kind=FailureKind.VALIDATION_FAILED,
            message=f"Validation failed for: {fields}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    def to_detail(self) -> FailureDetail:
        detail = super().to_detail()
        detail.errors = self.errors
        return detail


class RepositoryFailureError(KnownError):
    """Raised when the store fails underneath an operation."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.REPOSITORY_FAILURE,
            message=message,
            detail=detail,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class MigrationStepError(RepositoryFailureError):
    """
    Raised when a category identifier migration fails part way.

    The transaction has already been rolled back; ``step`` names the step
    that failed so the caller can report it.
    """

    def __init__(self, step: str, old_id: str, new_id: str, detail: str | None = None):
        self.step = step
        self.old_id = old_id
        self.new_id = new_id
        super().__init__(
            message=(
                f"Renaming category '{old_id}' to '{new_id}' failed at step "
                f"'{step}'. No changes were applied."
            ),
            detail=detail,
        )
