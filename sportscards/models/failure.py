"""
Failure classification for user-facing operations.

Every operation started by the user resolves to either a state change or a
reported failure. Failures the system understands are raised as KnownError
subclasses; controllers turn them into error notifications.

Taxonomy:
- Validation: missing field, bad number, rejected image (local, no mutation)
- External service: auth, storage, image upload (operation aborted)
- Not found: tolerated, never fatal to the session
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"
    IMAGE_REJECTED = "image_rejected"

    # Resource failures
    NOT_FOUND = "not_found"

    # Session failures
    AUTH_REQUIRED = "auth_required"
    AUTH_FAILED = "auth_failed"

    # Service failures
    STORAGE_ERROR = "storage_error"
    IMAGE_UPLOAD_FAILED = "image_upload_failed"

    # Unknown
    UNKNOWN = "unknown"


# Fixed message used whenever the cause of a failure is not understood
UNKNOWN_FAILURE_MESSAGE = "Something went wrong. Please try again."


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
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
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DraftValidationError(KnownError):
    """
    Raised when a card draft cannot be parsed into a storable record.

    Carries every field error at once so the form can show them together.
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        missing = [name for name, error in field_errors.items() if error == "required"]
        kind = FailureKind.MISSING_REQUIRED if missing else FailureKind.INVALID_INPUT
        if missing:
            message = f"Please fill in required fields: {', '.join(missing)}"
        else:
            message = "; ".join(f"{name}: {error}" for name, error in field_errors.items())
        super().__init__(
            kind=kind,
            message=message,
            detail=", ".join(sorted(field_errors)),
            suggestion="Correct the highlighted fields and submit again.",
        )


class ImageRejectedError(KnownError):
    """Raised when a selected file is not an acceptable card image."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.IMAGE_REJECTED,
            message=message,
            detail=detail,
            suggestion="Choose a JPG, PNG or GIF under 5MB.",
        )


class ExternalServiceError(KnownError):
    """Raised when a collaborating service (identity, storage, hosting) fails."""

    def __init__(
        self,
        kind: FailureKind,
        service: str,
        message: str,
        detail: str | None = None,
    ):
        self.service = service
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion="Check your connection and try again.",
        )


class ImageUploadError(ExternalServiceError):
    """Raised when the image hosting service rejects or fails an upload."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.IMAGE_UPLOAD_FAILED,
            service="image-host",
            message=f"Failed to upload image: {message}",
            detail=detail,
        )


class RecordNotFoundError(KnownError):
    """Raised when a document addressed by id does not exist."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="That card no longer exists.",
            detail=f"{collection}/{document_id}",
            suggestion="Refresh your collection.",
        )


class AuthRequiredError(KnownError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.AUTH_REQUIRED,
            message="You must be signed in to do that.",
            suggestion="Sign in and try again.",
        )
