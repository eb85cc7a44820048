from sportscards.models.card import (
    GRADED_NO,
    GRADED_YES,
    CardRecord,
    GradingCompany,
    Sport,
)
from sportscards.models.criteria import (
    FilterCriteria,
    GradeRange,
    ImageFilter,
    SortField,
    SortOrder,
)
from sportscards.models.draft import CardDraft, ParsedCard, validate_draft
from sportscards.models.failure import (
    AuthRequiredError,
    DraftValidationError,
    ExternalServiceError,
    FailureDetail,
    FailureKind,
    ImageRejectedError,
    ImageUploadError,
    KnownError,
    RecordNotFoundError,
)
from sportscards.models.profile import UserProfile

__all__ = [
    "AuthRequiredError",
    "CardDraft",
    "CardRecord",
    "DraftValidationError",
    "ExternalServiceError",
    "FailureDetail",
    "FailureKind",
    "FilterCriteria",
    "GRADED_NO",
    "GRADED_YES",
    "GradeRange",
    "GradingCompany",
    "ImageFilter",
    "ImageRejectedError",
    "ImageUploadError",
    "KnownError",
    "ParsedCard",
    "RecordNotFoundError",
    "SortField",
    "SortOrder",
    "Sport",
    "UserProfile",
    "validate_draft",
]
