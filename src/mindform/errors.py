"""
Exception hierarchy for MindForm.

Collaborator failures (AI service, storage) are caught at the boundary of
the component that called the collaborator and re-raised as one of these.
"""


class MindFormError(Exception):
    """Base class for all MindForm errors."""


class FormValidationError(MindFormError):
    """One or more fields failed validation. Carries the full error map."""

    def __init__(self, error_map: dict[str, str]):
        self.error_map = dict(error_map)
        super().__init__(f"{len(self.error_map)} field(s) failed validation")


class GenerationServiceError(MindFormError):
    """The schema generation service failed. Recoverable by retrying."""

    kind = "service_error"
    user_message = "Failed to generate form. Please try again."

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(detail or self.user_message)


class RateLimitExceededError(GenerationServiceError):
    kind = "rate_limited"
    user_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhaustedError(GenerationServiceError):
    kind = "quota_exhausted"
    user_message = "AI service requires additional credits. Please contact support."


class MalformedResultError(GenerationServiceError):
    kind = "malformed_result"
    user_message = "The AI service returned an unusable form. Please try again."


class UnsafeDescriptionError(GenerationServiceError):
    kind = "unsafe_input"
    user_message = "The form description was rejected. Please rephrase it."


class SubmissionPersistError(MindFormError):
    """Storage failed after validation passed. The answers are kept."""

    user_message = "Failed to submit form. Please try again."


class FormNotFoundError(MindFormError):
    """A form id does not resolve to a persisted form."""

    def __init__(self, form_id: str):
        self.form_id = form_id
        super().__init__(f"Form not found: {form_id}")


class GenerationInProgressError(MindFormError):
    """A generation request is already outstanding for this session."""


class SubmissionInProgressError(MindFormError):
    """A submission is already outstanding for this render session."""


class InvalidTransitionError(MindFormError):
    """A negotiation transition was requested from the wrong state."""


class ClarificationLimitError(MindFormError):
    """The session ran out of clarification rounds."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Clarification limit of {limit} round(s) reached. "
            "Please rewrite the form description."
        )


class AuthenticationRequiredError(MindFormError):
    """An owner-only operation was attempted without a signed-in user."""


class StorageError(MindFormError):
    """Raised by storage adapters."""


class AccessDeniedError(StorageError):
    """The caller does not own the requested row."""


class FormClosedError(StorageError):
    """The form is no longer accepting responses."""


class RecordNotFoundError(StorageError):
    """The requested form or submission does not exist."""
