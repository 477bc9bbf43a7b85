"""
Validation result models for form answers.

These models represent the outcome of a full-form validation pass.
"""

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_id: str = Field(..., description="Id of the field with the error")
    error_type: str = Field(..., description="required, pattern, email or phone")
    message: str = Field(..., description="Human-readable error message")


class ValidationResult(BaseModel):
    """Result of validating an answer map against a form schema."""

    is_valid: bool = Field(..., description="Whether every field passed")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="One entry per failing field"
    )
    validated_data: dict[str, str] | None = Field(
        default=None, description="The answers, when valid"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def to_error_map(self) -> dict[str, str]:
        """Map each failing field id to its (first) error message."""
        result: dict[str, str] = {}
        for error in self.errors:
            result.setdefault(error.field_id, error.message)
        return result
