"""
Data models for MindForm.

This module contains Pydantic models for:
- Field definitions
- Generation results (form schema or clarification request)
- Stored forms and submissions
- Validation results
"""

from mindform.models.field_definitions import (
    FieldDefinition,
    FieldType,
    ValidationRule,
)
from mindform.models.generation_result import (
    ClarificationRequest,
    FormSchema,
    GenerationResult,
    parse_generation_result,
)
from mindform.models.submission import (
    AnswerMap,
    ErrorMap,
    StoredForm,
    Submission,
    UserContext,
)
from mindform.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Fields
    "FieldDefinition",
    "FieldType",
    "ValidationRule",
    # Generation results
    "ClarificationRequest",
    "FormSchema",
    "GenerationResult",
    "parse_generation_result",
    # Persistence
    "AnswerMap",
    "ErrorMap",
    "StoredForm",
    "Submission",
    "UserContext",
    # Validation
    "FieldValidationError",
    "ValidationResult",
]
