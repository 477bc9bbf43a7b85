"""
Field validation.

Pure functions: no side effects, same answer for the same input, cheap
enough to run on every keystroke.
"""

import re

from mindform.models.field_definitions import FieldDefinition, FieldType
from mindform.models.generation_result import FormSchema
from mindform.models.validation_result import FieldValidationError, ValidationResult

# Matched with fullmatch, so no anchors
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[\d\s\-+()]+")


def validate_field(field: FieldDefinition, raw_value: str) -> FieldValidationError | None:
    """
    Validate one value against its field definition.

    Rules, first failure wins:
    1. required and blank
    2. custom pattern (replaces the built-in type check for this field)
    3. built-in email check
    4. built-in phone check

    Args:
        field: The field definition.
        raw_value: The value as typed; use "" for unset fields.

    Returns:
        None if accepted, otherwise the error.
    """
    if field.required and not raw_value.strip():
        return FieldValidationError(
            field_id=field.id,
            error_type="required",
            message=f"{field.label} is required",
        )

    if not raw_value:
        return None

    if field.pattern:
        if re.fullmatch(field.pattern, raw_value) is None:
            message = field.validation.message if field.validation else None
            return FieldValidationError(
                field_id=field.id,
                error_type="pattern",
                message=message or f"Invalid {field.label}",
            )
        return None

    if field.type is FieldType.EMAIL and not EMAIL_PATTERN.fullmatch(raw_value):
        return FieldValidationError(
            field_id=field.id,
            error_type="email",
            message="Invalid email address",
        )

    if field.type is FieldType.TEL and not PHONE_PATTERN.fullmatch(raw_value):
        return FieldValidationError(
            field_id=field.id,
            error_type="phone",
            message="Invalid phone number",
        )

    return None


def validate_answers(schema: FormSchema, answers: dict[str, str]) -> ValidationResult:
    """
    Validate every field of a schema. All failures are collected.

    Absent answers are validated as the empty string.
    """
    errors = []
    for field in schema.fields:
        error = validate_field(field, answers.get(field.id, ""))
        if error is not None:
            errors.append(error)

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        validated_data=dict(answers) if not errors else None,
    )
