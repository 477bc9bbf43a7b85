"""
Output guardrails for MindForm.

These guardrails check the generated result before it is returned.
Structural rules (unique ids, select options, compilable patterns) are
already enforced by the models; this covers what a model cannot express.
"""

from typing import Any

from pydantic import BaseModel, Field
from agents import (
    Agent,
    GuardrailFunctionOutput,
    RunContextWrapper,
    output_guardrail,
)

from mindform.guardrails.constants import MAX_FIELDS
from mindform.models.generation_result import ClarificationRequest, FormSchema


class SchemaValidationResult(BaseModel):
    """Result of generation result validation."""

    is_valid: bool = Field(..., description="Whether the result is usable")
    errors: list[str] = Field(
        default_factory=list, description="List of validation errors"
    )
    warnings: list[str] = Field(
        default_factory=list, description="List of warnings"
    )


def _validate_form_schema(schema: FormSchema) -> SchemaValidationResult:
    errors = []
    warnings = []

    if not schema.fields:
        errors.append("Form has no fields")
    elif len(schema.fields) > MAX_FIELDS:
        errors.append(f"Form has too many fields ({len(schema.fields)} > {MAX_FIELDS})")

    for field in schema.fields:
        if not field.label.strip():
            errors.append(f"Field '{field.id}' has an empty label")
        if field.options and len(set(field.options)) != len(field.options):
            warnings.append(f"Field '{field.id}' has duplicate options")
        if field.validation and field.validation.message and not field.validation.pattern:
            warnings.append(f"Field '{field.id}' has a validation message but no pattern")

    return SchemaValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
    )


def _validate_clarification(request: ClarificationRequest) -> SchemaValidationResult:
    errors = []
    if not request.contradiction.strip():
        errors.append("Clarification has no contradiction text")
    for index, question in enumerate(request.questions):
        if not question.strip():
            errors.append(f"Clarification question {index + 1} is empty")

    return SchemaValidationResult(is_valid=not errors, errors=errors)


def validate_generation_result(output: Any) -> SchemaValidationResult:
    """Check a generator output for usability."""
    if isinstance(output, FormSchema):
        return _validate_form_schema(output)
    if isinstance(output, ClarificationRequest):
        return _validate_clarification(output)
    return SchemaValidationResult(
        is_valid=False,
        errors=[f"Unexpected output type: {type(output).__name__}"],
    )


@output_guardrail
async def generation_result_guardrail(
    ctx: RunContextWrapper[Any],
    agent: Agent[Any],
    output: Any,
) -> GuardrailFunctionOutput:
    """Trip when the generated form or clarification is unusable."""
    validation_result = validate_generation_result(output)

    return GuardrailFunctionOutput(
        output_info=validation_result.model_dump(),
        tripwire_triggered=not validation_result.is_valid,
    )
