"""
Guardrails for MindForm.

Safety checks on the description and usability checks on the result.
"""

from mindform.guardrails.input_guardrails import (
    check_description,
    description_safety_guardrail,
)
from mindform.guardrails.output_guardrails import (
    generation_result_guardrail,
    validate_generation_result,
)

__all__ = [
    "check_description",
    "description_safety_guardrail",
    "generation_result_guardrail",
    "validate_generation_result",
]
