"""
Input guardrails for MindForm.

These guardrails check the form description before it reaches the model.
"""

import re
from typing import Any

from agents import (
    Agent,
    GuardrailFunctionOutput,
    RunContextWrapper,
    TResponseInputItem,
    input_guardrail,
)
from pydantic import BaseModel, Field

from mindform.guardrails.constants import MAX_DESCRIPTION_LENGTH, SUSPICIOUS_PATTERNS


class SafetyCheckResult(BaseModel):
    """Result of input safety check."""

    is_safe: bool = Field(..., description="Whether the input is safe")
    issues: list[str] = Field(default_factory=list, description="Any issues found")


def _check_for_injection(text: str) -> bool:
    """Check for potential injection patterns."""
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            return False
    return True


def check_description(text: str) -> list[str]:
    """Return the problems found in a form description; empty when fine."""
    issues = []
    if not text.strip():
        issues.append("Description cannot be empty")
    if len(text) > MAX_DESCRIPTION_LENGTH:
        issues.append(f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)")
    if not _check_for_injection(text):
        issues.append("Potentially unsafe content detected")
    return issues


def _input_to_text(input: str | list[TResponseInputItem]) -> str:
    if isinstance(input, list):
        return " ".join(
            str(item.get("content", "")) if isinstance(item, dict) else str(item)
            for item in input
        )
    return str(input)


@input_guardrail
async def description_safety_guardrail(
    ctx: RunContextWrapper[Any],
    agent: Agent[Any],
    input: str | list[TResponseInputItem],
) -> GuardrailFunctionOutput:
    """Reject blank, oversized or injection-looking descriptions."""
    issues = check_description(_input_to_text(input))

    return GuardrailFunctionOutput(
        output_info=SafetyCheckResult(
            is_safe=not issues,
            issues=issues,
        ).model_dump(),
        tripwire_triggered=bool(issues),
    )
