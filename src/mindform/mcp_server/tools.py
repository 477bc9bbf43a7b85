"""
MCP tool implementations for MindForm.

Wraps form generation and answer validation so MCP clients can build
forms and check answers without the web UI.
"""

import logging
from typing import Any

from pydantic import ValidationError

from mindform.builder import FormBuilderSession
from mindform.errors import GenerationServiceError
from mindform.forms.validator import validate_answers
from mindform.gateway import GenerationGateway
from mindform.models.generation_result import ClarificationRequest, FormSchema
from mindform.negotiation import negotiate
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)


async def mcp_generate_form(
    gateway: GenerationGateway,
    store: FormStore,
    description: str,
    clarification: dict[str, Any] | None = None,
    clarification_answers: list[str] | None = None,
) -> dict[str, Any]:
    """
    Generate a form, or a clarification request, from a description.

    Args:
        gateway: Generation gateway.
        store: Where generated forms are saved for sharing.
        description: Natural-language description of the form.
        clarification: The clarification object from a previous call.
        clarification_answers: Answers to its questions, in order.

    Returns:
        The result as JSON-ready data. Forms also carry ``form_id`` and
        ``share_url``; failures carry ``error``.
    """
    session = FormBuilderSession(gateway, store)

    try:
        if clarification is not None:
            request = ClarificationRequest.model_validate(clarification)
            description = negotiate(description, request, clarification_answers or [])
        outcome = await session.generate(description)
    except ValidationError as e:
        return {"error": f"Invalid clarification: {e.errors()[0]['msg']}"}
    except ValueError as e:
        return {"error": str(e)}
    except GenerationServiceError as e:
        logger.error("Form generation failed (%s): %s", e.kind, e)
        return {"error": e.user_message, "kind": e.kind}

    payload = outcome.result.model_dump(mode="json", exclude_none=True)
    if isinstance(outcome.result, FormSchema):
        payload["form_id"] = outcome.form_id
        payload["share_url"] = outcome.share_url
        if outcome.share_error:
            payload["share_error"] = outcome.share_error
    else:
        payload["description"] = session.description
    return payload


def mcp_validate_answers(schema: dict[str, Any], answers: dict[str, str]) -> dict[str, Any]:
    """
    Validate answers against a form schema.

    Returns:
        {"is_valid": bool, "errors": {field_id: message}}
    """
    try:
        form = FormSchema.model_validate(schema)
    except ValidationError as e:
        return {"error": f"Invalid schema: {e.errors()[0]['msg']}"}

    result = validate_answers(form, answers)
    return {"is_valid": result.is_valid, "errors": result.to_error_map()}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with the MCP server.
    """
    return [
        {
            "name": "generate_form",
            "description": """
Generate a form from a natural-language description.

Returns either a form (type "form") with a shareable URL, or a
clarification request (type "clarification") when the description
contradicts itself.

ON A CLARIFICATION:
- Ask the user each question
- Call again with the same description, the clarification object,
  and the answers in question order
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "description": {
                        "type": "string",
                        "description": "What the form should collect",
                    },
                    "clarification": {
                        "type": "object",
                        "description": "Clarification object returned by the previous call",
                    },
                    "clarification_answers": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Answers to the clarification questions, in order",
                    },
                },
                "required": ["description"],
            },
        },
        {
            "name": "validate_answers",
            "description": "Validate answers against a generated form schema. Returns an error message per failing field.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema": {
                        "type": "object",
                        "description": "Form schema as returned by generate_form",
                    },
                    "answers": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                        "description": "Map of field id to answer",
                    },
                },
                "required": ["schema", "answers"],
            },
        },
    ]
