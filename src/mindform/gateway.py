"""
Schema Generation Gateway.

Sends a form description to the AI service and returns a GenerationResult.
Every failure of the service is converted here into a
GenerationServiceError subclass; nothing raw escapes.
"""

import logging
from typing import Protocol

import openai
from agents import (
    AgentsException,
    InputGuardrailTripwireTriggered,
    ModelBehaviorError,
    OutputGuardrailTripwireTriggered,
    Runner,
    trace,
)

from mindform.agents.form_generator import create_form_generator_agent
from mindform.config import get_config
from mindform.errors import (
    GenerationServiceError,
    MalformedResultError,
    QuotaExhaustedError,
    RateLimitExceededError,
    UnsafeDescriptionError,
)
from mindform.models.generation_result import ClarificationRequest, FormSchema
from mindform.tracing import setup_tracing

logger = logging.getLogger(__name__)

QUOTA_ERROR_CODES = {"insufficient_quota", "billing_hard_limit_reached"}


class GenerationGateway(Protocol):
    """Anything that can turn a description into a GenerationResult."""

    async def generate(self, description: str) -> FormSchema | ClarificationRequest:
        ...


def _convert_api_error(e: openai.APIError) -> GenerationServiceError:
    code = getattr(e, "code", None)
    status = getattr(e, "status_code", None)

    if code in QUOTA_ERROR_CODES or status == 402:
        return QuotaExhaustedError(str(e))
    if isinstance(e, openai.RateLimitError) or status == 429:
        return RateLimitExceededError(str(e))
    return GenerationServiceError(str(e))


class SchemaGenerationGateway:
    """
    Gateway backed by an OpenAI Agents SDK agent.

    Usage:
        gateway = SchemaGenerationGateway()
        result = await gateway.generate("Signup form with name and email")
        if isinstance(result, FormSchema):
            ...
    """

    def __init__(
        self,
        model: str | None = None,
        enable_guardrails: bool | None = None,
        enable_tracing: bool | None = None,
        trace_to_console: bool = False,
        trace_file: str | None = None,
    ):
        """
        Args:
            model: OpenAI model. If None, uses config.default_model.
            enable_guardrails: Attach description/result guardrails.
                If None, uses config.enable_guardrails.
            enable_tracing: If None, uses config.enable_tracing.
            trace_to_console: Log traces through ``logging``.
            trace_file: Optional JSONL file for traces.
        """
        config = get_config()
        self.model = model or config.default_model

        setup_tracing(
            enabled=config.enable_tracing if enable_tracing is None else enable_tracing,
            console=trace_to_console,
            file_path=trace_file,
        )

        self._agent = create_form_generator_agent(
            model=self.model,
            enable_guardrails=enable_guardrails,
        )

    async def generate(
        self,
        description: str,
        group_id: str | None = None,
    ) -> FormSchema | ClarificationRequest:
        """
        Generate a form schema, or a clarification request, from a description.

        Args:
            description: Natural-language description of the form.
            group_id: Optional trace group, e.g. one builder session.

        Raises:
            RateLimitExceededError, QuotaExhaustedError, MalformedResultError,
            UnsafeDescriptionError, GenerationServiceError
        """
        logger.info("Generating form from description (%d chars)", len(description))

        try:
            with trace("form_generation", group_id=group_id):
                result = await Runner.run(self._agent, description)
        except InputGuardrailTripwireTriggered as e:
            logger.warning("Description rejected by guardrail: %s", e.guardrail_result.output.output_info)
            raise UnsafeDescriptionError("Description rejected by guardrail") from e
        except OutputGuardrailTripwireTriggered as e:
            logger.error("Generated result rejected by guardrail: %s", e.guardrail_result.output.output_info)
            raise MalformedResultError("Generated result rejected by guardrail") from e
        except ModelBehaviorError as e:
            logger.error("AI response could not be parsed: %s", e)
            raise MalformedResultError(str(e)) from e
        except openai.APIError as e:
            converted = _convert_api_error(e)
            logger.error("AI API error (%s): %s", converted.kind, e)
            raise converted from e
        except AgentsException as e:
            logger.error("Error in form generation: %s", e)
            raise GenerationServiceError(str(e)) from e

        output = result.final_output
        if not isinstance(output, (FormSchema, ClarificationRequest)):
            raise MalformedResultError(f"Unexpected output type: {type(output).__name__}")

        if isinstance(output, ClarificationRequest):
            logger.info("Generator asked for clarification: %s", output.contradiction)
        else:
            logger.info("Generated form '%s' with %d field(s)", output.title, len(output.fields))
        return output
