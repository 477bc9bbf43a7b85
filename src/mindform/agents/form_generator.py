"""
Form Generator Agent.

This agent turns a natural-language description into a GenerationResult:
either a form schema or a clarification request.
"""

from agents import Agent, AgentOutputSchema

from mindform.agents.instructions import FORM_GENERATOR_INSTRUCTIONS
from mindform.config import get_config
from mindform.guardrails.input_guardrails import description_safety_guardrail
from mindform.guardrails.output_guardrails import generation_result_guardrail
from mindform.models.generation_result import GenerationResult


def create_form_generator_agent(
    model: str | None = None,
    enable_guardrails: bool | None = None,
) -> Agent[None]:
    """
    Create the Form Generator agent.

    Args:
        model: The OpenAI model to use. If None, uses config.default_model.
        enable_guardrails: Whether to attach input/output guardrails.
            If None, uses config.enable_guardrails.

    Returns:
        Configured Agent instance.
    """
    config = get_config()
    model = model or config.default_model
    if enable_guardrails is None:
        enable_guardrails = config.enable_guardrails

    return Agent[None](
        name="Form Generator",
        instructions=FORM_GENERATOR_INSTRUCTIONS,
        model=model,
        model_settings=config.get_model_settings(),
        # The union is wrapped by the SDK, which strict schemas do not allow
        output_type=AgentOutputSchema(GenerationResult, strict_json_schema=False),
        input_guardrails=[description_safety_guardrail] if enable_guardrails else [],
        output_guardrails=[generation_result_guardrail] if enable_guardrails else [],
    )
