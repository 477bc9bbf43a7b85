"""
Agent definitions for MindForm.
"""

from mindform.agents.form_generator import create_form_generator_agent

__all__ = [
    "create_form_generator_agent",
]
