"""
Form filling: validation, rendering and submission.
"""

from mindform.forms.pipeline import submit_answers
from mindform.forms.renderer import (
    RenderedControl,
    RenderSession,
    SessionStatus,
    render_control,
    render_controls,
)
from mindform.forms.sharing import load_shared_form, share_link
from mindform.forms.validator import validate_answers, validate_field

__all__ = [
    "validate_field",
    "validate_answers",
    "RenderedControl",
    "RenderSession",
    "SessionStatus",
    "render_control",
    "render_controls",
    "submit_answers",
    "load_shared_form",
    "share_link",
]
