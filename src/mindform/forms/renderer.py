"""
Schema renderer.

Turns a FormSchema plus the current answers and errors into one control
description per field, in declared order. ``RenderSession`` owns the
answers and errors of one person filling one form.
"""

import logging
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from mindform.errors import (
    FormValidationError,
    InvalidTransitionError,
    SubmissionInProgressError,
    SubmissionPersistError,
)
from mindform.forms.pipeline import submit_answers
from mindform.forms.validator import validate_answers
from mindform.models.field_definitions import FieldDefinition, FieldType
from mindform.models.generation_result import FormSchema
from mindform.models.submission import Submission
from mindform.models.validation_result import ValidationResult
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)

TEXTAREA_ROWS = 4


class RenderedControl(BaseModel):
    """An interactive input, ready for a UI layer to draw."""

    field_id: str
    label: str
    widget: Literal["input", "select", "textarea"]
    input_type: str | None = Field(default=None, description="text, email, tel or number")
    placeholder: str | None = None
    required: bool = False
    value: str = ""
    error: str | None = None
    options: list[str] = Field(default_factory=list)
    rows: int | None = None


def render_control(field: FieldDefinition, value: str = "", error: str | None = None) -> RenderedControl:
    """Map one field definition to its control."""
    common = {
        "field_id": field.id,
        "label": field.label,
        "required": field.required,
        "value": value,
        "error": error,
    }

    if field.type is FieldType.SELECT:
        return RenderedControl(
            widget="select",
            placeholder=field.placeholder or f"Select {field.label}",
            options=list(field.options or []),
            **common,
        )
    if field.type is FieldType.TEXTAREA:
        return RenderedControl(
            widget="textarea",
            placeholder=field.placeholder,
            rows=TEXTAREA_ROWS,
            **common,
        )
    return RenderedControl(
        widget="input",
        input_type=field.type.value,
        placeholder=field.placeholder,
        **common,
    )


def render_controls(
    schema: FormSchema,
    answers: dict[str, str] | None = None,
    errors: dict[str, str] | None = None,
) -> list[RenderedControl]:
    """Render every field of a schema. Never validates."""
    answers = answers or {}
    errors = errors or {}
    return [
        render_control(field, answers.get(field.id, ""), errors.get(field.id))
        for field in schema.fields
    ]


class SessionStatus(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    CLOSED = "closed"


class RenderSession:
    """
    One fill-in of a form.

    Usage:
        session = RenderSession(schema, form_id=stored.id)
        session.set_value("email", "a@b.com")
        controls = session.render()
        submission = await session.submit(store)
    """

    def __init__(
        self,
        schema: FormSchema,
        form_id: str | None = None,
        accepting_responses: bool = True,
    ):
        self.schema = schema
        self.form_id = form_id
        self.accepting_responses = accepting_responses
        self.answers: dict[str, str] = {}
        self.errors: dict[str, str] = {}
        self.status = SessionStatus.EDITING
        self.last_submission: Submission | None = None
        # Bumped by reset/abandon so late submit results are dropped
        self._epoch = 0

    @property
    def is_submitting(self) -> bool:
        return self.status is SessionStatus.SUBMITTING

    def set_value(self, field_id: str, value: str) -> None:
        """Record an edit and clear that field's error, if any."""
        self.schema.get_field(field_id)
        self.answers[field_id] = value
        self.errors.pop(field_id, None)

    def render(self) -> list[RenderedControl]:
        return render_controls(self.schema, self.answers, self.errors)

    def validate(self) -> ValidationResult:
        """Full-form validation pass. Replaces the error map."""
        result = validate_answers(self.schema, self.answers)
        self.errors = result.to_error_map()
        return result

    async def submit(self, store: FormStore) -> Submission:
        """
        Validate and persist the current answers.

        Raises:
            SubmissionInProgressError: A submit is already outstanding.
            InvalidTransitionError: The session was abandoned or already submitted.
            FormValidationError: Some fields are invalid; ``errors`` is updated.
            SubmissionPersistError: Storage failed; ``answers`` are kept.
        """
        if self.status is SessionStatus.SUBMITTING:
            raise SubmissionInProgressError("A submission is already in progress")
        if self.status is SessionStatus.CLOSED:
            raise InvalidTransitionError("Render session is closed")
        if self.status is SessionStatus.SUBMITTED:
            raise InvalidTransitionError("Already submitted; reset to submit another response")

        epoch = self._epoch
        self.status = SessionStatus.SUBMITTING
        try:
            submission = await submit_answers(
                self.schema,
                dict(self.answers),
                store,
                form_id=self.form_id,
            )
        except FormValidationError as e:
            if epoch == self._epoch:
                self.errors = dict(e.error_map)
                self.status = SessionStatus.EDITING
            raise
        except SubmissionPersistError:
            if epoch == self._epoch:
                self.status = SessionStatus.EDITING
            raise

        if epoch != self._epoch:
            logger.info("Discarding late submission result for form %s", self.form_id)
            return submission

        self.status = SessionStatus.SUBMITTED
        self.errors = {}
        self.last_submission = submission
        return submission

    def reset(self) -> None:
        """Start a new response to the same form."""
        self._epoch += 1
        self.answers = {}
        self.errors = {}
        self.status = SessionStatus.EDITING

    def abandon(self) -> None:
        """Navigate away. Any outstanding result is ignored."""
        self._epoch += 1
        self.status = SessionStatus.CLOSED
