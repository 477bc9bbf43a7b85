"""
Form builder session.

Drives one user's generate -> (clarify -> regenerate)* -> form flow:
at most one generation request in flight, late results discarded after
a reset, and generated forms persisted so they can be shared.
"""

import logging
import uuid
from dataclasses import dataclass

from mindform.config import get_config
from mindform.errors import (
    ClarificationLimitError,
    GenerationInProgressError,
    InvalidTransitionError,
    StorageError,
)
from mindform.forms.renderer import RenderSession
from mindform.forms.sharing import share_link
from mindform.gateway import GenerationGateway
from mindform.models.generation_result import ClarificationRequest, FormSchema
from mindform.models.submission import UserContext
from mindform import negotiation as nego
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)

EMPTY_DESCRIPTION_MESSAGE = "Please describe the form you want to create"
SHARE_FAILED_MESSAGE = "Form generated but couldn't create shareable link"


@dataclass
class GenerationOutcome:
    """What one generate call produced."""

    result: FormSchema | ClarificationRequest | None
    form_id: str | None = None
    share_url: str | None = None
    share_error: str | None = None
    discarded: bool = False

    @property
    def needs_clarification(self) -> bool:
        return isinstance(self.result, ClarificationRequest)


class FormBuilderSession:
    """
    One user building a form from a description.

    Usage:
        session = FormBuilderSession(gateway, store, UserContext("user-1"))
        outcome = await session.generate("Anonymous feedback form with phone")
        if outcome.needs_clarification:
            outcome = await session.submit_clarifications(["Keep it anonymous"])
        render = session.render_session()
    """

    def __init__(
        self,
        gateway: GenerationGateway,
        store: FormStore,
        context: UserContext | None = None,
        *,
        base_url: str | None = None,
        max_clarification_rounds: int | None = None,
    ):
        config = get_config()
        self.gateway = gateway
        self.store = store
        self.context = context or UserContext()
        self.base_url = base_url or config.public_base_url
        self.max_clarification_rounds = (
            config.max_clarification_rounds
            if max_clarification_rounds is None
            else max_clarification_rounds
        )
        self.session_id = uuid.uuid4().hex

        self.description = ""
        self.result: FormSchema | ClarificationRequest | None = None
        self.form_id: str | None = None
        self.negotiation = nego.Negotiation(max_rounds=self.max_clarification_rounds)
        # Restored when a clarification is cancelled
        self._before_clarification: tuple[FormSchema | ClarificationRequest | None, str | None] = (None, None)
        self._generating = False
        # Bumped by reset so late generation results are dropped
        self._epoch = 0

    @property
    def is_generating(self) -> bool:
        return self._generating

    @property
    def can_generate(self) -> bool:
        return (
            not self._generating
            and bool(self.description.strip())
            and self.negotiation.state is nego.NegotiationState.IDLE
        )

    @property
    def clarification(self) -> ClarificationRequest | None:
        if self.negotiation.state is nego.NegotiationState.AWAITING_ANSWERS:
            return self.negotiation.clarification
        return None

    @property
    def can_submit_clarifications(self) -> bool:
        return nego.can_submit(self.negotiation)

    async def generate(self, description: str | None = None) -> GenerationOutcome:
        """
        Send the (given or current) description to the gateway.

        Raises:
            ValueError: The description is blank.
            GenerationInProgressError: A request is already outstanding.
            InvalidTransitionError: A clarification is waiting for answers.
            ClarificationLimitError: Too many clarification rounds.
            GenerationServiceError: The service failed; the description is kept.
        """
        if self._generating:
            raise GenerationInProgressError("A form is already being generated")
        if self.negotiation.state is not nego.NegotiationState.IDLE:
            raise InvalidTransitionError("Answer or cancel the clarification first")
        if description is not None:
            if description != self.description:
                # A rewritten description starts a fresh negotiation
                self.negotiation = nego.Negotiation(max_rounds=self.max_clarification_rounds)
            self.description = description
        if not self.description.strip():
            raise ValueError(EMPTY_DESCRIPTION_MESSAGE)

        epoch = self._epoch
        submitted_description = self.description
        previous = (self.result, self.form_id)
        self._generating = True
        try:
            result = await self.gateway.generate(submitted_description)
            if epoch != self._epoch:
                logger.info("Discarding late generation result for session %s", self.session_id)
                return GenerationOutcome(result=None, discarded=True)

            if isinstance(result, ClarificationRequest):
                # Later rounds keep the view from before the first clarification
                if self.negotiation.rounds == 0:
                    self._before_clarification = previous
                try:
                    self.negotiation = nego.begin_clarification(
                        self.negotiation, submitted_description, result
                    )
                except ClarificationLimitError:
                    self.result, self.form_id = self._before_clarification
                    raise
                self.result = result
                self.form_id = None
                return GenerationOutcome(result=result)

            return await self._accept_form(result, epoch)
        finally:
            if epoch == self._epoch:
                self._generating = False

    async def _accept_form(self, schema: FormSchema, epoch: int) -> GenerationOutcome:
        self.result = schema
        self.form_id = None
        self.negotiation = nego.Negotiation(max_rounds=self.max_clarification_rounds)

        try:
            form_id = await self.store.insert_form(schema, self.context.user_id)
        except StorageError as e:
            logger.error("Error saving form: %s", e)
            return GenerationOutcome(result=schema, share_error=SHARE_FAILED_MESSAGE)

        if epoch != self._epoch:
            logger.info("Session %s was reset while saving form %s", self.session_id, form_id)
            return GenerationOutcome(result=None, discarded=True)

        self.form_id = form_id
        return GenerationOutcome(
            result=schema,
            form_id=form_id,
            share_url=share_link(self.base_url, form_id),
        )

    def record_answer(self, index: int, value: str) -> None:
        """Fill in the answer to clarification question ``index``."""
        self.negotiation = nego.record_answer(self.negotiation, index, value)

    async def submit_clarifications(self, answers: list[str] | None = None) -> GenerationOutcome:
        """
        Amend the description with the answers and generate again, once.

        Args:
            answers: All answers in question order. If None, the answers
                recorded with ``record_answer`` are used.
        """
        if self._generating:
            raise GenerationInProgressError("A form is already being generated")

        self.negotiation = nego.submit_answers(self.negotiation, answers)
        self.negotiation = nego.finish_amending(self.negotiation)
        self.description = self.negotiation.description
        self.result = None
        return await self.generate()

    def cancel_clarification(self) -> None:
        """Close the clarification without regenerating and restore the prior view."""
        self.negotiation = nego.cancel(self.negotiation)
        self.description = self.negotiation.description
        self.result, self.form_id = self._before_clarification

    def render_session(self) -> RenderSession:
        """A fresh render session for the generated form."""
        if not isinstance(self.result, FormSchema):
            raise InvalidTransitionError("No form has been generated")
        return RenderSession(self.result, form_id=self.form_id)

    def reset(self) -> None:
        """Start over. Any outstanding request's result is ignored."""
        self._epoch += 1
        self._generating = False
        self.description = ""
        self.result = None
        self.form_id = None
        self._before_clarification = (None, None)
        self.negotiation = nego.Negotiation(max_rounds=self.max_clarification_rounds)
