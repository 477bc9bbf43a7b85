"""
Clarification negotiation.

When the generator reports a contradiction instead of a form, the user
answers its questions and the answers are appended to the original
description, which is then sent for generation again.

States:
    IDLE -> AWAITING_ANSWERS   begin_clarification
    AWAITING_ANSWERS -> AMENDING   submit_answers (all answers filled)
    AMENDING -> IDLE   finish_amending (description is now the amended one)
    AWAITING_ANSWERS -> IDLE   cancel (description restored)

``Negotiation`` is immutable; every transition returns a new value.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from mindform.errors import ClarificationLimitError, InvalidTransitionError
from mindform.models.generation_result import ClarificationRequest

logger = logging.getLogger(__name__)

CLARIFICATIONS_HEADER = "Clarifications:"


class NegotiationState(str, Enum):
    IDLE = "idle"
    AWAITING_ANSWERS = "awaiting_answers"
    AMENDING = "amending"


@dataclass(frozen=True)
class Negotiation:
    """Where one builder session is in the clarification loop."""

    state: NegotiationState = NegotiationState.IDLE
    description: str = ""
    original_description: str = ""
    clarification: ClarificationRequest | None = None
    answers: tuple[str, ...] = ()
    rounds: int = 0
    max_rounds: int = 0  # 0 means unlimited


def amend_description(original: str, answers: list[str] | tuple[str, ...]) -> str:
    """Append a labelled block of answers, in question order, to the description."""
    return f"{original}\n\n{CLARIFICATIONS_HEADER}\n" + "\n".join(answers)


def _require(negotiation: Negotiation, state: NegotiationState, action: str) -> None:
    if negotiation.state is not state:
        raise InvalidTransitionError(
            f"Cannot {action} while {negotiation.state.value}; expected {state.value}"
        )


def begin_clarification(
    negotiation: Negotiation,
    description: str,
    clarification: ClarificationRequest,
) -> Negotiation:
    """A clarification arrived for ``description``: open one answer slot per question."""
    _require(negotiation, NegotiationState.IDLE, "begin clarification")

    if negotiation.max_rounds and negotiation.rounds >= negotiation.max_rounds:
        raise ClarificationLimitError(negotiation.max_rounds)

    previous = negotiation.clarification
    if previous is not None and previous.contradiction.strip() == clarification.contradiction.strip():
        logger.warning("Generator repeated the same contradiction: %s", clarification.contradiction)

    return replace(
        negotiation,
        state=NegotiationState.AWAITING_ANSWERS,
        description=description,
        original_description=description,
        clarification=clarification,
        answers=tuple("" for _ in clarification.questions),
        rounds=negotiation.rounds + 1,
    )


def record_answer(negotiation: Negotiation, index: int, value: str) -> Negotiation:
    """Fill the answer slot for question ``index``."""
    _require(negotiation, NegotiationState.AWAITING_ANSWERS, "record an answer")
    if not 0 <= index < len(negotiation.answers):
        raise IndexError(f"No question at index {index}")

    answers = list(negotiation.answers)
    answers[index] = value
    return replace(negotiation, answers=tuple(answers))


def can_submit(negotiation: Negotiation) -> bool:
    """True when every question has a non-blank answer."""
    return (
        negotiation.state is NegotiationState.AWAITING_ANSWERS
        and bool(negotiation.answers)
        and all(answer.strip() for answer in negotiation.answers)
    )


def submit_answers(negotiation: Negotiation, answers: list[str] | None = None) -> Negotiation:
    """
    Move to AMENDING with the amended description.

    Args:
        negotiation: Current value, in AWAITING_ANSWERS.
        answers: Optional full answer list replacing the recorded slots.

    Raises:
        InvalidTransitionError: Wrong state.
        ValueError: Answer count mismatch or a blank answer.
    """
    _require(negotiation, NegotiationState.AWAITING_ANSWERS, "submit answers")

    if answers is not None:
        if len(answers) != len(negotiation.answers):
            raise ValueError(
                f"Expected {len(negotiation.answers)} answer(s), got {len(answers)}"
            )
        negotiation = replace(negotiation, answers=tuple(answers))

    if not can_submit(negotiation):
        raise ValueError("Every clarification question needs an answer")

    return replace(
        negotiation,
        state=NegotiationState.AMENDING,
        description=amend_description(negotiation.original_description, negotiation.answers),
    )


def finish_amending(negotiation: Negotiation) -> Negotiation:
    """Back to IDLE, holding the amended description to resubmit."""
    _require(negotiation, NegotiationState.AMENDING, "finish amending")
    return replace(negotiation, state=NegotiationState.IDLE, answers=())


def cancel(negotiation: Negotiation) -> Negotiation:
    """Abandon the clarification. Nothing is resubmitted."""
    _require(negotiation, NegotiationState.AWAITING_ANSWERS, "cancel")
    return replace(
        negotiation,
        state=NegotiationState.IDLE,
        description=negotiation.original_description,
        answers=(),
    )


def negotiate(original: str, clarification: ClarificationRequest, answers: list[str]) -> str:
    """Run one full round and return the description to send back to the generator."""
    negotiation = begin_clarification(Negotiation(), original, clarification)
    negotiation = submit_answers(negotiation, answers)
    return finish_amending(negotiation).description
