"""
Persistence records: stored forms and submissions.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from mindform.models.generation_result import FormSchema

# Field id -> raw string value, absent until first touched
AnswerMap = dict[str, str]

# Field id -> current error message
ErrorMap = dict[str, str]


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UserContext:
    """Who is acting. ``user_id`` is None for anonymous visitors."""

    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


class Submission(BaseModel):
    """One completed, validated form response. Never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    form_title: str = Field(..., description="Title of the form when submitted")
    answers: AnswerMap = Field(default_factory=dict, description="Submitted values")
    form_id: str | None = Field(default=None, description="Persisted form this answers")
    created_at: datetime = Field(default_factory=_utcnow)


class StoredForm(BaseModel):
    """A persisted, shareable form schema."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    owner_id: str | None = Field(default=None)
    title: str
    description: str | None = None
    form_schema: FormSchema = Field(..., alias="schema")
    accepting_responses: bool = True
    created_at: datetime = Field(default_factory=_utcnow)
