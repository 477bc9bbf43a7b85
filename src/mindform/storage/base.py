"""
Storage collaborator interface.

Adapters own authorization: they enforce form ownership and refuse
submissions to forms that stopped accepting responses. Every failure is
raised as a StorageError (or subclass).
"""

from typing import Protocol

from mindform.models.generation_result import FormSchema
from mindform.models.submission import StoredForm, Submission


class FormStore(Protocol):
    """Durable storage for forms and submissions."""

    async def insert_form(self, schema: FormSchema, owner_id: str | None = None) -> str:
        """Persist a schema and return its new id."""
        ...

    async def insert_submission(self, submission: Submission) -> None:
        ...

    async def get_form(self, form_id: str) -> StoredForm | None:
        """Public lookup. None when the id is unknown."""
        ...

    async def list_forms(self, owner_id: str) -> list[StoredForm]:
        """Forms owned by ``owner_id``, newest first."""
        ...

    async def list_submissions(self, form_id: str, owner_id: str) -> list[Submission]:
        """Submissions of an owned form, newest first."""
        ...

    async def delete_submission(self, submission_id: str, owner_id: str) -> None:
        ...

    async def set_accepting_responses(self, form_id: str, accepting: bool, owner_id: str) -> None:
        ...
