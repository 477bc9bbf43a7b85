"""
In-process form store.

Used for local runs and tests. Also the base for the JSON file store,
which only adds loading and saving around the same rules.
"""

import logging

from mindform.errors import AccessDeniedError, FormClosedError, RecordNotFoundError
from mindform.models.generation_result import FormSchema
from mindform.models.submission import StoredForm, Submission

logger = logging.getLogger(__name__)


class InMemoryFormStore:
    """FormStore backed by two dicts."""

    def __init__(self):
        self._forms: dict[str, StoredForm] = {}
        self._submissions: dict[str, Submission] = {}

    def _owned_form(self, form_id: str, owner_id: str) -> StoredForm:
        form = self._forms.get(form_id)
        if form is None:
            raise RecordNotFoundError(f"Form not found: {form_id}")
        if form.owner_id is None or form.owner_id != owner_id:
            raise AccessDeniedError(f"Form {form_id} is not owned by this user")
        return form

    def _save_form(self, form: StoredForm) -> None:
        self._forms[form.id] = form

    def _save_submission(self, submission: Submission) -> None:
        self._submissions[submission.id] = submission

    def _remove_submission(self, submission_id: str) -> None:
        del self._submissions[submission_id]

    async def insert_form(self, schema: FormSchema, owner_id: str | None = None) -> str:
        form = StoredForm(
            owner_id=owner_id,
            title=schema.title,
            description=schema.description or "",
            form_schema=schema,
        )
        self._save_form(form)
        logger.debug("Inserted form %s for owner %s", form.id, owner_id)
        return form.id

    async def insert_submission(self, submission: Submission) -> None:
        if submission.form_id is not None:
            form = self._forms.get(submission.form_id)
            if form is None:
                raise RecordNotFoundError(f"Form not found: {submission.form_id}")
            if not form.accepting_responses:
                raise FormClosedError("This form is no longer accepting responses")
        self._save_submission(submission)

    async def get_form(self, form_id: str) -> StoredForm | None:
        form = self._forms.get(form_id)
        return form.model_copy() if form else None

    async def list_forms(self, owner_id: str) -> list[StoredForm]:
        forms = [f.model_copy() for f in self._forms.values() if f.owner_id == owner_id]
        return sorted(forms, key=lambda f: f.created_at, reverse=True)

    async def list_submissions(self, form_id: str, owner_id: str) -> list[Submission]:
        self._owned_form(form_id, owner_id)
        submissions = [s for s in self._submissions.values() if s.form_id == form_id]
        return sorted(submissions, key=lambda s: s.created_at, reverse=True)

    async def delete_submission(self, submission_id: str, owner_id: str) -> None:
        submission = self._submissions.get(submission_id)
        if submission is None:
            raise RecordNotFoundError(f"Submission not found: {submission_id}")
        if submission.form_id is None:
            raise AccessDeniedError(f"Submission {submission_id} has no owning form")
        self._owned_form(submission.form_id, owner_id)
        self._remove_submission(submission_id)

    async def set_accepting_responses(self, form_id: str, accepting: bool, owner_id: str) -> None:
        form = self._owned_form(form_id, owner_id)
        self._save_form(form.model_copy(update={"accepting_responses": accepting}))
