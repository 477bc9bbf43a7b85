"""
Owner dashboard: list forms, read and delete submissions, open or close forms.

Authorization is the store's job; the dashboard only insists that
someone is signed in and passes their id along.
"""

import logging

from mindform.config import get_config
from mindform.errors import AuthenticationRequiredError
from mindform.forms.sharing import share_link
from mindform.models.submission import StoredForm, Submission, UserContext
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)


class FormDashboard:
    """Form management for the signed-in owner."""

    def __init__(self, store: FormStore, context: UserContext, base_url: str | None = None):
        self.store = store
        self.context = context
        self.base_url = base_url or get_config().public_base_url

    def _owner_id(self) -> str:
        if not self.context.is_authenticated:
            raise AuthenticationRequiredError("Sign in to manage forms")
        return self.context.user_id

    async def list_forms(self) -> list[StoredForm]:
        return await self.store.list_forms(self._owner_id())

    async def list_submissions(self, form_id: str) -> list[Submission]:
        return await self.store.list_submissions(form_id, self._owner_id())

    async def delete_submission(self, submission_id: str) -> None:
        await self.store.delete_submission(submission_id, self._owner_id())
        logger.info("Deleted submission %s", submission_id)

    async def set_accepting_responses(self, form_id: str, accepting: bool) -> None:
        await self.store.set_accepting_responses(form_id, accepting, self._owner_id())
        logger.info(
            "Form %s is now %s responses",
            form_id,
            "accepting" if accepting else "not accepting",
        )

    async def toggle_accepting_responses(self, form: StoredForm) -> bool:
        """Flip a form's status. Returns the new value."""
        accepting = not form.accepting_responses
        await self.set_accepting_responses(form.id, accepting)
        return accepting

    def share_link(self, form_id: str) -> str:
        return share_link(self.base_url, form_id)
