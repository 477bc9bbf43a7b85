"""
Shared forms: links to persisted forms and loading them for filling.
"""

import logging

from mindform.errors import FormNotFoundError, StorageError
from mindform.forms.renderer import RenderSession
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)


def share_link(base_url: str, form_id: str) -> str:
    """Public URL of a persisted form."""
    return f"{base_url.rstrip('/')}/form/{form_id}"


async def load_shared_form(store: FormStore, form_id: str) -> RenderSession:
    """
    Open a new render session for a persisted form.

    Closed forms still load; check ``accepting_responses`` on the
    returned session to warn the visitor.

    Raises:
        FormNotFoundError: The id is empty, unknown, or could not be loaded.
    """
    if not form_id:
        raise FormNotFoundError(form_id)

    try:
        stored = await store.get_form(form_id)
    except StorageError as e:
        logger.error("Error fetching form %s: %s", form_id, e)
        raise FormNotFoundError(form_id) from e

    if stored is None:
        raise FormNotFoundError(form_id)

    if not stored.accepting_responses:
        logger.info("Form %s is no longer accepting responses", form_id)

    return RenderSession(
        stored.form_schema,
        form_id=stored.id,
        accepting_responses=stored.accepting_responses,
    )
