"""
Submission pipeline: validate a complete answer set, then persist it.
"""

import logging

from mindform.errors import FormValidationError, StorageError, SubmissionPersistError
from mindform.forms.validator import validate_answers
from mindform.models.generation_result import FormSchema
from mindform.models.submission import Submission
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)


async def submit_answers(
    schema: FormSchema,
    answers: dict[str, str],
    store: FormStore,
    *,
    form_id: str | None = None,
) -> Submission:
    """
    Validate answers against a schema and store them as a Submission.

    Args:
        schema: The form being answered.
        answers: Field id -> raw value. Absent fields count as empty.
        store: Storage collaborator.
        form_id: Id of the persisted form, if the schema is shared.

    Returns:
        The stored Submission.

    Raises:
        FormValidationError: At least one field is invalid. Nothing is stored.
        SubmissionPersistError: The store rejected or failed the insert.
    """
    result = validate_answers(schema, answers)
    if not result.is_valid:
        logger.info("Rejected answers for form %s: %d invalid field(s)", form_id, result.error_count)
        raise FormValidationError(result.to_error_map())

    submission = Submission(
        form_title=schema.title,
        answers={fid: answers[fid] for fid in schema.field_ids if fid in answers},
        form_id=form_id,
    )

    try:
        await store.insert_submission(submission)
    except StorageError as e:
        logger.error("Error submitting form %s: %s", form_id, e)
        raise SubmissionPersistError(str(e)) from e

    logger.info("Stored submission %s for form %s", submission.id, form_id)
    return submission
