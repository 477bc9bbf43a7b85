"""Tests for the submission pipeline and shared forms."""

import asyncio

import pytest

from mindform.errors import (
    FormNotFoundError,
    FormValidationError,
    StorageError,
    SubmissionPersistError,
)
from mindform.forms.pipeline import submit_answers
from mindform.forms.sharing import load_shared_form, share_link


class BrokenStore:
    async def insert_submission(self, submission):
        raise StorageError("connection reset")

    async def get_form(self, form_id):
        raise StorageError("connection reset")


class TestSubmitAnswers:
    """Tests for submit_answers."""

    def test_invalid_answers_not_stored(self, contact_schema, store):
        """Test that nothing is stored when validation fails."""
        with pytest.raises(FormValidationError) as exc_info:
            asyncio.run(submit_answers(contact_schema, {"name": "Jane"}, store))

        assert exc_info.value.error_map == {"email": "Email is required"}
        assert store._submissions == {}

    def test_rejection_logs_error_count(self, contact_schema, store, caplog):
        """Test that a rejected answer set logs how many fields failed."""
        with caplog.at_level("INFO", logger="mindform.forms.pipeline"):
            with pytest.raises(FormValidationError):
                asyncio.run(submit_answers(contact_schema, {"phone": "abc"}, store))

        assert "3 invalid field(s)" in caplog.text

    def test_stores_only_schema_fields(self, contact_schema, store):
        """Test that unknown keys are not persisted."""
        answers = {"name": "Jane", "email": "jane@example.com", "extra": "x"}
        submission = asyncio.run(submit_answers(contact_schema, answers, store))

        assert submission.answers == {"name": "Jane", "email": "jane@example.com"}
        assert store._submissions[submission.id] == submission

    def test_persist_failure_converted(self, contact_schema):
        """Test that storage failures become SubmissionPersistError."""
        answers = {"name": "Jane", "email": "jane@example.com"}
        with pytest.raises(SubmissionPersistError) as exc_info:
            asyncio.run(submit_answers(contact_schema, answers, BrokenStore()))
        assert exc_info.value.user_message == "Failed to submit form. Please try again."

    def test_closed_form_rejected(self, contact_schema, store):
        """Test that a form not accepting responses refuses submissions."""
        form_id = asyncio.run(store.insert_form(contact_schema, "owner-1"))
        asyncio.run(store.set_accepting_responses(form_id, False, "owner-1"))

        answers = {"name": "Jane", "email": "jane@example.com"}
        with pytest.raises(SubmissionPersistError):
            asyncio.run(submit_answers(contact_schema, answers, store, form_id=form_id))


class TestSharedForms:
    """Tests for share links and loading shared forms."""

    def test_share_link(self):
        """Test share link construction."""
        assert share_link("https://forms.example.com/", "abc") == "https://forms.example.com/form/abc"

    def test_load_shared_form(self, contact_schema, store):
        """Test opening a persisted form by id."""
        form_id = asyncio.run(store.insert_form(contact_schema))
        session = asyncio.run(load_shared_form(store, form_id))

        assert session.form_id == form_id
        assert session.schema == contact_schema
        assert session.accepting_responses is True

    def test_closed_form_still_loads(self, contact_schema, store):
        """Test that closed forms load with the flag off."""
        form_id = asyncio.run(store.insert_form(contact_schema, "owner-1"))
        asyncio.run(store.set_accepting_responses(form_id, False, "owner-1"))

        session = asyncio.run(load_shared_form(store, form_id))
        assert session.accepting_responses is False

    @pytest.mark.parametrize("form_id", ["", "does-not-exist"])
    def test_missing_form(self, store, form_id):
        """Test that empty and unknown ids are not found."""
        with pytest.raises(FormNotFoundError):
            asyncio.run(load_shared_form(store, form_id))

    def test_storage_failure_is_not_found(self):
        """Test that a failing lookup reports not found."""
        with pytest.raises(FormNotFoundError):
            asyncio.run(load_shared_form(BrokenStore(), "abc"))
