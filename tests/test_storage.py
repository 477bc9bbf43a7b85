"""Tests for the storage adapters."""

import asyncio

import pytest

from mindform.errors import AccessDeniedError, FormClosedError, RecordNotFoundError
from mindform.models.submission import Submission
from mindform.storage import InMemoryFormStore, JsonFileFormStore, create_store


@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryFormStore()
    return JsonFileFormStore(tmp_path / "store")


class TestFormStore:
    """Rules shared by every store."""

    def test_insert_and_get(self, any_store, contact_schema):
        """Test that a stored form can be read back."""
        form_id = asyncio.run(any_store.insert_form(contact_schema, "owner-1"))
        stored = asyncio.run(any_store.get_form(form_id))

        assert stored.title == "Contact Us"
        assert stored.description == "Get in touch"
        assert stored.form_schema == contact_schema
        assert stored.accepting_responses is True
        assert asyncio.run(any_store.get_form("missing")) is None

    def test_owner_scoping(self, any_store, contact_schema):
        """Test that owners only see and change their own forms."""
        form_id = asyncio.run(any_store.insert_form(contact_schema, "owner-1"))
        asyncio.run(any_store.insert_form(contact_schema, "owner-2"))

        assert [f.id for f in asyncio.run(any_store.list_forms("owner-1"))] == [form_id]
        with pytest.raises(AccessDeniedError):
            asyncio.run(any_store.list_submissions(form_id, "owner-2"))
        with pytest.raises(AccessDeniedError):
            asyncio.run(any_store.set_accepting_responses(form_id, False, "owner-2"))

    def test_anonymous_forms_have_no_owner(self, any_store, contact_schema):
        """Test that forms built without a user cannot be managed."""
        form_id = asyncio.run(any_store.insert_form(contact_schema))
        with pytest.raises(AccessDeniedError):
            asyncio.run(any_store.list_submissions(form_id, "owner-1"))

    def test_submissions_lifecycle(self, any_store, contact_schema):
        """Test storing, listing and deleting submissions."""
        form_id = asyncio.run(any_store.insert_form(contact_schema, "owner-1"))
        submission = Submission(form_title="Contact Us", answers={"name": "Jane"}, form_id=form_id)
        asyncio.run(any_store.insert_submission(submission))

        listed = asyncio.run(any_store.list_submissions(form_id, "owner-1"))
        assert [s.id for s in listed] == [submission.id]

        with pytest.raises(AccessDeniedError):
            asyncio.run(any_store.delete_submission(submission.id, "owner-2"))
        asyncio.run(any_store.delete_submission(submission.id, "owner-1"))
        assert asyncio.run(any_store.list_submissions(form_id, "owner-1")) == []

        with pytest.raises(RecordNotFoundError):
            asyncio.run(any_store.delete_submission(submission.id, "owner-1"))

    def test_closed_form_refuses_submissions(self, any_store, contact_schema):
        """Test the accepting-responses flag."""
        form_id = asyncio.run(any_store.insert_form(contact_schema, "owner-1"))
        asyncio.run(any_store.set_accepting_responses(form_id, False, "owner-1"))

        with pytest.raises(FormClosedError):
            asyncio.run(any_store.insert_submission(
                Submission(form_title="Contact Us", form_id=form_id)
            ))
        assert asyncio.run(any_store.get_form(form_id)).accepting_responses is False

    def test_submission_to_unknown_form(self, any_store):
        """Test that submissions must reference an existing form."""
        with pytest.raises(RecordNotFoundError):
            asyncio.run(any_store.insert_submission(
                Submission(form_title="Ghost", form_id="missing")
            ))

    def test_unshared_submission_accepted(self, any_store):
        """Test that submissions without a form id are stored."""
        asyncio.run(any_store.insert_submission(Submission(form_title="Preview")))


class TestJsonFileFormStore:
    """Tests specific to the JSON file store."""

    def test_survives_restart(self, tmp_path, contact_schema):
        """Test that a new store instance sees earlier writes."""
        root = tmp_path / "store"
        first = JsonFileFormStore(root)
        form_id = asyncio.run(first.insert_form(contact_schema, "owner-1"))
        asyncio.run(first.insert_submission(
            Submission(form_title="Contact Us", answers={"name": "Jane"}, form_id=form_id)
        ))

        second = JsonFileFormStore(root)
        assert asyncio.run(second.get_form(form_id)).form_schema == contact_schema
        assert len(asyncio.run(second.list_submissions(form_id, "owner-1"))) == 1

    def test_skips_unreadable_files(self, tmp_path):
        """Test that corrupt files are skipped on load."""
        root = tmp_path / "store"
        (root / "forms").mkdir(parents=True)
        (root / "forms" / "broken.json").write_text("{not json", encoding="utf-8")

        store = JsonFileFormStore(root)
        assert store._forms == {}


class TestCreateStore:
    """Tests for create_store."""

    def test_memory(self):
        assert isinstance(create_store("memory"), InMemoryFormStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_store("redis")
