"""Tests for MindForm data models."""

import pytest
from pydantic import ValidationError

from mindform.models.field_definitions import (
    FieldDefinition,
    FieldType,
    ValidationRule,
)
from mindform.models.generation_result import (
    ClarificationRequest,
    FormSchema,
    parse_generation_result,
)
from mindform.models.submission import StoredForm, Submission, UserContext
from mindform.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)


class TestFieldDefinition:
    """Tests for FieldDefinition model."""

    def test_basic_field(self):
        """Test creating a basic field."""
        field = FieldDefinition(id="email", label="Email", type="email")
        assert field.type is FieldType.EMAIL
        assert field.required is False
        assert field.pattern is None

    def test_select_requires_options(self):
        """Test that a select field without options is rejected."""
        with pytest.raises(ValidationError):
            FieldDefinition(id="size", label="Size", type="select")
        with pytest.raises(ValidationError):
            FieldDefinition(id="size", label="Size", type="select", options=[])

    def test_options_dropped_for_non_select(self):
        """Test that options only survive on select fields."""
        field = FieldDefinition(id="name", label="Name", type="text", options=["a"])
        assert field.options is None

    def test_unknown_type_rejected(self):
        """Test that types outside the closed set are rejected."""
        with pytest.raises(ValidationError):
            FieldDefinition(id="when", label="When", type="date")

    def test_pattern_property(self):
        """Test reading the custom pattern."""
        field = FieldDefinition(
            id="zip",
            label="ZIP",
            type="text",
            validation=ValidationRule(pattern=r"\d{5}"),
        )
        assert field.pattern == r"\d{5}"


class TestValidationRule:
    """Tests for ValidationRule model."""

    def test_invalid_pattern_rejected(self):
        """Test that a pattern which does not compile is rejected."""
        with pytest.raises(ValidationError):
            ValidationRule(pattern="([a-z")

    def test_blank_pattern_becomes_none(self):
        """Test that an empty pattern means no pattern."""
        assert ValidationRule(pattern="", message="x").pattern is None


class TestFormSchema:
    """Tests for FormSchema model."""

    def test_duplicate_ids_rejected(self):
        """Test that field ids must be unique."""
        with pytest.raises(ValidationError):
            FormSchema(
                title="Dupes",
                fields=[
                    FieldDefinition(id="a", label="A", type="text"),
                    FieldDefinition(id="a", label="A again", type="text"),
                ],
            )

    def test_blank_title_defaults(self):
        """Test that a blank title becomes the default."""
        assert FormSchema(title="  ").title == "Untitled Form"
        assert FormSchema().title == "Untitled Form"

    def test_get_field(self, contact_schema):
        """Test looking fields up by id."""
        assert contact_schema.get_field("email").label == "Email"
        with pytest.raises(KeyError):
            contact_schema.get_field("missing")

    def test_field_order_preserved(self, contact_schema):
        """Test that declared order is kept."""
        assert contact_schema.field_ids == ["name", "email", "phone", "topic", "message"]


class TestGenerationResult:
    """Tests for parsing the tagged generation result."""

    def test_parse_form(self):
        """Test parsing the form variant."""
        result = parse_generation_result({
            "type": "form",
            "title": "Signup",
            "fields": [{"id": "email", "label": "Email", "type": "email", "required": True}],
        })
        assert isinstance(result, FormSchema)
        assert result.fields[0].required is True

    def test_parse_clarification_from_json(self):
        """Test parsing the clarification variant from raw JSON."""
        result = parse_generation_result(
            '{"type": "clarification", "contradiction": "anonymous vs phone",'
            ' "questions": ["Which one?"]}'
        )
        assert isinstance(result, ClarificationRequest)
        assert result.questions == ["Which one?"]

    def test_unknown_tag_rejected(self):
        """Test that an unknown type tag is rejected."""
        with pytest.raises(ValidationError):
            parse_generation_result({"type": "survey", "fields": []})

    def test_clarification_needs_questions(self):
        """Test that a clarification without questions is rejected."""
        with pytest.raises(ValidationError):
            parse_generation_result({"type": "clarification", "contradiction": "x", "questions": []})


class TestPersistenceModels:
    """Tests for StoredForm, Submission and UserContext."""

    def test_submission_defaults(self):
        """Test that submissions get an id and a timestamp."""
        submission = Submission(form_title="Contact Us", answers={"name": "Jane"})
        assert submission.id
        assert submission.created_at.tzinfo is not None
        assert submission.form_id is None

    def test_submission_is_frozen(self):
        """Test that submissions cannot be mutated."""
        submission = Submission(form_title="Contact Us")
        with pytest.raises(ValidationError):
            submission.form_title = "Other"

    def test_stored_form_schema_alias(self, contact_schema):
        """Test that the schema is stored under the ``schema`` key."""
        form = StoredForm(title="Contact Us", schema=contact_schema)
        dumped = form.model_dump(by_alias=True)
        assert "schema" in dumped
        assert form.accepting_responses is True

    def test_user_context(self):
        """Test anonymous and signed-in contexts."""
        assert not UserContext().is_authenticated
        assert UserContext("user-1").is_authenticated


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_valid_result(self):
        """Test valid validation result."""
        result = ValidationResult(
            is_valid=True,
            validated_data={"email": "test@example.com"},
        )
        assert result.is_valid
        assert result.error_count == 0

    def test_error_map_keeps_first_message(self):
        """Test converting errors to a field -> message map."""
        result = ValidationResult(
            is_valid=False,
            errors=[
                FieldValidationError(field_id="email", error_type="required", message="Email is required"),
                FieldValidationError(field_id="email", error_type="email", message="Invalid email address"),
                FieldValidationError(field_id="phone", error_type="phone", message="Invalid phone number"),
            ],
        )
        assert result.error_count == 3
        assert result.to_error_map() == {
            "email": "Email is required",
            "phone": "Invalid phone number",
        }
