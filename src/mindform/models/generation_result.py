"""
Generation result models.

The schema generator answers with exactly one of two variants, tagged by
``type``: a usable form (``"form"``) or a report that the description
contradicts itself (``"clarification"``). ``GenerationResult`` is the
discriminated union of both.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from mindform.models.field_definitions import FieldDefinition


class FormSchema(BaseModel):
    """A generated form: title, description and ordered fields."""

    type: Literal["form"] = "form"
    title: str = Field(default="Untitled Form", description="Form title")
    description: str | None = Field(default=None, description="Brief description")
    fields: list[FieldDefinition] = Field(
        default_factory=list,
        description="Fields in rendering order",
    )

    @field_validator("fields")
    @classmethod
    def _unique_ids(cls, fields: list[FieldDefinition]) -> list[FieldDefinition]:
        seen: set[str] = set()
        for field in fields:
            if field.id in seen:
                raise ValueError(f"Duplicate field id: {field.id}")
            seen.add(field.id)
        return fields

    @field_validator("title", mode="before")
    @classmethod
    def _default_blank_title(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "Untitled Form"
        return value

    def get_field(self, field_id: str) -> FieldDefinition:
        """Look up a field by id. Raises KeyError if absent."""
        for field in self.fields:
            if field.id == field_id:
                return field
        raise KeyError(field_id)

    @property
    def field_ids(self) -> list[str]:
        return [f.id for f in self.fields]


class ClarificationRequest(BaseModel):
    """The description contradicts itself; these questions resolve it."""

    type: Literal["clarification"] = "clarification"
    contradiction: str = Field(..., description="What the contradiction is")
    questions: list[str] = Field(
        ...,
        min_length=1,
        description="Questions for the user, in order",
    )


GenerationResult = Annotated[
    FormSchema | ClarificationRequest,
    Field(discriminator="type"),
]

_result_adapter: TypeAdapter[FormSchema | ClarificationRequest] = TypeAdapter(GenerationResult)


def parse_generation_result(data: dict[str, Any] | str | bytes) -> FormSchema | ClarificationRequest:
    """
    Validate a raw generator response into its variant.

    Args:
        data: A decoded JSON object or the raw JSON text.

    Returns:
        FormSchema or ClarificationRequest, depending on ``type``.

    Raises:
        pydantic.ValidationError: If the payload is not a valid result.
    """
    if isinstance(data, (str, bytes)):
        return _result_adapter.validate_json(data)
    return _result_adapter.validate_python(data)
