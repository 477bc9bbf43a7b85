"""
Field definition models for generated forms.

A field definition is one input's metadata: type, label, required flag,
an optional validation rule and, for single-select fields, the options.
"""

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class FieldType(str, Enum):
    """Input types the generator may emit."""

    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    NUMBER = "number"
    SELECT = "select"
    TEXTAREA = "textarea"


class ValidationRule(BaseModel):
    """Custom validation for a single field."""

    pattern: str | None = Field(
        default=None,
        description="Regular expression the whole value must match",
    )
    message: str | None = Field(
        default=None,
        description="Error message shown when the pattern does not match",
    )

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str | None) -> str | None:
        if not value:
            return None
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid validation pattern {value!r}: {e}") from e
        return value


class FieldDefinition(BaseModel):
    """A single form field."""

    id: str = Field(..., min_length=1, description="Field identifier, unique within a form")
    label: str = Field(..., description="Human-readable label")
    type: FieldType = Field(..., description="Input type")
    placeholder: str | None = Field(default=None, description="Placeholder hint")
    required: bool = Field(default=False, description="Whether the field must be filled")
    validation: ValidationRule | None = Field(default=None, description="Optional custom validation")
    options: list[str] | None = Field(
        default=None,
        description="Selectable options, only for select fields",
    )

    @model_validator(mode="after")
    def _options_match_type(self) -> "FieldDefinition":
        if self.type is FieldType.SELECT:
            if not self.options:
                raise ValueError(f"Select field '{self.id}' must define at least one option")
        else:
            self.options = None
        return self

    @property
    def pattern(self) -> str | None:
        """The custom validation pattern, if any."""
        return self.validation.pattern if self.validation else None
