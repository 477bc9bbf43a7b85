"""Shared fixtures for MindForm tests."""

import asyncio

import pytest

from mindform.models.field_definitions import FieldDefinition, FieldType, ValidationRule
from mindform.models.generation_result import ClarificationRequest, FormSchema
from mindform.storage.memory import InMemoryFormStore


class FakeGateway:
    """Gateway that replays canned results (or raises canned errors) in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: list[str] = []

    async def generate(self, description: str):
        self.calls.append(description)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class BlockingGateway:
    """Gateway that waits for ``release`` before returning ``result``."""

    def __init__(self, result):
        self.result = result
        self.calls: list[str] = []
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate(self, description: str):
        self.calls.append(description)
        self.started.set()
        await self.release.wait()
        return self.result


@pytest.fixture
def contact_schema() -> FormSchema:
    return FormSchema(
        title="Contact Us",
        description="Get in touch",
        fields=[
            FieldDefinition(id="name", label="Name", type=FieldType.TEXT, required=True),
            FieldDefinition(id="email", label="Email", type=FieldType.EMAIL, required=True),
            FieldDefinition(id="phone", label="Phone", type=FieldType.TEL),
            FieldDefinition(
                id="topic",
                label="Topic",
                type=FieldType.SELECT,
                options=["Sales", "Support"],
            ),
            FieldDefinition(id="message", label="Message", type=FieldType.TEXTAREA),
        ],
    )


@pytest.fixture
def zip_schema() -> FormSchema:
    return FormSchema(
        title="Shipping",
        fields=[
            FieldDefinition(
                id="zip",
                label="ZIP Code",
                type=FieldType.TEXT,
                validation=ValidationRule(pattern=r"\d{5}", message="Must be 5 digits"),
            ),
        ],
    )


@pytest.fixture
def anonymity_clarification() -> ClarificationRequest:
    return ClarificationRequest(
        contradiction="The form is anonymous but asks for a phone number",
        questions=["Should the form stay anonymous, or collect the phone number?"],
    )


@pytest.fixture
def store() -> InMemoryFormStore:
    return InMemoryFormStore()


@pytest.fixture
def fake_gateway():
    return FakeGateway


@pytest.fixture
def blocking_gateway():
    return BlockingGateway
