"""
MindForm: AI form generation from natural-language descriptions.

Describe a form, get a schema back (or clarifying questions when the
description contradicts itself), share it, and collect validated answers.

Simple Usage:
    from mindform import FormBuilderSession, SchemaGenerationGateway, create_store

    session = FormBuilderSession(SchemaGenerationGateway(), create_store())
    outcome = await session.generate("Event signup with name, email and t-shirt size")

    if outcome.needs_clarification:
        print(outcome.result.questions)
        outcome = await session.submit_clarifications(["Collect the phone number"])

    print(outcome.share_url)

Filling a form:
    from mindform import load_shared_form

    render = await load_shared_form(store, form_id)
    render.set_value("email", "jane@example.com")
    submission = await render.submit(store)

Tracing:
    from mindform.tracing import setup_tracing

    # Log traces through logging
    setup_tracing(console=True, verbose=True)

    # Or write to file
    setup_tracing(file_path="traces.jsonl")
"""

from mindform.builder import FormBuilderSession, GenerationOutcome
from mindform.dashboard import FormDashboard
from mindform.errors import (
    FormValidationError,
    GenerationServiceError,
    MindFormError,
    StorageError,
    SubmissionPersistError,
)
from mindform.forms import (
    RenderSession,
    load_shared_form,
    submit_answers,
    validate_answers,
    validate_field,
)
from mindform.gateway import GenerationGateway, SchemaGenerationGateway
from mindform.models import (
    ClarificationRequest,
    FieldDefinition,
    FieldType,
    FormSchema,
    Submission,
    UserContext,
    ValidationResult,
)
from mindform.negotiation import negotiate
from mindform.storage import create_store
from mindform.tracing import setup_tracing

__all__ = [
    # Main interface
    "FormBuilderSession",
    "GenerationOutcome",
    "FormDashboard",
    "SchemaGenerationGateway",
    "GenerationGateway",
    "negotiate",
    # Forms
    "RenderSession",
    "load_shared_form",
    "submit_answers",
    "validate_answers",
    "validate_field",
    # Models
    "ClarificationRequest",
    "FieldDefinition",
    "FieldType",
    "FormSchema",
    "Submission",
    "UserContext",
    "ValidationResult",
    # Storage
    "create_store",
    # Errors
    "MindFormError",
    "FormValidationError",
    "GenerationServiceError",
    "StorageError",
    "SubmissionPersistError",
    # Tracing
    "setup_tracing",
]

__version__ = "0.1.0"
