"""
HTTP server for MindForm.

Provides:
1. Form generation API (with clarification rounds)
2. Server-rendered shared forms and their submission
3. Owner API for forms and submissions (user id in ``X-User-Id``)

The ``X-User-Id`` header stands in for a real authentication
collaborator. Any client can send it, so this server is for local use
only.

Usage:
    mindform web
    # Then POST {"description": "..."} to http://localhost:9110/api/generate
"""

import json
import logging
from urllib.parse import parse_qsl

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.routing import Route

from mindform.builder import FormBuilderSession
from mindform.config import get_config
from mindform.dashboard import FormDashboard
from mindform.errors import (
    AccessDeniedError,
    AuthenticationRequiredError,
    ClarificationLimitError,
    FormNotFoundError,
    FormValidationError,
    GenerationServiceError,
    InvalidTransitionError,
    MalformedResultError,
    QuotaExhaustedError,
    RateLimitExceededError,
    RecordNotFoundError,
    StorageError,
    SubmissionPersistError,
    UnsafeDescriptionError,
)
from mindform.forms.sharing import load_shared_form
from mindform.gateway import GenerationGateway, SchemaGenerationGateway
from mindform.models.generation_result import ClarificationRequest, FormSchema
from mindform.models.submission import UserContext
from mindform import negotiation as nego
from mindform.storage import create_store
from mindform.storage.base import FormStore
from mindform.web.templates import (
    render_form_page,
    render_home_page,
    render_submitted_page,
)

logger = logging.getLogger(__name__)

GENERATION_ERROR_STATUS = {
    RateLimitExceededError: 429,
    QuotaExhaustedError: 402,
    UnsafeDescriptionError: 400,
    MalformedResultError: 502,
}

FIX_ERRORS_MESSAGE = "Please fix the errors in the form"
BAD_ENCODING_MESSAGE = "Form data must be UTF-8 encoded"


def _user_context(request: Request) -> UserContext:
    # Unverified header; local use only
    return UserContext(request.headers.get("X-User-Id") or None)


def _store(request: Request) -> FormStore:
    return request.app.state.store


def _gateway(request: Request) -> GenerationGateway:
    if request.app.state.gateway is None:
        request.app.state.gateway = SchemaGenerationGateway()
    return request.app.state.gateway


def _dashboard(request: Request) -> FormDashboard:
    return FormDashboard(_store(request), _user_context(request), request.app.state.base_url)


async def _json_body(request: Request) -> dict:
    try:
        data = await request.json()
    except json.JSONDecodeError:
        data = None
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


async def home(request: Request) -> HTMLResponse:
    return HTMLResponse(render_home_page())


async def health_check(request: Request) -> JSONResponse:
    config = get_config()
    return JSONResponse({
        "status": "healthy",
        "service": "mindform",
        "storage": config.storage_backend,
    })


async def generate_form(request: Request) -> JSONResponse:
    """
    POST /api/generate

    Body: {"description": str}
    Clarification round: also send the "clarification" object you got
    back, your "answers" in question order, and the "round" number.
    """
    try:
        data = await _json_body(request)
    except ValueError as e:
        return _bad_request(str(e))

    description = data.get("description") or ""
    if not isinstance(description, str):
        return _bad_request("description must be a string")

    if data.get("clarification") is not None:
        try:
            clarification = ClarificationRequest.model_validate(data["clarification"])
        except ValidationError as e:
            return _bad_request(f"Invalid clarification: {e.errors()[0]['msg']}")
        answers = data.get("answers")
        if not isinstance(answers, list) or not all(isinstance(a, str) for a in answers):
            return _bad_request("answers must be a list of strings")

        round_number = data.get("round") or 1
        if not isinstance(round_number, int) or round_number < 1:
            return _bad_request("round must be a positive integer")

        # Rounds already answered before this one count towards the cap
        negotiation = nego.Negotiation(
            max_rounds=get_config().max_clarification_rounds,
            rounds=round_number - 1,
        )
        negotiation = nego.begin_clarification(negotiation, description, clarification)
        try:
            negotiation = nego.submit_answers(negotiation, answers)
        except ValueError as e:
            return _bad_request(str(e))
        description = nego.finish_amending(negotiation).description

    session = FormBuilderSession(
        _gateway(request),
        _store(request),
        _user_context(request),
        base_url=request.app.state.base_url,
    )
    try:
        outcome = await session.generate(description)
    except ValueError as e:
        return _bad_request(str(e))

    payload = outcome.result.model_dump(mode="json", exclude_none=True)
    if isinstance(outcome.result, FormSchema):
        payload["form_id"] = outcome.form_id
        payload["share_url"] = outcome.share_url
        if outcome.share_error:
            payload["share_error"] = outcome.share_error
    return JSONResponse(payload)


async def show_form(request: Request):
    """GET /form/{form_id}"""
    try:
        session = await load_shared_form(_store(request), request.path_params["form_id"])
    except FormNotFoundError:
        return RedirectResponse("/", status_code=302)
    return HTMLResponse(render_form_page(session))


async def submit_form(request: Request):
    """POST /form/{form_id} with an urlencoded body."""
    store = _store(request)
    try:
        session = await load_shared_form(store, request.path_params["form_id"])
    except FormNotFoundError:
        return RedirectResponse("/", status_code=303)

    try:
        body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Rejected non-UTF-8 submission for form %s", session.form_id)
        return HTMLResponse(render_form_page(session, BAD_ENCODING_MESSAGE), status_code=400)
    values = dict(parse_qsl(body, keep_blank_values=True))
    for field_id in session.schema.field_ids:
        if field_id in values:
            session.set_value(field_id, values[field_id])

    try:
        await session.submit(store)
    except FormValidationError:
        return HTMLResponse(render_form_page(session, FIX_ERRORS_MESSAGE), status_code=400)
    except SubmissionPersistError as e:
        return HTMLResponse(render_form_page(session, e.user_message), status_code=503)

    return HTMLResponse(render_submitted_page(session))


async def list_forms(request: Request) -> JSONResponse:
    dashboard = _dashboard(request)
    forms = await dashboard.list_forms()
    return JSONResponse([
        {
            "id": form.id,
            "title": form.title,
            "description": form.description,
            "accepting_responses": form.accepting_responses,
            "created_at": form.created_at.isoformat(),
            "share_url": dashboard.share_link(form.id),
        }
        for form in forms
    ])


async def list_submissions(request: Request) -> JSONResponse:
    submissions = await _dashboard(request).list_submissions(request.path_params["form_id"])
    return JSONResponse([s.model_dump(mode="json") for s in submissions])


async def set_accepting_responses(request: Request) -> JSONResponse:
    try:
        data = await _json_body(request)
    except ValueError as e:
        return _bad_request(str(e))
    accepting = data.get("accepting")
    if not isinstance(accepting, bool):
        return _bad_request("accepting must be true or false")

    await _dashboard(request).set_accepting_responses(request.path_params["form_id"], accepting)
    return JSONResponse({"success": True, "accepting_responses": accepting})


async def delete_submission(request: Request) -> JSONResponse:
    await _dashboard(request).delete_submission(request.path_params["submission_id"])
    return JSONResponse({"success": True})


async def _generation_error(request: Request, exc: GenerationServiceError) -> JSONResponse:
    status = GENERATION_ERROR_STATUS.get(type(exc), 502)
    return JSONResponse({"error": exc.user_message, "kind": exc.kind}, status_code=status)


async def _error(status: int, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=status)


async def _authentication_error(request: Request, exc: AuthenticationRequiredError) -> JSONResponse:
    return await _error(401, exc)


async def _access_error(request: Request, exc: AccessDeniedError) -> JSONResponse:
    return await _error(403, exc)


async def _not_found_error(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return await _error(404, exc)


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage error on %s: %s", request.url.path, exc)
    return await _error(503, exc)


async def _conflict_error(request: Request, exc: Exception) -> JSONResponse:
    return await _error(409, exc)


def create_app(
    store: FormStore | None = None,
    gateway: GenerationGateway | None = None,
    base_url: str | None = None,
) -> Starlette:
    """
    Build the Starlette application.

    Args:
        store: Storage collaborator. If None, built from configuration.
        gateway: Generation gateway. If None, an agent-backed gateway is
            created on first use.
        base_url: Public URL used in share links. If None, uses
            config.public_base_url.
    """
    app = Starlette(
        routes=[
            Route("/", home, methods=["GET"]),
            Route("/health", health_check, methods=["GET"]),
            Route("/api/generate", generate_form, methods=["POST"]),
            Route("/form/{form_id}", show_form, methods=["GET"]),
            Route("/form/{form_id}", submit_form, methods=["POST"]),
            Route("/api/forms", list_forms, methods=["GET"]),
            Route("/api/forms/{form_id}/submissions", list_submissions, methods=["GET"]),
            Route("/api/forms/{form_id}/accepting", set_accepting_responses, methods=["POST"]),
            Route("/api/submissions/{submission_id}", delete_submission, methods=["DELETE"]),
        ],
        exception_handlers={
            GenerationServiceError: _generation_error,
            AuthenticationRequiredError: _authentication_error,
            AccessDeniedError: _access_error,
            RecordNotFoundError: _not_found_error,
            StorageError: _storage_error,
            ClarificationLimitError: _conflict_error,
            InvalidTransitionError: _conflict_error,
        },
    )
    app.state.store = store if store is not None else create_store()
    app.state.gateway = gateway
    app.state.base_url = base_url or get_config().public_base_url
    return app
