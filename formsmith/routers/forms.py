from fastapi import APIRouter

from formsmith.exceptions import FormsmithError, NotFoundError
from formsmith.models.common import MessageResult
from formsmith.models.forms import (
    CreateFormRequest,
    CreateFormResult,
    Form,
    SubmitResponseRequest,
)
from formsmith.services import forms as forms_service
from formsmith.services import responses as responses_service

router = APIRouter(prefix="/api", tags=["forms"])

# Message reported for any failure on a route, keyed by path.
ROUTE_ERROR_MESSAGES = {
    "/api/create-form": "Error creating form",
    "/api/submit-response": "Error saving response",
}
FETCH_ERROR_MESSAGE = "Error fetching form"


def _reraise(e: FormsmithError, message: str):
    raise type(e)(message, error=e.error if e.error is not None else e.message) from e


@router.post("/create-form", status_code=201)
def create_form(request: CreateFormRequest) -> CreateFormResult:
    try:
        form_id = forms_service.create_form(request.title, request.header_image, request.questions)
    except FormsmithError as e:
        _reraise(e, ROUTE_ERROR_MESSAGES["/api/create-form"])
    return CreateFormResult(message="Form created successfully", form_id=form_id)


@router.get("/form/{form_id}")
def get_form(form_id: str) -> Form:
    try:
        return forms_service.get_form(form_id)
    except NotFoundError:
        raise
    except FormsmithError as e:
        _reraise(e, FETCH_ERROR_MESSAGE)


@router.post("/submit-response", status_code=201)
def submit_response(request: SubmitResponseRequest) -> MessageResult:
    try:
        responses_service.submit_response(request.form_id, request.responses)
    except FormsmithError as e:
        _reraise(e, ROUTE_ERROR_MESSAGES["/api/submit-response"])
    return MessageResult(message="Response saved successfully")
