from fastmcp import FastMCP

from formsmith.exceptions import FormsmithError, NotFoundError, StoreError, ValidationError
from formsmith.services import forms as forms_service
from formsmith.services import responses as responses_service
from formsmith.store import FORMS, RESPONSES, get_store

mcp = FastMCP("Formsmith")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, ValidationError):
        return {"error": "validation_error", "message": e.message, "detail": e.error,
                "action": "Fix the payload shape and call again"}
    if isinstance(e, NotFoundError):
        return {"error": "not_found", "message": e.message, "action": "Check the form id"}
    if isinstance(e, StoreError):
        return {"error": "store_error", "message": e.message, "detail": e.error}
    return {"error": "unknown_error", "message": str(e)}


# --- Form tools ---

@mcp.tool
def forms_create(title: str, questions: list[dict], header_image: str | None = None) -> dict:
    """Create a form. Each question is a dict with 'type' (Text, CheckBox or Grid), 'label',
    'options' (list of strings, for CheckBox) and 'grid' ({'rows': [...], 'columns': [...]}, for Grid).
    Returns the new form id and its preview path."""
    try:
        form_id = forms_service.create_form(title, header_image, questions)
        return {"form_id": form_id, "preview_path": f"/preview/{form_id}"}
    except FormsmithError as e:
        return _handle_mcp_error(e)


@mcp.tool
def forms_get(form_id: str) -> dict:
    """Get a saved form with all of its questions, in display order.
    Use the returned question ids when submitting responses."""
    try:
        return forms_service.get_form(form_id).model_dump(mode="json", by_alias=True)
    except FormsmithError as e:
        return _handle_mcp_error(e)


# --- Response tools ---

@mcp.tool
def responses_submit(form_id: str, responses: list[dict]) -> dict:
    """Submit answers for a form. Each entry is {'questionId': ..., 'answer': ...};
    answers are true/false for CheckBox questions and text for Text and Grid questions."""
    try:
        response_id = responses_service.submit_response(form_id, responses)
        return {"response_id": response_id, "message": "Response saved successfully"}
    except FormsmithError as e:
        return _handle_mcp_error(e)


@mcp.tool
def formsmith_status() -> dict:
    """Report the document store location and how many forms and responses it holds."""
    try:
        store = get_store()
        return {"store_file": str(store.path), "forms": store.count(FORMS), "responses": store.count(RESPONSES)}
    except FormsmithError as e:
        return _handle_mcp_error(e)
