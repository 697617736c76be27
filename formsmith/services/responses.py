import logging

import pydantic

from formsmith.exceptions import ValidationError
from formsmith.models.forms import FormResponse, ResponseEntry
from formsmith.store import RESPONSES, get_store

logger = logging.getLogger(__name__)


def submit_response(form_id, responses: list) -> str:
    """Persist one respondent's answers and return the new response id.

    form_id is stored as given. It is not checked against the forms collection,
    and question ids are not checked against the form either.
    """
    try:
        payload = FormResponse(
            form_id=form_id,
            responses=[r.model_dump() if isinstance(r, ResponseEntry) else r for r in (responses or [])],
        )
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid response payload", error=e.errors(include_url=False)) from e
    response_id = get_store().insert(RESPONSES, payload.model_dump(mode="json", by_alias=True, exclude={"id"}))
    logger.info("Saved response %s for form %s", response_id, form_id)
    return response_id
