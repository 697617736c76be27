import logging

import pydantic

from formsmith.exceptions import NotFoundError, ValidationError
from formsmith.models.forms import CreateFormRequest, Form, Question
from formsmith.store import FORMS, get_store

logger = logging.getLogger(__name__)


def _build_form(title, header_image, questions) -> CreateFormRequest:
    """Check the payload shape. Field values are not otherwise validated."""
    try:
        return CreateFormRequest(
            title=title,
            header_image=header_image,
            questions=[q.model_dump() if isinstance(q, Question) else q for q in (questions or [])],
        )
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid form payload", error=e.errors(include_url=False)) from e


def create_form(title: str | None, header_image: str | None, questions: list) -> str:
    """Persist a new form and return its id."""
    payload = _build_form(title, header_image, questions)
    document = payload.model_dump(mode="json", by_alias=True, exclude={"questions": {"__all__": {"id"}}})
    form_id = get_store().insert(FORMS, document)
    logger.info("Created form %s with %d question(s)", form_id, len(payload.questions))
    return form_id


def get_form(form_id: str) -> Form:
    """Load a form by id. Any id is readable."""
    document = get_store().find_by_id(FORMS, form_id)
    if document is None:
        raise NotFoundError("Form not found")
    return Form.model_validate(document)
