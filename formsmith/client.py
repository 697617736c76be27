"""HTTP client for the form and response endpoints.

Used by the editor and the renderer. Any object with requests-style
``get``/``post`` methods can stand in for the session, e.g. a FastAPI
TestClient in tests.
"""

import logging
from urllib.parse import quote

import pydantic
import requests

from formsmith.config import get_settings
from formsmith.exceptions import ApiError, NotFoundError
from formsmith.models.forms import CreateFormRequest, CreateFormResult, Form, ResponseEntry, SubmitResponseRequest
from formsmith.http_client import get_session

logger = logging.getLogger(__name__)


def _handle_response(resp):
    """Check response status and raise appropriate exceptions."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    body = data if isinstance(data, dict) else {}
    if resp.status_code == 404:
        raise NotFoundError(body.get("message", "Not found"), error=body.get("error"))
    if resp.status_code >= 400:
        raise ApiError(
            body.get("message", f"HTTP {resp.status_code}"),
            error=body.get("error", resp.text[:500]),
            status_code=resp.status_code,
        )
    return data


def _parse(model, data, path: str):
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ApiError(f"Unexpected response from {path}", error=e.errors(include_url=False)) from e


class FormsClient:
    def __init__(self, base_url: str | None = None, session=None, timeout: float | None = None):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.session = session if session is not None else get_session()
        self.timeout = timeout if timeout is not None else settings.request_timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs):
        try:
            resp = getattr(self.session, method)(self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"Request to {path} failed", error=str(e)) from e
        return _handle_response(resp)

    def create_form(self, payload: CreateFormRequest) -> str:
        """POST the form and return the id the server assigned."""
        path = "/api/create-form"
        data = self._request("post", path, json=payload.model_dump(mode="json", by_alias=True))
        return _parse(CreateFormResult, data, path).form_id

    def get_form(self, form_id: str) -> Form:
        path = f"/api/form/{quote(str(form_id), safe='')}"
        return _parse(Form, self._request("get", path), path)

    def submit_response(self, form_id, responses: list[ResponseEntry]) -> str:
        payload = SubmitResponseRequest(form_id=form_id, responses=responses)
        data = self._request("post", "/api/submit-response", json=payload.model_dump(mode="json", by_alias=True))
        return data.get("message", "") if isinstance(data, dict) else ""
