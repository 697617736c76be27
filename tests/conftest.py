import pytest

from fastapi.testclient import TestClient

from formsmith.store import DocumentStore


# --- Canned payloads ---

SURVEY_PAYLOAD = {
    "title": "Survey",
    "headerImage": None,
    "questions": [
        {
            "id": 1700000000000,
            "type": "CheckBox",
            "label": "Pick one",
            "image": None,
            "options": ["A", "B"],
            "grid": {"rows": [""], "columns": [""]},
        },
    ],
}

MIXED_PAYLOAD = {
    "title": "Site visit",
    "headerImage": "file:///tmp/header.png",
    "questions": [
        {"type": "Text", "label": "Your name", "options": [], "grid": {"rows": [""], "columns": [""]}},
        {"type": "CheckBox", "label": "Tools used", "options": ["Drill", "Saw", "Level"],
         "grid": {"rows": [""], "columns": [""]}},
        {"type": "Grid", "label": "Rate each room", "options": [],
         "grid": {"rows": ["Kitchen", "Hall"], "columns": ["Good", "Poor"]}},
    ],
}


@pytest.fixture
def store(tmp_path, mocker):
    """Document store backed by a temp file, patched into every module that opens one."""
    store = DocumentStore(tmp_path / "forms.json")
    for target in (
        "formsmith.services.forms.get_store",
        "formsmith.services.responses.get_store",
        "formsmith.main.get_store",
        "formsmith.mcp_server.get_store",
    ):
        mocker.patch(target, return_value=store)
    return store


@pytest.fixture
def api_client(store):
    """FastAPI TestClient for router tests, backed by the temp store."""
    from formsmith.main import api
    return TestClient(api)


@pytest.fixture
def forms_client(api_client):
    """API client wired to the in-process app instead of the network."""
    from formsmith.client import FormsClient
    return FormsClient(base_url="http://testserver", session=api_client, timeout=5)
