"""Shared HTTP session for talking to the Formsmith API."""

import requests
from requests.adapters import HTTPAdapter

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session.

    Failed calls are reported to the caller as-is; the adapters never retry.
    """
    global _session
    if _session is None:
        _session = requests.Session()
        adapter = HTTPAdapter(max_retries=0)
        _session.mount("http://", adapter)
        _session.mount("https://", adapter)
        _session.headers.update({"Accept": "application/json"})
    return _session
