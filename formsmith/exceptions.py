class FormsmithError(Exception):
    """Base error carrying a user-facing message and an optional detail."""

    def __init__(self, message: str, error=None):
        super().__init__(message)
        self.message = message
        self.error = error


class ValidationError(FormsmithError):
    """Raised when a payload does not have the expected shape."""


class NotFoundError(FormsmithError):
    """Raised when no document exists for an id."""


class StoreError(FormsmithError):
    """Raised on a malformed id or when the document store cannot be read or written."""


class ApiError(FormsmithError):
    """Raised by the API client when a request fails or returns a non-2xx status."""

    def __init__(self, message: str, error=None, status_code: int | None = None):
        super().__init__(message, error)
        self.status_code = status_code
