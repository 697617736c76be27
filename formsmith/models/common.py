from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    message: str
    error: Any = None


class MessageResult(BaseModel):
    message: str


class StatusResponse(BaseModel):
    store_file: str
    forms: int
    responses: int
