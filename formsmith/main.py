import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.routing import Mount

from formsmith.config import get_settings
from formsmith.exceptions import FormsmithError, NotFoundError
from formsmith.mcp_server import mcp
from formsmith.models.common import ErrorResponse, StatusResponse
from formsmith.routers.forms import ROUTE_ERROR_MESSAGES, router as forms_router
from formsmith.store import FORMS, RESPONSES, get_store

logger = logging.getLogger(__name__)


# --- FastAPI app ---

api = FastAPI(title="Formsmith", version="0.1.0")
api.include_router(forms_router)


@api.get("/api/status")
def api_status() -> StatusResponse:
    store = get_store()
    return StatusResponse(
        store_file=str(store.path),
        forms=store.count(FORMS),
        responses=store.count(RESPONSES),
    )


# --- Exception handlers ---

def _error_content(message: str, error=None) -> dict:
    return ErrorResponse(message=message, error=jsonable_encoder(error)).model_dump(exclude_none=True)


@api.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content=_error_content(exc.message, exc.error))


@api.exception_handler(FormsmithError)
async def formsmith_error_handler(request: Request, exc: FormsmithError):
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error)
    return JSONResponse(status_code=400, content=_error_content(exc.message, exc.error))


@api.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = ROUTE_ERROR_MESSAGES.get(request.url.path, "Invalid request")
    return JSONResponse(status_code=400, content=_error_content(message, exc.errors()))


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=mcp_app.lifespan,
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "formsmith.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
