"""FastAPI application wiring and the uvicorn entry point."""

import logging
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from rsharkd import __version__
from rsharkd.exceptions import AggregateError, RadioSharkError
from rsharkd.models import ServerSettings
from rsharkd.services import RadioService, create_service

from .routes import router

logger = logging.getLogger(__name__)


def error_payload(error: Exception) -> dict:
    """JSON body for an error: joined message plus one entry per failure."""
    if isinstance(error, AggregateError):
        details = error.to_dicts()
    else:
        details = [{
            "field": getattr(error, "field", None),
            "kind": type(error).__name__,
            "message": str(error),
        }]
    return {"error": str(error), "errors": details}


def _validation_details(errors: list[dict]) -> list[dict]:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "form")]
        details.append({
            "field": ".".join(loc) or None,
            "kind": err.get("type", "validation_error"),
            "message": err.get("msg", "validation failed"),
        })
    return details


async def radioshark_error_handler(request: Request, exc: RadioSharkError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc.technical_message}")
    return JSONResponse(status_code=400, content=error_payload(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _validation_details(list(exc.errors()))
    message = ", ".join(
        f"{d['field']}: {d['message']}" if d["field"] else d["message"] for d in details
    )
    logger.warning(f"{request.method} {request.url.path}: invalid request: {message}")
    return JSONResponse(status_code=400, content={"error": message, "errors": details})


async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    details = _validation_details(list(exc.errors()))
    message = ", ".join(f"{d['field']}: {d['message']}" for d in details)
    logger.warning(f"{request.method} {request.url.path}: invalid values: {message}")
    return JSONResponse(status_code=400, content={"error": message, "errors": details})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail).lower()},
        headers=getattr(exc, "headers", None),
    )


def create_app(service: RadioService, static_root: Optional[Path] = None) -> FastAPI:
    """
    Build the HTTP application around a started RadioService.

    Args:
        service: The radio service the routes call into
        static_root: Directory of the web UI, served under "/" if it exists
    """
    app = FastAPI(title="rsharkd", version=__version__)
    app.state.radio_service = service

    app.add_exception_handler(RadioSharkError, radioshark_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, model_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(router, prefix="/config")

    if static_root is not None:
        if static_root.is_dir():
            app.mount("/", StaticFiles(directory=static_root, html=True), name="static")
            logger.info(f"Serving web UI from {static_root}")
        else:
            logger.warning(f"Web UI directory {static_root} not found, not serving it")

    return app


def serve(settings: ServerSettings) -> None:
    """
    Start the radio service and run the HTTP server until interrupted.

    Raises:
        RadioSharkError: If the service fails to start
    """
    service = create_service(settings)
    try:
        app = create_app(service, settings.static_root)
        logger.info(f"Listening on {settings.host}:{settings.port}")
        uvicorn.run(app, host=settings.host, port=settings.port, log_level="warning")
    finally:
        service.close()
