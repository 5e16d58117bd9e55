import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.catalog import router as catalog_router
from .api.chat import router as chat_router
from .config import settings
from .engine.weights import registry
from .errors import (
    AmbiguousInputError,
    ExternalCollaboratorFailure,
    SessionNotFound,
    ValidationError,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.service_name, version="0.1.0")

app.include_router(chat_router)
app.include_router(catalog_router)


@app.exception_handler(SessionNotFound)
async def session_not_found(request: Request, exc: SessionNotFound):
    return JSONResponse(status_code=404, content={"detail": "Session not found"})


@app.exception_handler(ValidationError)
async def validation_failed(request: Request, exc: ValidationError):
    content = {"detail": exc.prompt}
    if isinstance(exc, AmbiguousInputError):
        content["options"] = exc.options
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(ExternalCollaboratorFailure)
async def collaborator_failed(request: Request, exc: ExternalCollaboratorFailure):
    return JSONResponse(
        status_code=502,
        content={
            "detail": f"The {exc.collaborator} service is unavailable, please try again.",
            "collaborator": exc.collaborator,
        },
    )


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": settings.service_name,
        "model": settings.openai_model,
        "weights_version": registry.current().version,
        "submission": "http" if settings.submission_url else "archive",
    }
