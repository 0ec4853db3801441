import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .errors import NotFoundError, ValidationError
from .logging_setup import setup_logging
from .routers import tasks
from .store import TaskStore, build_store

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type"]


def _validation_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: invalid request", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _validation_errors(exc)},
    )


async def store_validation_handler(request: Request, exc: ValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Task not found"})


def create_app(store: Optional[TaskStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around ``store`` (or one built from ``settings``)."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    if store is None:
        store = build_store(settings)
    logger.info("Using %s", type(store).__name__)

    app = FastAPI(
        title="Task Tracker API",
        description="Create, list, update and delete tasks",
        version="1.0.0",
    )
    app.state.task_store = store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_credentials=False,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, store_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)

    # Include routers
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


_app: Optional[FastAPI] = None


def __getattr__(name: str):
    # `tasktracker.main:app` is built on first access, not at import time.
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
