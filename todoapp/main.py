from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todoapp.client import DataAccessClient
from todoapp.config import Settings, load_settings
from todoapp.errors import StorageError, StorageUnavailable, ValidationError
from todoapp.routers import todo_router, user_router, web_router, ws_router

logger = structlog.get_logger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError):
    logger.debug("Rejected request", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=400, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body", path=request.url.path, errors=exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def storage_error_handler(request: Request, exc: StorageError):
    if isinstance(exc, StorageUnavailable):
        return JSONResponse(
            status_code=503,
            content={"error": "Service Unavailable", "retryable": exc.retryable},
        )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "retryable": False},
    )


def _resolve_client(client: Optional[DataAccessClient], settings: Optional[Settings]) -> DataAccessClient:
    if client is not None:
        return client
    return DataAccessClient.from_settings(settings or load_settings())


def _build(title: str, client: DataAccessClient, owns_client: bool) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_client:
            await client.close()

    app = FastAPI(title=title, lifespan=lifespan)
    app.state.client = client
    return app


def create_api_app(
    client: Optional[DataAccessClient] = None, settings: Optional[Settings] = None
) -> FastAPI:
    """REST service: users on ``/``, todos on ``/todos``."""
    owns_client = client is None
    app = _build("Todo API", _resolve_client(client, settings), owns_client)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(user_router.router, tags=["Users"])
    app.include_router(todo_router.router, prefix="/todos", tags=["Todos"])
    return app


def create_ws_app(
    client: Optional[DataAccessClient] = None, settings: Optional[Settings] = None
) -> FastAPI:
    """WebSocket service: one channel on ``/``."""
    owns_client = client is None
    app = _build("Todo WebSocket", _resolve_client(client, settings), owns_client)
    app.include_router(ws_router.router)
    return app


def create_web_app(
    client: Optional[DataAccessClient] = None, settings: Optional[Settings] = None
) -> FastAPI:
    """Server-rendered page listing every user."""
    owns_client = client is None
    app = _build("Todo Web", _resolve_client(client, settings), owns_client)
    app.include_router(web_router.router)
    return app
