import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cardvault.api import (
    auth_router,
    cards_router,
    health_router,
    notes_router,
    trades_router,
    wishlist_router,
)
from cardvault.config import DEFAULT_JWT_SECRET, settings
from cardvault.db.database import init_db
from cardvault.models.failure import (
    ApiResponse,
    AuthError,
    KnownError,
    ValidationFailedError,
)
from cardvault.models.records import field_errors

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("Using the development JWT secret; set CARDVAULT_JWT_SECRET")
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardvault"),
    lifespan=lifespan,
)

app.include_router(auth_router)
app.include_router(cards_router)
app.include_router(health_router)
app.include_router(notes_router)
app.include_router(trades_router)
app.include_router(wishlist_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _failure_response(error: KnownError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, AuthError) else None
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(mode="json"),
        headers=headers,
    )


def _body_error_messages(request: Request) -> dict[str, str]:
    # Field messages declared on the route's body schema, if it has one
    route: Any = request.scope.get("route")
    body_field = getattr(route, "body_field", None)
    schema = getattr(body_field, "type_", None)
    return getattr(schema, "error_messages", {}) if isinstance(schema, type) else {}


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return _failure_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = field_errors(exc.errors(), _body_error_messages(request))
    return _failure_response(ValidationFailedError(fields))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ApiResponse.unknown_failure(detail=type(exc).__name__).model_dump(mode="json"),
    )
