import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pokemaster.api import (
    cards_router,
    catalog_router,
    health_router,
    prices_router,
    sets_router,
)
from pokemaster.config import settings
from pokemaster.db.database import acquire_store, close_store, describe_error
from pokemaster.models.errors import CatalogError, ConfigurationError, StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await acquire_store()
    yield
    await close_store()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pokemaster"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(catalog_router)
app.include_router(health_router)
app.include_router(prices_router)
app.include_router(sets_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Desktop front end runs on its own origin
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    message = describe_error(exc)
    logger.warning("Constraint violation: %s", message)
    return _error_response(status.HTTP_409_CONFLICT, message)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    message = describe_error(exc)
    logger.error("Database error: %s", message)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


@app.exception_handler(StoreError)
async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store unavailable: %s", exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    _request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error("Configuration error: %s", exc)
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))


@app.exception_handler(CatalogError)
async def catalog_error_handler(_request: Request, exc: CatalogError) -> JSONResponse:
    logger.warning("Catalog request failed: %s", exc)
    return _error_response(status.HTTP_502_BAD_GATEWAY, str(exc))
