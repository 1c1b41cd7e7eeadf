import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from accounting_service.api import (
    accounts_router,
    categories_router,
    health_router,
    journals_router,
)
from accounting_service.config import settings
from accounting_service.db.database import init_db
from accounting_service.models.failure import KnownError, RepositoryFailureError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("accounting-service"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a known failure as a FailureDetail body with its own status."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json", exclude_none=True),
    )


@app.exception_handler(SQLAlchemyError)
async def repository_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Any store failure that reaches the boundary is a repository failure."""
    logger.error("Repository failure on %s %s: %s", request.method, request.url.path, exc)
    failure = RepositoryFailureError("The store failed to complete the request.", type(exc).__name__)
    return await known_error_handler(request, failure)


app.include_router(categories_router)
app.include_router(accounts_router)
app.include_router(journals_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
