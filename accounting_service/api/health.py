"""
Health check endpoints.

Liveness and readiness probes. Readiness proves the accounting tables are
reachable, not just the database connection.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.db import count_accounts, count_categories, count_journals
from accounting_service.db.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class TableCounts(BaseModel):
    """Row counts of the accounting tables."""

    categories: int
    accounts: int
    journals: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    tables: TableCounts | None = None


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Counts the rows of each accounting table. Returns 503 if any of them
    cannot be read.
    """
    try:
        tables = TableCounts(
            categories=await count_categories(session),
            accounts=await count_accounts(session),
            journals=await count_journals(session),
        )
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    return HealthResponse(status="ready", database="connected", tables=tables)
