"""
Request-scoped dependencies shared by the resource routers.
"""

from typing import Annotated

from fastapi import HTTPException, Query, Request, status

from accounting_service.config import settings
from accounting_service.models.entities import PageWindow
from accounting_service.services.translation import ResourceTranslator


def get_translator(request: Request) -> ResourceTranslator:
    """Translator bound to the public base URL, or the request's own."""
    return ResourceTranslator(settings.public_base_url or str(request.base_url))


def get_page_window(
    start: Annotated[int, Query(description="The first record returned in this page")] = 1,
    page_size: Annotated[
        int | None,
        Query(description="The maximum number of records returned in this page"),
    ] = None,
) -> PageWindow:
    """
    Validate the paging query parameters.

    ``start`` is 1-based. ``page_size`` defaults to the configured default
    and may not exceed the configured maximum.
    """
    size = settings.default_page_size if page_size is None else page_size

    if start < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start must be 1 or greater",
        )
    if size < 1 or size > settings.max_page_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"page_size must be between 1 and {settings.max_page_size}",
        )

    return PageWindow(start=start, size=size)
