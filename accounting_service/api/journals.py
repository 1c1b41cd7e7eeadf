"""
Journal API endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.api.dependencies import get_page_window, get_translator
from accounting_service.db import (
    count_journals,
    delete_journal,
    get_journal,
    insert_journal,
    journal_to_model,
    list_journals,
    update_journal,
)
from accounting_service.db.database import get_session
from accounting_service.models.entities import PageWindow
from accounting_service.models.failure import NotFoundError, ValidationFailedError
from accounting_service.models.resources import JournalResource, ResourceCollection
from accounting_service.services.collection_assembler import assemble_collection
from accounting_service.services.identifier_codec import parse_key
from accounting_service.services.translation import JOURNALS_PATH, ResourceTranslator
from accounting_service.services.validation import (
    validate_journal_for_add,
    validate_journal_for_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journals", tags=["journals"])


@router.get(
    "",
    response_model=ResourceCollection[JournalResource],
    response_model_exclude_none=True,
)
async def get_journals(
    window: Annotated[PageWindow, Depends(get_page_window)],
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> ResourceCollection[JournalResource]:
    """Get one page of journals, ordered by journal id."""
    logger.debug("start=%d page_size=%d", window.start, window.size)

    count = await count_journals(session)
    db_journals = await list_journals(session, offset=window.offset, limit=window.size)
    items = [translator.journal_to_resource(journal_to_model(j)) for j in db_journals]

    return assemble_collection(
        window.start, window.size, translator.collection_url(JOURNALS_PATH), count, items
    )


@router.get("/id/{journal_id}", response_model=JournalResource)
async def get_journal_by_id(
    journal_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> JournalResource:
    key = parse_key(journal_id, int)
    db_journal = await get_journal(session, key)
    if db_journal is None:
        raise NotFoundError("journal", key)

    return translator.journal_to_resource(journal_to_model(db_journal))


@router.post("", response_model=JournalResource, status_code=status.HTTP_201_CREATED)
async def add_journal(
    resource: JournalResource,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> JournalResource:
    """Add a journal. The store assigns its id."""
    errors = validate_journal_for_add(resource)
    if errors:
        raise ValidationFailedError(errors)

    journal = translator.journal_from_resource(resource.model_copy(update={"href": None}))
    db_journal = await insert_journal(session, journal)

    created = translator.journal_to_resource(journal_to_model(db_journal))
    response.headers["Location"] = created.href or ""
    return created


@router.put("", response_model=JournalResource)
async def replace_journal(
    resource: JournalResource,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> JournalResource:
    errors = await validate_journal_for_update(session, resource)
    if errors:
        raise ValidationFailedError(errors)

    journal = translator.journal_from_resource(resource)
    db_journal = await update_journal(session, journal)
    if db_journal is None:
        raise NotFoundError("journal", journal.journal_id)

    return translator.journal_to_resource(journal_to_model(db_journal))


@router.delete("/id/{journal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_journal(
    journal_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete a journal. Returns 404 if it does not exist."""
    key = parse_key(journal_id, int)
    if not await delete_journal(session, key):
        raise NotFoundError("journal", key)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
