"""
Chart of accounts API endpoints.

Every account belongs to exactly one category. Listing can be narrowed to
a category subtree with ``?category=<prefix>``.
"""

import logging
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.api.dependencies import get_page_window, get_translator
from accounting_service.db import (
    account_to_model,
    begin_serializable,
    count_accounts,
    count_accounts_by_category_prefix,
    delete_account,
    get_account,
    insert_account,
    list_accounts,
    list_accounts_by_category_prefix,
    update_account,
)
from accounting_service.db.database import get_session
from accounting_service.models.entities import PageWindow
from accounting_service.models.failure import NotFoundError, ValidationFailedError
from accounting_service.models.resources import AccountResource, ResourceCollection
from accounting_service.services.collection_assembler import assemble_collection
from accounting_service.services.identifier_codec import parse_key
from accounting_service.services.translation import ACCOUNTS_PATH, ResourceTranslator
from accounting_service.services.validation import (
    validate_account_for_add,
    validate_account_for_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chart_of_accounts", tags=["accounts"])


@router.get(
    "",
    response_model=ResourceCollection[AccountResource],
    response_model_exclude_none=True,
)
async def get_accounts(
    window: Annotated[PageWindow, Depends(get_page_window)],
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
    category: Annotated[
        str | None,
        Query(description="Only accounts whose category key starts with this prefix"),
    ] = None,
) -> ResourceCollection[AccountResource]:
    """
    Get one page of the chart of accounts, ordered by account id.

    With ``category``, only accounts in that category or one of its
    descendants are returned, and the navigation links keep the filter.
    """
    logger.debug("start=%d page_size=%d category=%s", window.start, window.size, category)

    domain_url = translator.collection_url(ACCOUNTS_PATH)
    if category is not None and category.strip():
        count = await count_accounts_by_category_prefix(session, category)
        db_accounts = await list_accounts_by_category_prefix(
            session, category, offset=window.offset, limit=window.size
        )
        domain_url = f"{domain_url}?category={quote(category, safe='')}"
    else:
        count = await count_accounts(session)
        db_accounts = await list_accounts(session, offset=window.offset, limit=window.size)

    items = [translator.account_to_resource(account_to_model(a)) for a in db_accounts]
    return assemble_collection(window.start, window.size, domain_url, count, items)


@router.get("/id/{account_id}", response_model=AccountResource)
async def get_account_by_id(
    account_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> AccountResource:
    """Get a single account. Returns 404 if it does not exist."""
    key = parse_key(account_id, int)
    db_account = await get_account(session, key)
    if db_account is None:
        raise NotFoundError("account", key)

    return translator.account_to_resource(account_to_model(db_account))


@router.post("", response_model=AccountResource, status_code=status.HTTP_201_CREATED)
async def add_account(
    resource: AccountResource,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> AccountResource:
    """
    Add an account. The store assigns its id; any ``href`` sent is ignored.

    Returns 400 unless ``category`` refers to an existing category and
    ``name`` is present. The category check and the insert run in one
    serializable transaction.
    """
    await begin_serializable(session)
    errors = await validate_account_for_add(session, resource)
    if errors:
        raise ValidationFailedError(errors)

    account = translator.account_from_resource(resource.model_copy(update={"href": None}))
    db_account = await insert_account(session, account)

    created = translator.account_to_resource(account_to_model(db_account))
    response.headers["Location"] = created.href or ""
    return created


@router.put("", response_model=AccountResource)
async def replace_account(
    resource: AccountResource,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> AccountResource:
    """
    Move an account to another category or rename it.

    The category check and the update run in one serializable transaction.
    """
    await begin_serializable(session)
    errors = await validate_account_for_update(session, resource)
    if errors:
        raise ValidationFailedError(errors)

    account = translator.account_from_resource(resource)
    db_account = await update_account(session, account)
    if db_account is None:
        raise NotFoundError("account", account.account_id)

    return translator.account_to_resource(account_to_model(db_account))


@router.delete("/id/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_account(
    account_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete an account. Returns 404 if it does not exist."""
    key = parse_key(account_id, int)
    if not await delete_account(session, key):
        raise NotFoundError("account", key)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
