"""
Category API endpoints.

Categories are keyed by caller-supplied strings that form a prefix tree.
Besides CRUD, a category can be renamed, which cascades to every account
that references it.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.api.dependencies import get_page_window, get_translator
from accounting_service.db import (
    begin_serializable,
    category_to_model,
    count_categories,
    delete_category,
    insert_category,
    list_categories,
    update_category,
)
from accounting_service.db.database import get_session
from accounting_service.models.entities import PageWindow
from accounting_service.models.failure import (
    IdentifierConflictError,
    NotFoundError,
    ValidationFailedError,
)
from accounting_service.models.resources import (
    CategoryResource,
    NewCategoryId,
    ResourceCollection,
)
from accounting_service.services.category_migration import migrate_category_id
from accounting_service.services.category_namespace import get_by_key, get_by_prefix
from accounting_service.services.collection_assembler import assemble_collection
from accounting_service.services.identifier_codec import parse_key
from accounting_service.services.translation import CATEGORIES_PATH, ResourceTranslator
from accounting_service.services.validation import (
    validate_category_for_add,
    validate_category_for_delete,
    validate_category_for_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=ResourceCollection[CategoryResource],
    response_model_exclude_none=True,
)
async def get_categories(
    window: Annotated[PageWindow, Depends(get_page_window)],
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> ResourceCollection[CategoryResource]:
    """
    Get one page of all categories, ordered by key.
    """
    logger.debug("start=%d page_size=%d", window.start, window.size)

    count = await count_categories(session)
    db_categories = await list_categories(session, offset=window.offset, limit=window.size)
    items = [translator.category_to_resource(category_to_model(c)) for c in db_categories]

    return assemble_collection(
        window.start, window.size, translator.collection_url(CATEGORIES_PATH), count, items
    )


@router.get("/id/{category_id}", response_model=CategoryResource)
async def get_category_by_id(
    category_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> CategoryResource:
    """
    Get a single category.

    Returns 404 if the category does not exist.
    """
    category = await get_by_key(session, parse_key(category_id, str))
    return translator.category_to_resource(category)


@router.get(
    "/children/id/{category_id}",
    response_model=ResourceCollection[CategoryResource],
    response_model_exclude_none=True,
)
async def get_category_and_children(
    category_id: str,
    window: Annotated[PageWindow, Depends(get_page_window)],
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> ResourceCollection[CategoryResource]:
    """
    Get a category and all of its descendants.

    Membership is by key prefix: every category whose key starts with
    ``category_id`` is returned, including the category itself.
    """
    prefix = parse_key(category_id, str)
    page = await get_by_prefix(session, prefix, window)
    items = [translator.category_to_resource(c) for c in page.items]

    return assemble_collection(
        window.start, window.size, translator.category_children_url(prefix), page.count, items
    )


@router.post("", response_model=CategoryResource, status_code=status.HTTP_201_CREATED)
async def add_category(
    resource: CategoryResource,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> CategoryResource:
    """
    Add a category under a caller-chosen key.

    The key is the last segment of ``href``. Returns 400 if the key is
    invalid or already used, or the name is missing.
    """
    errors = await validate_category_for_add(session, resource)
    if errors:
        raise ValidationFailedError(errors)

    category = translator.category_from_resource(resource)
    try:
        db_category = await insert_category(session, category)
    except IntegrityError as e:
        await session.rollback()
        raise IdentifierConflictError("category", category.category_id) from e

    created = translator.category_to_resource(category_to_model(db_category))
    response.headers["Location"] = created.href or ""
    return created


@router.put("", response_model=CategoryResource)
async def replace_category(
    resource: CategoryResource,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> CategoryResource:
    """
    Update a category's name.

    The key cannot be changed here; use the rename endpoint.
    """
    await begin_serializable(session)
    errors = await validate_category_for_update(session, resource)
    if errors:
        raise ValidationFailedError(errors)

    category = translator.category_from_resource(resource)
    db_category = await update_category(session, category)
    if db_category is None:
        raise NotFoundError("category", category.category_id)

    return translator.category_to_resource(category_to_model(db_category))


@router.post("/id/{category_id}", response_model=CategoryResource)
async def change_category_id(
    category_id: str,
    body: NewCategoryId,
    session: Annotated[AsyncSession, Depends(get_session)],
    translator: Annotated[ResourceTranslator, Depends(get_translator)],
) -> CategoryResource:
    """
    Rename a category everywhere it is used.

    Every account in the category is moved to the new key in the same
    transaction. Returns 404 if the category does not exist and 409 if
    the new key is already taken; on failure nothing is changed.
    """
    old_id = parse_key(category_id, str)
    result = await migrate_category_id(session, old_id, body.category_id)
    return translator.category_to_resource(result.category)


@router.delete("/id/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_category(
    category_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """
    Delete a category.

    Returns 404 if it does not exist and 400 while any account still
    references it. Descendant categories are not affected. The reference
    check and the delete share one serializable transaction.
    """
    await begin_serializable(session)
    key = parse_key(category_id, str)
    await get_by_key(session, key)

    errors = await validate_category_for_delete(session, key)
    if errors:
        raise ValidationFailedError(errors)

    await delete_category(session, key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
