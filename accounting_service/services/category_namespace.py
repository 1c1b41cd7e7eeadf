"""
Category namespace.

Categories form an implicit prefix tree: category B descends from
category A iff B's key starts with A's key. No parent pointer is stored,
so a subtree scan is a single prefix query. Prefix comparison is binary
and case-sensitive ("A1" is not an ancestor of "a10").
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.config import MAX_CATEGORY_KEY_LENGTH
from accounting_service.db.operations import (
    category_to_model,
    count_categories_by_prefix,
    get_category,
    list_categories_by_prefix,
)
from accounting_service.models.entities import Category, EntityCollection, PageWindow
from accounting_service.models.failure import NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)


def category_key_errors(key: str | None) -> list[str]:
    """Messages describing why ``key`` is not a usable category key."""
    if key is None or not key.strip():
        return ["Category cannot be blank or null."]
    if len(key) > MAX_CATEGORY_KEY_LENGTH:
        return [f"Category cannot exceed {MAX_CATEGORY_KEY_LENGTH} characters."]
    return []


def validate_category_key(key: str | None, field_name: str = "category_id") -> str:
    """
    Return ``key`` if it is a valid category key.

    Raises:
        ValidationFailedError: If the key is blank or too long
    """
    errors = category_key_errors(key)
    if errors or key is None:
        raise ValidationFailedError({field_name: errors})
    return key


def is_descendant(key: str, ancestor: str) -> bool:
    """True if ``key`` is ``ancestor`` or lies beneath it."""
    return key.startswith(ancestor)


async def get_by_key(session: AsyncSession, key: str) -> Category:
    """
    Get a category by key.

    Raises:
        NotFoundError: If no category has this key
    """
    db_category = await get_category(session, key)
    if db_category is None:
        raise NotFoundError("category", key)
    return category_to_model(db_category)


async def get_by_prefix(
    session: AsyncSession, prefix: str, window: PageWindow
) -> EntityCollection[Category]:
    """
    Get one page of the subtree rooted at ``prefix``.

    The category ``prefix`` itself is included when it exists. A blank
    prefix would match every category, so it is rejected.

    Raises:
        ValidationFailedError: If ``prefix`` is blank
    """
    if not prefix or not prefix.strip():
        raise ValidationFailedError({"id": ["A category prefix cannot be blank."]})

    logger.debug("Listing categories under '%s' (start=%d)", prefix, window.start)

    count = await count_categories_by_prefix(session, prefix)
    db_categories = await list_categories_by_prefix(
        session, prefix, offset=window.offset, limit=window.size
    )
    return EntityCollection(
        count=count,
        items=[category_to_model(c) for c in db_categories],
    )
