"""
Category identifier migration.

Renames a category key everywhere it is referenced:

    1. read the category under old_id
    2. insert a copy of it under new_id
    3. point every account in old_id at new_id
    4. delete the category under old_id

All four steps run in one serializable transaction that is committed at
the end or rolled back as a whole, so no caller ever observes both keys,
or an account referencing a deleted key.

Whether new_id is free is decided by the primary key constraint at step 2,
not by a separate lookup beforehand. Two renames racing to the same new_id
therefore yield exactly one success and one IdentifierConflictError.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.db.operations import (
    begin_serializable,
    delete_category,
    get_category,
    insert_category,
    reassign_account_category,
)
from accounting_service.models.entities import Category
from accounting_service.models.failure import (
    IdentifierConflictError,
    KnownError,
    MigrationStepError,
    NotFoundError,
)
from accounting_service.services.category_namespace import validate_category_key

logger = logging.getLogger(__name__)


class MigrationStep(str, Enum):
    """Steps of a category rename, in execution order."""

    READ_CATEGORY = "read_category"
    INSERT_CATEGORY = "insert_category"
    REASSIGN_ACCOUNTS = "reassign_accounts"
    DELETE_CATEGORY = "delete_category"
    COMMIT = "commit"


@dataclass
class MigrationResult:
    """Outcome of a successful rename."""

    old_id: str
    category: Category
    accounts_reassigned: int

    @property
    def new_id(self) -> str:
        return self.category.category_id


async def migrate_category_id(session: AsyncSession, old_id: str, new_id: str) -> MigrationResult:
    """
    Rename category ``old_id`` to ``new_id`` and cascade to its accounts.

    ``session`` must not have issued any statement yet: the migration owns
    its transaction and commits or rolls it back before returning.

    Raises:
        NotFoundError: If ``old_id`` does not exist
        ValidationFailedError: If ``new_id`` is not a valid category key
        IdentifierConflictError: If ``new_id`` is already in use
        MigrationStepError: If the store fails; names the failed step
    """
    logger.info("Renaming category '%s' to '%s'", old_id, new_id)

    await begin_serializable(session)

    step = MigrationStep.READ_CATEGORY
    try:
        source = await get_category(session, old_id)
        if source is None:
            raise NotFoundError("category", old_id)
        validate_category_key(new_id)
        if new_id == old_id:
            raise IdentifierConflictError("category", new_id)

        renamed = Category(category_id=new_id, name=source.name)

        step = MigrationStep.INSERT_CATEGORY
        await insert_category(session, renamed)

        step = MigrationStep.REASSIGN_ACCOUNTS
        reassigned = await reassign_account_category(session, old_id, new_id)
        logger.debug("Reassigned %d accounts from '%s' to '%s'", reassigned, old_id, new_id)

        step = MigrationStep.DELETE_CATEGORY
        await delete_category(session, old_id)

        step = MigrationStep.COMMIT
        await session.commit()
    except KnownError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        if step is MigrationStep.INSERT_CATEGORY and await _target_taken(session, e, new_id):
            logger.warning("Rename of '%s' rejected: '%s' already exists", old_id, new_id)
            raise IdentifierConflictError("category", new_id) from e

        logger.error(
            "Rename of '%s' to '%s' failed at %s: %s", old_id, new_id, step.value, e
        )
        raise MigrationStepError(step.value, old_id, new_id, detail=type(e).__name__) from e

    logger.info(
        "Renamed category '%s' to '%s' (%d accounts reassigned)", old_id, new_id, reassigned
    )
    return MigrationResult(old_id=old_id, category=renamed, accounts_reassigned=reassigned)


async def _target_taken(session: AsyncSession, error: SQLAlchemyError, new_id: str) -> bool:
    """
    Decide whether an insert failure means ``new_id`` is in use.

    A unique violation says so directly. Serializable backends may report
    a concurrent insert of the same key as a serialization failure
    instead, so for any other error look the key up again.
    """
    if isinstance(error, IntegrityError):
        return True
    return await get_category(session, new_id) is not None
