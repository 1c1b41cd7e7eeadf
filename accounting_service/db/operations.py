"""
Database CRUD operations.

Provides async functions for counting, listing, reading, inserting,
updating and deleting categories, accounts and journals. Lists are
ordered by primary key so that paging is stable.
"""

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.models.db import AccountDB, CategoryDB, JournalDB
from accounting_service.models.entities import Account, Category, Journal


async def begin_serializable(session: AsyncSession) -> None:
    """
    Start the session's transaction with serializable isolation.

    Must be called before the session issues any other statement. SQLite
    engines built by ``build_engine`` already begin every transaction with
    BEGIN IMMEDIATE, which serializes writers on their own.
    """
    if session.get_bind().dialect.name == "sqlite":
        await session.connection()
        return
    await session.connection(execution_options={"isolation_level": "SERIALIZABLE"})


def _starts_with(column: ColumnElement[str], prefix: str) -> ColumnElement[bool]:
    # LIKE is case-insensitive on SQLite and needs escaping; comparing the
    # leading substring is a binary match on every backend.
    return func.substr(column, 1, len(prefix)) == prefix


# --- Category Operations ---


async def count_categories(session: AsyncSession) -> int:
    """Total number of categories."""
    result = await session.execute(select(func.count()).select_from(CategoryDB))
    return int(result.scalar_one())


async def list_categories(session: AsyncSession, offset: int, limit: int) -> list[CategoryDB]:
    """One page of categories, ordered by key."""
    result = await session.execute(
        select(CategoryDB).order_by(CategoryDB.category_id).offset(offset).limit(limit)
    )
    return list(result.scalars().all())


async def count_categories_by_prefix(session: AsyncSession, prefix: str) -> int:
    """Number of categories whose key starts with ``prefix``."""
    result = await session.execute(
        select(func.count())
        .select_from(CategoryDB)
        .where(_starts_with(CategoryDB.category_id, prefix))
    )
    return int(result.scalar_one())


async def list_categories_by_prefix(
    session: AsyncSession, prefix: str, offset: int, limit: int
) -> list[CategoryDB]:
    """One page of the categories whose key starts with ``prefix``."""
    result = await session.execute(
        select(CategoryDB)
        .where(_starts_with(CategoryDB.category_id, prefix))
        .order_by(CategoryDB.category_id)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_category(session: AsyncSession, category_id: str) -> CategoryDB | None:
    """
    Get a category by key.

    Returns None if no category has this key.
    """
    result = await session.execute(
        select(CategoryDB).where(CategoryDB.category_id == category_id)
    )
    return result.scalar_one_or_none()


async def insert_category(session: AsyncSession, category: Category) -> CategoryDB:
    """
    Insert a new category.

    Raises IntegrityError if a category with the same key already exists.
    """
    db_category = CategoryDB(category_id=category.category_id, name=category.name)
    session.add(db_category)
    await session.flush()
    return db_category


async def update_category(session: AsyncSession, category: Category) -> CategoryDB | None:
    """
    Update a category's attributes. The key itself never changes here.

    Returns None if the category does not exist.
    """
    existing = await get_category(session, category.category_id)
    if existing is None:
        return None

    existing.name = category.name
    await session.flush()
    return existing


async def delete_category(session: AsyncSession, category_id: str) -> bool:
    """
    Delete a category.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(delete(CategoryDB).where(CategoryDB.category_id == category_id))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


def category_to_model(db_category: CategoryDB) -> Category:
    """Convert a database category to a domain model."""
    return Category(category_id=db_category.category_id, name=db_category.name)


# --- Account Operations ---


async def count_accounts(session: AsyncSession) -> int:
    """Total number of accounts."""
    result = await session.execute(select(func.count()).select_from(AccountDB))
    return int(result.scalar_one())


async def list_accounts(session: AsyncSession, offset: int, limit: int) -> list[AccountDB]:
    """One page of accounts, ordered by account id."""
    result = await session.execute(
        select(AccountDB).order_by(AccountDB.account_id).offset(offset).limit(limit)
    )
    return list(result.scalars().all())


async def count_accounts_by_category_prefix(session: AsyncSession, prefix: str) -> int:
    """Number of accounts in the category ``prefix`` or any of its descendants."""
    result = await session.execute(
        select(func.count())
        .select_from(AccountDB)
        .where(_starts_with(AccountDB.category_id, prefix))
    )
    return int(result.scalar_one())


async def list_accounts_by_category_prefix(
    session: AsyncSession, prefix: str, offset: int, limit: int
) -> list[AccountDB]:
    """One page of the accounts in the category ``prefix`` or its descendants."""
    result = await session.execute(
        select(AccountDB)
        .where(_starts_with(AccountDB.category_id, prefix))
        .order_by(AccountDB.account_id)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())


async def count_accounts_by_category(session: AsyncSession, category_id: str) -> int:
    """Number of accounts referencing exactly this category."""
    result = await session.execute(
        select(func.count()).select_from(AccountDB).where(AccountDB.category_id == category_id)
    )
    return int(result.scalar_one())


async def reassign_account_category(session: AsyncSession, old_id: str, new_id: str) -> int:
    """
    Point every account in category ``old_id`` at ``new_id``.

    Returns the number of accounts updated.
    """
    result = await session.execute(
        update(AccountDB)
        .where(AccountDB.category_id == old_id)
        .values(category_id=new_id)
        .execution_options(synchronize_session="fetch")
    )
    return int(result.rowcount)  # type: ignore[attr-defined]


async def get_account(session: AsyncSession, account_id: int) -> AccountDB | None:
    """
    Get an account by id.

    Returns None if no account has this id.
    """
    result = await session.execute(select(AccountDB).where(AccountDB.account_id == account_id))
    return result.scalar_one_or_none()


async def insert_account(session: AsyncSession, account: Account) -> AccountDB:
    """Insert a new account. The store assigns its id."""
    db_account = AccountDB(category_id=account.category_id, name=account.name)
    session.add(db_account)
    await session.flush()
    return db_account


async def update_account(session: AsyncSession, account: Account) -> AccountDB | None:
    """
    Update an account's category and name.

    Returns None if the account does not exist.
    """
    existing = await get_account(session, account.account_id)
    if existing is None:
        return None

    existing.category_id = account.category_id
    existing.name = account.name
    await session.flush()
    return existing


async def delete_account(session: AsyncSession, account_id: int) -> bool:
    """
    Delete an account.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(delete(AccountDB).where(AccountDB.account_id == account_id))
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


def account_to_model(db_account: AccountDB) -> Account:
    """Convert a database account to a domain model."""
    return Account(
        account_id=db_account.account_id,
        category_id=db_account.category_id,
        name=db_account.name,
    )


# --- Journal Operations ---


async def count_journals(session: AsyncSession) -> int:
    """Total number of journals."""
    result = await session.execute(select(func.count()).select_from(JournalDB))
    return int(result.scalar_one())


async def list_journals(session: AsyncSession, offset: int, limit: int) -> list[JournalDB]:
    """One page of journals, ordered by journal id."""
    result = await session.execute(
        select(JournalDB).order_by(JournalDB.journal_id).offset(offset).limit(limit)
    )
    return list(result.scalars().all())


async def get_journal(session: AsyncSession, journal_id: int) -> JournalDB | None:
    """Get a journal by id, or None."""
    result = await session.execute(select(JournalDB).where(JournalDB.journal_id == journal_id))
    return result.scalar_one_or_none()


async def insert_journal(session: AsyncSession, journal: Journal) -> JournalDB:
    """Insert a new journal. The store assigns its id."""
    db_journal = JournalDB(name=journal.name)
    session.add(db_journal)
    await session.flush()
    return db_journal


async def update_journal(session: AsyncSession, journal: Journal) -> JournalDB | None:
    """Rename a journal. Returns None if it does not exist."""
    existing = await get_journal(session, journal.journal_id)
    if existing is None:
        return None

    existing.name = journal.name
    await session.flush()
    return existing


async def delete_journal(session: AsyncSession, journal_id: int) -> bool:
    """Delete a journal. Returns True if deleted, False if not found."""
    result = await session.execute(delete(JournalDB).where(JournalDB.journal_id == journal_id))
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


def journal_to_model(db_journal: JournalDB) -> Journal:
    """Convert a database journal to a domain model."""
    return Journal(journal_id=db_journal.journal_id, name=db_journal.name)
