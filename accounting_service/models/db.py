"""
SQLAlchemy ORM models for persistent storage.

Models mirror the entity dataclasses but add database persistence.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from accounting_service.config import MAX_CATEGORY_KEY_LENGTH, MAX_NAME_LENGTH


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CategoryDB(Base):
    """
    A category in the hierarchical category namespace.

    The key is supplied by the caller. Hierarchy is implicit: a category
    descends from every category whose key is a prefix of its own. The
    primary key constraint is what serializes concurrent renames onto
    the same key.
    """

    __tablename__ = "categories"

    category_id: Mapped[str] = mapped_column(String(MAX_CATEGORY_KEY_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH))

    def __repr__(self) -> str:
        return f"<CategoryDB(category_id={self.category_id}, name={self.name})>"


class AccountDB(Base):
    """
    An account in the chart of accounts.

    The category reference is checked at write time but deliberately not a
    foreign key; renames keep it consistent (see category_migration).
    """

    __tablename__ = "chart_of_accounts"

    account_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[str] = mapped_column(String(MAX_CATEGORY_KEY_LENGTH), index=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH))

    def __repr__(self) -> str:
        return f"<AccountDB(account_id={self.account_id}, category_id={self.category_id})>"


class JournalDB(Base):
    """A journal that entries are posted to."""

    __tablename__ = "journals"

    journal_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH))

    def __repr__(self) -> str:
        return f"<JournalDB(journal_id={self.journal_id}, name={self.name})>"
