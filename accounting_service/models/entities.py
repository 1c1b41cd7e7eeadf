from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Category:
    """
    A node in the category namespace.

    Attributes:
        category_id: Caller-supplied key; its prefixes are its ancestors
        name: Display name
    """

    category_id: str
    name: str


@dataclass
class Account:
    """
    An entry in the chart of accounts.

    Attributes:
        account_id: Store-assigned key (0 until inserted)
        category_id: Key of the category this account belongs to
        name: Display name
    """

    account_id: int
    category_id: str
    name: str


@dataclass
class Journal:
    """A journal. ``journal_id`` is 0 until inserted."""

    journal_id: int
    name: str


@dataclass
class PageWindow:
    """
    A 1-based window into an ordered collection.

    Callers validate ``start >= 1`` and ``size >= 1`` before building one.
    """

    start: int
    size: int

    @property
    def offset(self) -> int:
        """Zero-based row offset for the store."""
        return self.start - 1


@dataclass
class EntityCollection(Generic[T]):
    """One page of entities plus the total size of the collection."""

    count: int = 0
    items: list[T] = field(default_factory=list)
