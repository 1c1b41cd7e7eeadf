"""
Wire representations of the accounting resources.

Identifiers travel as URLs (``href``); the final path segment of each is
the storage key. See services.identifier_codec.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class CategoryResource(BaseModel):
    """A category as seen on the wire."""

    href: str | None = Field(
        default=None,
        description="URL of the category; its last segment is the category id",
        examples=["https://accounting.example.com/categories/id/A001"],
    )
    name: str = ""


class AccountResource(BaseModel):
    """An account as seen on the wire."""

    href: str | None = Field(
        default=None,
        description="URL of the account; absent when adding a new account",
    )
    category: str | None = Field(
        default=None,
        description="URL of the category this account belongs to",
    )
    name: str | None = None


class JournalResource(BaseModel):
    """A journal as seen on the wire."""

    href: str | None = None
    name: str = ""


class NewCategoryId(BaseModel):
    """Request body for renaming a category."""

    category_id: str = Field(
        ...,
        description="The new category id",
        examples=["A002"],
    )


class ResourceCollection(BaseModel, Generic[T]):
    """
    One page of a navigable collection.

    Navigation links are present only when the collection is larger than
    the page that was returned.
    """

    href: str = Field(..., description="URL of this page")
    first: str | None = Field(default=None, description="URL of the first page")
    next: str | None = Field(default=None, description="URL of the next page")
    previous: str | None = Field(default=None, description="URL of the previous page")
    count: int = Field(default=0, description="Total number of items in the collection")
    page_size: int = Field(default=0, description="Effective page size")
    items: list[T] = Field(default_factory=list)
