"""
Collection assembler.

Wraps one page of resources in a navigable ResourceCollection envelope.
Navigation links reflect whether the caller is really at a boundary:
``next`` is left out on the final page so a client is never sent to a
page with no rows, and ``previous`` never points before the first record.
"""

from typing import TypeVar

from accounting_service.models.resources import ResourceCollection

T = TypeVar("T")


def page_url(domain_url: str, start: int, page_size: int) -> str:
    """URL of the page starting at ``start``, keeping any filter already in ``domain_url``."""
    separator = "&" if "?" in domain_url else "?"
    return f"{domain_url}{separator}start={start}&page_size={page_size}"


def assemble_collection(
    start: int,
    page_size: int,
    domain_url: str,
    total_count: int,
    items: list[T],
) -> ResourceCollection[T]:
    """
    Build the envelope for one page of a collection.

    Inputs are not validated; callers reject ``start < 1`` and
    ``page_size < 1`` before getting here.

    Args:
        start: 1-based position of the first item in this page
        page_size: Requested page size
        domain_url: Absolute URL of the collection, optionally with a filter query
        total_count: Number of items in the whole collection
        items: The items of this page, already translated

    Returns:
        The envelope. When the page holds the whole collection the
        effective page size is ``total_count`` and only ``href`` is set.
    """
    collection: ResourceCollection[T] = ResourceCollection(
        href=page_url(domain_url, start, page_size),
        count=total_count,
        items=items,
    )

    if total_count <= len(items):
        collection.page_size = total_count
        return collection

    next_start = start + page_size
    previous_start = max(start - page_size, 1)

    if next_start < total_count:
        collection.next = page_url(domain_url, next_start, page_size)

    collection.first = page_url(domain_url, 1, page_size)

    if start > 1:
        collection.previous = page_url(domain_url, previous_start, page_size)

    collection.page_size = page_size
    return collection
