"""
Resource validation.

Each check inspects an incoming resource (and, where needed, the store)
and returns a map of field name -> messages. An empty map means the
resource may be written. Routers raise ValidationFailedError otherwise.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from accounting_service.config import MAX_NAME_LENGTH
from accounting_service.db.operations import (
    count_accounts_by_category,
    get_account,
    get_category,
    get_journal,
)
from accounting_service.models.failure import InvalidKeyError
from accounting_service.models.resources import (
    AccountResource,
    CategoryResource,
    JournalResource,
)
from accounting_service.services.category_namespace import category_key_errors
from accounting_service.services.identifier_codec import decode

FieldErrors = dict[str, list[str]]


def _add_error(errors: FieldErrors, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _check_name(errors: FieldErrors, name: str | None) -> None:
    if name is None or not name.strip():
        _add_error(errors, "name", "Name cannot be null or blank.")
    elif len(name) > MAX_NAME_LENGTH:
        _add_error(errors, "name", f"Name cannot exceed {MAX_NAME_LENGTH} characters.")


async def _check_account_category(
    session: AsyncSession, errors: FieldErrors, category_href: str | None
) -> None:
    if category_href is None:
        _add_error(errors, "category", "Category cannot be null.")
        return

    try:
        category_id = decode(category_href, str, nullable=True)
    except InvalidKeyError:
        _add_error(errors, "category", "Category is not a valid category reference.")
        return

    key_errors = category_key_errors(category_id)
    for message in key_errors:
        _add_error(errors, "category", message)
    if key_errors or category_id is None:
        return

    if await get_category(session, category_id) is None:
        _add_error(errors, "category", "Category does not exist.")


# --- Categories ---


async def validate_category_for_add(
    session: AsyncSession, resource: CategoryResource
) -> FieldErrors:
    """A new category needs a valid, unused key and a name."""
    errors: FieldErrors = {}

    if resource.href is None:
        _add_error(errors, "href", "Missing the category id.")
    else:
        try:
            category_id = decode(resource.href, str)
        except InvalidKeyError:
            _add_error(errors, "href", "The category id is not valid.")
        else:
            key_errors = category_key_errors(category_id)
            for message in key_errors:
                _add_error(errors, "href", message)
            if not key_errors and await get_category(session, category_id) is not None:
                _add_error(errors, "href", "A category with this category id already exists.")

    _check_name(errors, resource.name)
    return errors


async def validate_category_for_update(
    session: AsyncSession, resource: CategoryResource
) -> FieldErrors:
    """An updated category must already exist and keep a valid name."""
    errors: FieldErrors = {}

    if resource.href is None:
        _add_error(errors, "href", "Missing the category id.")
    else:
        try:
            category_id = decode(resource.href, str)
        except InvalidKeyError:
            _add_error(errors, "href", "The category id is not valid.")
        else:
            if await get_category(session, category_id) is None:
                _add_error(errors, "href", "A category with this category id does not exist.")

    _check_name(errors, resource.name)
    return errors


async def validate_category_for_delete(session: AsyncSession, category_id: str) -> FieldErrors:
    """A category can only be deleted once no account references it."""
    errors: FieldErrors = {}

    if await count_accounts_by_category(session, category_id) > 0:
        _add_error(errors, "href", "This category is used by one or more accounts.")

    return errors


# --- Accounts ---


async def validate_account_for_add(session: AsyncSession, resource: AccountResource) -> FieldErrors:
    """A new account needs an existing category and a name."""
    errors: FieldErrors = {}
    await _check_account_category(session, errors, resource.category)
    _check_name(errors, resource.name)
    return errors


async def validate_account_for_update(
    session: AsyncSession, resource: AccountResource
) -> FieldErrors:
    """An updated account must exist, and its category must exist."""
    errors: FieldErrors = {}

    if resource.href is None:
        _add_error(errors, "href", "No account id was provided.")
    else:
        try:
            account_id = decode(resource.href, int)
        except InvalidKeyError:
            _add_error(errors, "href", "The account id is not valid.")
        else:
            if await get_account(session, account_id) is None:
                _add_error(errors, "href", "No account with that account id exists.")

    await _check_account_category(session, errors, resource.category)
    _check_name(errors, resource.name)
    return errors


# --- Journals ---


def validate_journal_for_add(resource: JournalResource) -> FieldErrors:
    """A new journal only needs a name."""
    errors: FieldErrors = {}
    _check_name(errors, resource.name)
    return errors


async def validate_journal_for_update(
    session: AsyncSession, resource: JournalResource
) -> FieldErrors:
    """An updated journal must exist and keep a valid name."""
    errors: FieldErrors = {}

    if resource.href is None:
        _add_error(errors, "href", "Missing the journal id.")
    else:
        try:
            journal_id = decode(resource.href, int)
        except InvalidKeyError:
            _add_error(errors, "href", "The journal id is not valid.")
        else:
            if await get_journal(session, journal_id) is None:
                _add_error(errors, "href", "A journal with this journal id does not exist.")

    _check_name(errors, resource.name)
    return errors
