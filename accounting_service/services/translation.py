"""
Translation between stored entities and wire resources.

A ResourceTranslator is bound to one base URL (normally the scheme and
host of the current request) and rewrites keys into absolute hrefs on the
way out, and hrefs back into keys on the way in.
"""

from accounting_service.models.entities import Account, Category, Journal
from accounting_service.models.resources import (
    AccountResource,
    CategoryResource,
    JournalResource,
)
from accounting_service.services.identifier_codec import decode, encode

ACCOUNTS_PATH = "chart_of_accounts"
CATEGORIES_PATH = "categories"
CATEGORY_CHILDREN_PATH = "categories/children/id"
JOURNALS_PATH = "journals"

ACCOUNT_ID_PATH = f"{ACCOUNTS_PATH}/id"
CATEGORY_ID_PATH = f"{CATEGORIES_PATH}/id"
JOURNAL_ID_PATH = f"{JOURNALS_PATH}/id"


class ResourceTranslator:
    """Maps entities to resources and back for one base URL."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def collection_url(self, domain_path: str) -> str:
        """Absolute URL of a collection, without query string."""
        return f"{self.base_url}/{domain_path.strip('/')}"

    def category_children_url(self, category_id: str) -> str:
        """Absolute URL of the subtree listing rooted at ``category_id``."""
        return encode(self.base_url, CATEGORY_CHILDREN_PATH, category_id)

    # --- Categories ---

    def category_href(self, category_id: str) -> str:
        return encode(self.base_url, CATEGORY_ID_PATH, category_id)

    def category_to_resource(self, category: Category) -> CategoryResource:
        return CategoryResource(href=self.category_href(category.category_id), name=category.name)

    def category_from_resource(self, resource: CategoryResource) -> Category:
        """
        Convert a category resource to an entity.

        Raises:
            InvalidKeyError: If the href has no usable key
        """
        return Category(category_id=decode(resource.href, str), name=resource.name)

    # --- Accounts ---

    def account_href(self, account_id: int) -> str:
        return encode(self.base_url, ACCOUNT_ID_PATH, account_id)

    def account_to_resource(self, account: Account) -> AccountResource:
        return AccountResource(
            href=self.account_href(account.account_id),
            category=self.category_href(account.category_id),
            name=account.name,
        )

    def account_from_resource(self, resource: AccountResource) -> Account:
        """
        Convert an account resource to an entity.

        A missing href (a new account) becomes id 0. A missing category
        becomes an empty key, which validation rejects.
        """
        account_id = decode(resource.href, int, nullable=True)
        category_id = decode(resource.category, str, nullable=True)
        return Account(
            account_id=account_id or 0,
            category_id=category_id or "",
            name=resource.name or "",
        )

    # --- Journals ---

    def journal_href(self, journal_id: int) -> str:
        return encode(self.base_url, JOURNAL_ID_PATH, journal_id)

    def journal_to_resource(self, journal: Journal) -> JournalResource:
        return JournalResource(href=self.journal_href(journal.journal_id), name=journal.name)

    def journal_from_resource(self, resource: JournalResource) -> Journal:
        journal_id = decode(resource.href, int, nullable=True)
        return Journal(journal_id=journal_id or 0, name=resource.name)
