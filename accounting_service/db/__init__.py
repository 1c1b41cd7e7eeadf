from accounting_service.db.database import get_session, init_db
from accounting_service.db.operations import (
    account_to_model,
    begin_serializable,
    category_to_model,
    count_accounts,
    count_accounts_by_category,
    count_accounts_by_category_prefix,
    count_categories,
    count_categories_by_prefix,
    count_journals,
    delete_account,
    delete_category,
    delete_journal,
    get_account,
    get_category,
    get_journal,
    insert_account,
    insert_category,
    insert_journal,
    journal_to_model,
    list_accounts,
    list_accounts_by_category_prefix,
    list_categories,
    list_categories_by_prefix,
    list_journals,
    reassign_account_category,
    update_account,
    update_category,
    update_journal,
)

__all__ = [
    "account_to_model",
    "begin_serializable",
    "category_to_model",
    "count_accounts",
    "count_accounts_by_category",
    "count_accounts_by_category_prefix",
    "count_categories",
    "count_categories_by_prefix",
    "count_journals",
    "delete_account",
    "delete_category",
    "delete_journal",
    "get_account",
    "get_category",
    "get_journal",
    "get_session",
    "init_db",
    "insert_account",
    "insert_category",
    "insert_journal",
    "journal_to_model",
    "list_accounts",
    "list_accounts_by_category_prefix",
    "list_categories",
    "list_categories_by_prefix",
    "list_journals",
    "reassign_account_category",
    "update_account",
    "update_category",
    "update_journal",
]
