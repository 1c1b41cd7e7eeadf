import pytest

from accounting_service.models.entities import Account, Category


@pytest.fixture
def sample_categories() -> list[Category]:
    """A small category tree: A, A1, A10, A2 and a sibling root B."""
    return [
        Category(category_id="A", name="Assets"),
        Category(category_id="A1", name="Current Assets"),
        Category(category_id="A10", name="Cash"),
        Category(category_id="A2", name="Fixed Assets"),
        Category(category_id="B", name="Liabilities"),
    ]


@pytest.fixture
def sample_accounts() -> list[Account]:
    """Accounts spread over the sample category tree."""
    return [
        Account(account_id=0, category_id="A1", name="Petty Cash"),
        Account(account_id=0, category_id="A10", name="Checking"),
        Account(account_id=0, category_id="A10", name="Savings"),
        Account(account_id=0, category_id="A2", name="Buildings"),
        Account(account_id=0, category_id="B", name="Loans"),
    ]
