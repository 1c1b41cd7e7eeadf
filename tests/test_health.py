"""Smoke test for application startup."""


def test_app_imports() -> None:
    """Verify the app can be imported without errors."""
    from accounting_service.main import app

    assert app.title == "AccountingService"


def test_routes_registered() -> None:
    """Every resource family is routed."""
    from accounting_service.main import app

    paths = {route.path for route in app.routes}

    assert "/categories/children/id/{category_id}" in paths
    assert "/chart_of_accounts/id/{account_id}" in paths
    assert "/journals" in paths
    assert "/ready" in paths
