"""Tests for chart of accounts API endpoints."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from accounting_service.db import begin_serializable, insert_account, insert_category
from accounting_service.db.database import get_session
from accounting_service.main import app
from accounting_service.models.db import Base

BASE = "http://test"


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def account_ids(async_engine, sample_categories, sample_accounts) -> dict[str, int]:
    """Seed the sample tree and return account ids by name."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        for category in sample_categories:
            await insert_category(session, category)
        ids = {}
        for account in sample_accounts:
            db_account = await insert_account(session, account)
            ids[account.name] = db_account.account_id
        await session.commit()
    return ids


class TestListAccounts:
    async def test_list_all(self, client: AsyncClient, account_ids) -> None:
        """Lists every account with category hrefs."""
        response = await client.get("/chart_of_accounts")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 5
        first = data["items"][0]
        assert first == {
            "href": f"{BASE}/chart_of_accounts/id/{account_ids['Petty Cash']}",
            "category": f"{BASE}/categories/id/A1",
            "name": "Petty Cash",
        }

    async def test_filter_by_category_subtree(self, client: AsyncClient, account_ids) -> None:
        """The category filter includes descendant categories."""
        response = await client.get("/chart_of_accounts", params={"category": "A1"})

        data = response.json()
        assert data["count"] == 3
        assert [item["name"] for item in data["items"]] == ["Petty Cash", "Checking", "Savings"]

    async def test_filter_kept_in_links(self, client: AsyncClient, account_ids) -> None:
        """Paging through a filtered list keeps the filter."""
        response = await client.get(
            "/chart_of_accounts", params={"category": "A", "page_size": 2}
        )

        data = response.json()
        assert data["count"] == 4
        assert data["next"] == f"{BASE}/chart_of_accounts?category=A&start=3&page_size=2"

    async def test_blank_filter_lists_everything(self, client: AsyncClient, account_ids) -> None:
        """A blank category filter is no filter."""
        response = await client.get("/chart_of_accounts", params={"category": " "})

        assert response.json()["count"] == 5


class TestGetAccount:
    async def test_get(self, client: AsyncClient, account_ids) -> None:
        """Returns a single account."""
        account_id = account_ids["Loans"]

        response = await client.get(f"/chart_of_accounts/id/{account_id}")

        assert response.status_code == 200
        assert response.json()["category"] == f"{BASE}/categories/id/B"

    async def test_get_missing(self, client: AsyncClient, account_ids) -> None:
        """Unknown ids are 404."""
        response = await client.get("/chart_of_accounts/id/9999")

        assert response.status_code == 404

    async def test_non_numeric_id(self, client: AsyncClient) -> None:
        """A non-numeric id is an invalid key, reported as absent."""
        response = await client.get("/chart_of_accounts/id/abc")

        assert response.status_code == 404
        assert response.json()["kind"] == "invalid_key"

    @pytest.mark.parametrize("account_id", ["99999999999999999999", "2147483648", "١"])
    async def test_id_no_account_can_have(self, client: AsyncClient, account_id: str) -> None:
        """Ids outside the stored range, or not ASCII digits, are absent."""
        response = await client.get(f"/chart_of_accounts/id/{account_id}")

        assert response.status_code == 404
        assert response.json()["kind"] == "invalid_key"


class TestAddAccount:
    async def test_add(self, client: AsyncClient, account_ids) -> None:
        """The store assigns the new account's id."""
        body = {"category": f"{BASE}/categories/id/A2", "name": "Land"}

        response = await client.post("/chart_of_accounts", json=body)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Land"
        assert data["href"].startswith(f"{BASE}/chart_of_accounts/id/")
        assert response.headers["location"] == data["href"]
        assert int(data["href"].rsplit("/", 1)[1]) not in account_ids.values()

    async def test_add_ignores_client_href(self, client: AsyncClient, account_ids) -> None:
        """A client-supplied href does not choose the id."""
        body = {
            "href": f"{BASE}/chart_of_accounts/id/{account_ids['Loans']}",
            "category": f"{BASE}/categories/id/B",
            "name": "Mortgage",
        }

        response = await client.post("/chart_of_accounts", json=body)

        assert response.status_code == 201
        assert response.json()["href"] != body["href"]

    async def test_add_unknown_category(self, client: AsyncClient, account_ids) -> None:
        """The category must exist."""
        body = {"category": f"{BASE}/categories/id/Q", "name": "Orphan"}

        response = await client.post("/chart_of_accounts", json=body)

        assert response.status_code == 400
        assert "category" in response.json()["errors"]

    async def test_add_without_category_or_name(self, client: AsyncClient) -> None:
        """Both category and name are required."""
        response = await client.post("/chart_of_accounts", json={})

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"category", "name"}

    async def test_add_runs_serializable(self, client: AsyncClient, account_ids) -> None:
        """The category check and the insert share one serializable transaction."""
        body = {"category": f"{BASE}/categories/id/A2", "name": "Land"}

        with patch(
            "accounting_service.api.accounts.begin_serializable",
            side_effect=begin_serializable,
        ) as begin:
            response = await client.post("/chart_of_accounts", json=body)

        assert response.status_code == 201
        begin.assert_awaited_once()


class TestUpdateAccount:
    async def test_move_to_other_category(self, client: AsyncClient, account_ids) -> None:
        """An account can move to another existing category."""
        href = f"{BASE}/chart_of_accounts/id/{account_ids['Checking']}"
        body = {"href": href, "category": f"{BASE}/categories/id/B", "name": "Overdraft"}

        response = await client.put("/chart_of_accounts", json=body)

        assert response.status_code == 200
        assert response.json() == body

    async def test_update_missing(self, client: AsyncClient, account_ids) -> None:
        """Updating an unknown account is a validation failure."""
        body = {
            "href": f"{BASE}/chart_of_accounts/id/9999",
            "category": f"{BASE}/categories/id/B",
            "name": "Ghost",
        }

        response = await client.put("/chart_of_accounts", json=body)

        assert response.status_code == 400
        assert "href" in response.json()["errors"]

    async def test_update_out_of_range_href(self, client: AsyncClient, account_ids) -> None:
        """An href no account can have is a validation failure."""
        body = {
            "href": f"{BASE}/chart_of_accounts/id/99999999999999999999",
            "category": f"{BASE}/categories/id/B",
            "name": "Ghost",
        }

        response = await client.put("/chart_of_accounts", json=body)

        assert response.status_code == 400
        assert "href" in response.json()["errors"]

    async def test_update_runs_serializable(self, client: AsyncClient, account_ids) -> None:
        """The category check and the update share one serializable transaction."""
        href = f"{BASE}/chart_of_accounts/id/{account_ids['Checking']}"
        body = {"href": href, "category": f"{BASE}/categories/id/B", "name": "Overdraft"}

        with patch(
            "accounting_service.api.accounts.begin_serializable",
            side_effect=begin_serializable,
        ) as begin:
            response = await client.put("/chart_of_accounts", json=body)

        assert response.status_code == 200
        begin.assert_awaited_once()


class TestDeleteAccount:
    async def test_delete(self, client: AsyncClient, account_ids) -> None:
        """Deleting an account removes it."""
        account_id = account_ids["Savings"]

        response = await client.delete(f"/chart_of_accounts/id/{account_id}")

        assert response.status_code == 204
        assert (await client.get(f"/chart_of_accounts/id/{account_id}")).status_code == 404

    async def test_delete_missing(self, client: AsyncClient) -> None:
        """Deleting an unknown account is 404."""
        response = await client.delete("/chart_of_accounts/id/9999")

        assert response.status_code == 404

    async def test_delete_out_of_range_id(self, client: AsyncClient) -> None:
        """Deleting an id no account can have is 404, not a store failure."""
        response = await client.delete("/chart_of_accounts/id/99999999999999999999")

        assert response.status_code == 404
        assert response.json()["kind"] == "invalid_key"

    async def test_delete_frees_category(self, client: AsyncClient, account_ids) -> None:
        """Once its last account is gone a category can be deleted."""
        await client.delete(f"/chart_of_accounts/id/{account_ids['Loans']}")

        response = await client.delete("/categories/id/B")

        assert response.status_code == 204
