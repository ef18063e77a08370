"""Integration tests for the deal pipeline."""

import pytest
from httpx import AsyncClient

from crm.config.settings import settings

pytestmark = pytest.mark.asyncio

DEALS = f"{settings.API_PREFIX}/deals"


async def create_deal(client: AsyncClient, headers, **overrides) -> dict:
    payload = {"title": "Fleet renewal", "value": 12500.5, "currency": "eur"}
    payload.update(overrides)
    response = await client.post(f"{DEALS}/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestDealCrud:
    async def test_create_defaults(self, async_client: AsyncClient, sales_headers, sales_user):
        deal = await create_deal(async_client, sales_headers)

        assert deal["owner_id"] == sales_user.id
        assert deal["stage"] == "lead"
        assert deal["priority"] == "medium"
        assert deal["currency"] == "EUR"
        assert deal["value"] == 12500.5

    async def test_negative_value_rejected(self, async_client: AsyncClient, sales_headers):
        response = await async_client.post(
            f"{DEALS}/", json={"title": "Refund", "value": -1}, headers=sales_headers
        )

        assert response.status_code == 422

    async def test_unknown_stage_rejected(self, async_client: AsyncClient, sales_headers):
        response = await async_client.post(
            f"{DEALS}/", json={"title": "Odd", "stage": "won"}, headers=sales_headers
        )

        assert response.status_code == 422

    async def test_update_clears_nullable_fields(self, async_client: AsyncClient, sales_headers):
        deal = await create_deal(async_client, sales_headers, description="Three vans")

        response = await async_client.put(
            f"{DEALS}/{deal['id']}",
            json={"description": None, "value": None, "stage": None},
            headers=sales_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["description"] is None
        assert data["value"] == 12500.5
        assert data["stage"] == "lead"

    async def test_stage_change_is_logged(self, async_client: AsyncClient, sales_headers):
        deal = await create_deal(async_client, sales_headers, title="Fleet")

        response = await async_client.put(
            f"{DEALS}/{deal['id']}", json={"stage": "proposal"}, headers=sales_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["stage"] == "proposal"

        timeline = await async_client.get(f"{DEALS}/{deal['id']}/activities", headers=sales_headers)
        titles = [a["title"] for a in timeline.json()["data"] if a["type"] == "deal_stage_changed"]
        assert titles == ['Deal "Fleet" moved from lead to proposal']

    async def test_closing_sets_close_date(self, async_client: AsyncClient, sales_headers):
        deal = await create_deal(async_client, sales_headers)

        response = await async_client.put(
            f"{DEALS}/{deal['id']}", json={"stage": "closed-won"}, headers=sales_headers
        )

        assert response.json()["data"]["actual_close_date"] is not None

    async def test_plain_update_is_logged_as_update(self, async_client: AsyncClient, sales_headers):
        deal = await create_deal(async_client, sales_headers)

        await async_client.put(f"{DEALS}/{deal['id']}", json={"probability": 40}, headers=sales_headers)

        timeline = await async_client.get(f"{DEALS}/{deal['id']}/activities", headers=sales_headers)
        types = [a["type"] for a in timeline.json()["data"]]
        assert "deal_updated" in types
        assert "deal_stage_changed" not in types


class TestDealAccess:
    async def test_non_owner_is_forbidden(
        self, async_client: AsyncClient, sales_headers, other_sales_headers
    ):
        deal = await create_deal(async_client, sales_headers)

        response = await async_client.put(
            f"{DEALS}/{deal['id']}", json={"stage": "qualified"}, headers=other_sales_headers
        )

        assert response.status_code == 403

    async def test_salesperson_cannot_delete(self, async_client: AsyncClient, sales_headers):
        deal = await create_deal(async_client, sales_headers)

        response = await async_client.delete(f"{DEALS}/{deal['id']}", headers=sales_headers)

        assert response.status_code == 403
        assert response.json()["required_permissions"] == ["deals:delete"]

    async def test_admin_deletes(self, async_client: AsyncClient, sales_headers, admin_headers):
        deal = await create_deal(async_client, sales_headers)

        response = await async_client.delete(f"{DEALS}/{deal['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Deal deleted successfully"

    async def test_admin_gets_404_for_missing_deal(self, async_client: AsyncClient, admin_headers):
        response = await async_client.get(f"{DEALS}/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Resource not found."

    async def test_direct_manager_reads_timeline(
        self, async_client: AsyncClient, make_user, auth_headers
    ):
        manager = await make_user("Sales Manager", first_name="Mona")
        report = await make_user("Salesperson", manager_id=manager.id)
        outsider = await make_user("Sales Manager", first_name="Otto")

        deal = await create_deal(async_client, auth_headers(report))

        allowed = await async_client.get(
            f"{DEALS}/{deal['id']}/activities", headers=auth_headers(manager)
        )
        denied = await async_client.get(
            f"{DEALS}/{deal['id']}/activities", headers=auth_headers(outsider)
        )

        assert allowed.status_code == 200
        assert [a["type"] for a in allowed.json()["data"]] == ["deal_created"]
        assert denied.status_code == 403

    async def test_manager_does_not_own_report_deals(
        self, async_client: AsyncClient, make_user, auth_headers
    ):
        manager = await make_user("Sales Manager")
        report = await make_user("Salesperson", manager_id=manager.id)
        deal = await create_deal(async_client, auth_headers(report))

        response = await async_client.get(f"{DEALS}/{deal['id']}", headers=auth_headers(manager))

        assert response.status_code == 403


class TestDealListing:
    async def test_filters(self, async_client: AsyncClient, sales_headers, other_sales_headers):
        await create_deal(async_client, sales_headers, stage="proposal", priority="high")
        await create_deal(async_client, sales_headers, stage="lead")
        await create_deal(async_client, other_sales_headers, stage="proposal")

        by_stage = await async_client.get(
            f"{DEALS}/", params={"stage": "proposal"}, headers=sales_headers
        )
        by_priority = await async_client.get(
            f"{DEALS}/", params={"priority": "high"}, headers=sales_headers
        )

        assert by_stage.json()["data"]["pagination"]["total"] == 1
        assert by_priority.json()["data"]["pagination"]["total"] == 1
        assert by_stage.json()["data"]["pagination"]["limit"] == 20
