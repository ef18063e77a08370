"""Integration tests for contacts and their access rules."""

import pytest
from httpx import AsyncClient

from crm.config.settings import settings

pytestmark = pytest.mark.asyncio

CONTACTS = f"{settings.API_PREFIX}/contacts"


async def create_contact(client: AsyncClient, headers, **overrides) -> dict:
    payload = {"first_name": "Ada", "last_name": "Lovelace", "company": "Analytical Engines"}
    payload.update(overrides)
    response = await client.post(f"{CONTACTS}/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestContactCrud:
    async def test_create_sets_owner_to_caller(
        self, async_client: AsyncClient, sales_headers, sales_user
    ):
        response = await async_client.post(
            f"{CONTACTS}/",
            json={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
            headers=sales_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Contact created successfully"
        assert body["data"]["owner_id"] == sales_user.id
        assert body["data"]["owner"]["id"] == sales_user.id
        assert body["data"]["status"] == "active"

    async def test_owner_can_read_and_update(self, async_client: AsyncClient, sales_headers):
        contact = await create_contact(async_client, sales_headers)

        read = await async_client.get(f"{CONTACTS}/{contact['id']}", headers=sales_headers)
        assert read.status_code == 200

        update = await async_client.put(
            f"{CONTACTS}/{contact['id']}", json={"company": "Babbage & Co"}, headers=sales_headers
        )
        assert update.status_code == 200
        assert update.json()["data"]["company"] == "Babbage & Co"
        assert update.json()["data"]["first_name"] == "Ada"

    async def test_owner_with_delete_permission_deletes(
        self, async_client: AsyncClient, make_user, auth_headers
    ):
        manager_headers = auth_headers(await make_user("Sales Manager"))
        contact = await create_contact(async_client, manager_headers)

        response = await async_client.delete(f"{CONTACTS}/{contact['id']}", headers=manager_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Contact deleted successfully"

    async def test_update_clears_field_with_null(self, async_client: AsyncClient, sales_headers):
        contact = await create_contact(async_client, sales_headers, notes="call back")

        response = await async_client.put(
            f"{CONTACTS}/{contact['id']}",
            json={"notes": None, "first_name": None},
            headers=sales_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["notes"] is None
        assert response.json()["data"]["first_name"] == "Ada"
        assert response.json()["data"]["company"] == "Analytical Engines"


    async def test_update_cannot_reassign_owner(
        self, async_client: AsyncClient, sales_headers, sales_user, other_sales_user
    ):
        contact = await create_contact(async_client, sales_headers)

        response = await async_client.put(
            f"{CONTACTS}/{contact['id']}",
            json={"owner_id": other_sales_user.id, "notes": "hand over"},
            headers=sales_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["owner_id"] == sales_user.id
        assert response.json()["data"]["notes"] == "hand over"

    async def test_admin_deletes_any_contact(
        self, async_client: AsyncClient, sales_headers, admin_headers
    ):
        contact = await create_contact(async_client, sales_headers)

        response = await async_client.delete(f"{CONTACTS}/{contact['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Contact deleted successfully"

        missing = await async_client.get(f"{CONTACTS}/{contact['id']}", headers=admin_headers)
        assert missing.status_code == 404

    async def test_delete_detaches_deals(
        self, async_client: AsyncClient, sales_headers, admin_headers
    ):
        contact = await create_contact(async_client, sales_headers)
        deal = await async_client.post(
            f"{settings.API_PREFIX}/deals/",
            json={"title": "Engine order", "value": 1000, "contact_id": contact["id"]},
            headers=admin_headers,
        )
        deal_id = deal.json()["data"]["id"]

        await async_client.delete(f"{CONTACTS}/{contact['id']}", headers=admin_headers)

        response = await async_client.get(f"{settings.API_PREFIX}/deals/{deal_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["contact_id"] is None

    async def test_invalid_phone_rejected(self, async_client: AsyncClient, sales_headers):
        response = await async_client.post(
            f"{CONTACTS}/",
            json={"first_name": "Ada", "last_name": "Lovelace", "phone": "12"},
            headers=sales_headers,
        )

        assert response.status_code == 400


class TestContactAccess:
    async def test_non_owner_is_forbidden(
        self, async_client: AsyncClient, sales_headers, other_sales_headers
    ):
        contact = await create_contact(async_client, sales_headers)

        for method, kwargs in [
            ("get", {}),
            ("put", {"json": {"notes": "mine now"}}),
        ]:
            response = await getattr(async_client, method)(
                f"{CONTACTS}/{contact['id']}", headers=other_sales_headers, **kwargs
            )

            assert response.status_code == 403
            assert response.json()["message"] == (
                "You do not have permission to access this resource."
            )

    async def test_delete_permission_does_not_replace_ownership(
        self, async_client: AsyncClient, sales_headers, make_user, auth_headers
    ):
        contact = await create_contact(async_client, sales_headers)
        manager_headers = auth_headers(await make_user("Sales Manager"))

        response = await async_client.delete(f"{CONTACTS}/{contact['id']}", headers=manager_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "You do not have permission to access this resource."

        still_there = await async_client.get(f"{CONTACTS}/{contact['id']}", headers=sales_headers)
        assert still_there.status_code == 200

    async def test_non_owner_without_delete_permission(
        self, async_client: AsyncClient, sales_headers, other_sales_headers
    ):
        contact = await create_contact(async_client, sales_headers)

        response = await async_client.delete(f"{CONTACTS}/{contact['id']}", headers=other_sales_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["message"] == "You do not have permission to perform this action."
        assert body["required_permissions"] == ["contacts:delete"]


    async def test_missing_contact_is_not_found(self, async_client: AsyncClient, sales_headers):
        response = await async_client.get(f"{CONTACTS}/does-not-exist", headers=sales_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Resource not found."

    async def test_missing_permission(self, async_client: AsyncClient, sales_headers, sales_user):
        contact = await create_contact(async_client, sales_headers)

        # Salesperson has no contacts:delete, even for owned contacts
        response = await async_client.delete(f"{CONTACTS}/{contact['id']}", headers=sales_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["message"] == "You do not have permission to perform this action."
        assert body["required_permissions"] == ["contacts:delete"]

    async def test_anonymous_request(self, async_client: AsyncClient):
        response = await async_client.get(f"{CONTACTS}/")

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication required."

    async def test_user_without_roles(self, async_client: AsyncClient, make_user, auth_headers):
        user = await make_user()

        response = await async_client.get(f"{CONTACTS}/", headers=auth_headers(user))

        assert response.status_code == 403


class TestContactListing:
    async def test_non_admin_sees_only_owned(
        self, async_client: AsyncClient, sales_headers, other_sales_headers, admin_headers
    ):
        await create_contact(async_client, sales_headers, first_name="Mine")
        await create_contact(async_client, other_sales_headers, first_name="Theirs")

        own = await async_client.get(f"{CONTACTS}/", headers=sales_headers)
        everything = await async_client.get(f"{CONTACTS}/", headers=admin_headers)

        assert [c["first_name"] for c in own.json()["data"]["contacts"]] == ["Mine"]
        assert everything.json()["data"]["pagination"]["total"] == 2

    async def test_search_and_pagination(self, async_client: AsyncClient, sales_headers):
        for i in range(3):
            await create_contact(async_client, sales_headers, first_name=f"Grace{i}")
        await create_contact(async_client, sales_headers, first_name="Alan", company="Bletchley")

        response = await async_client.get(
            f"{CONTACTS}/", params={"search": "Grace", "limit": 2, "page": 1}, headers=sales_headers
        )

        data = response.json()["data"]
        assert len(data["contacts"]) == 2
        assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

        by_company = await async_client.get(
            f"{CONTACTS}/", params={"search": "bletch"}, headers=sales_headers
        )
        assert [c["first_name"] for c in by_company.json()["data"]["contacts"]] == ["Alan"]

    async def test_status_filter(self, async_client: AsyncClient, sales_headers):
        await create_contact(async_client, sales_headers, status="lead")
        await create_contact(async_client, sales_headers)

        response = await async_client.get(
            f"{CONTACTS}/", params={"status": "lead"}, headers=sales_headers
        )

        assert response.json()["data"]["pagination"]["total"] == 1

    async def test_limit_is_capped(self, async_client: AsyncClient, sales_headers):
        response = await async_client.get(f"{CONTACTS}/", params={"limit": 500}, headers=sales_headers)

        assert response.status_code == 422


class TestContactActivities:
    async def test_create_and_update_are_logged(self, async_client: AsyncClient, sales_headers):
        contact = await create_contact(async_client, sales_headers)
        await async_client.put(
            f"{CONTACTS}/{contact['id']}", json={"notes": "met at expo"}, headers=sales_headers
        )

        response = await async_client.get(
            f"{CONTACTS}/{contact['id']}/activities", headers=sales_headers
        )

        assert response.status_code == 200
        types = {a["type"] for a in response.json()["data"]}
        assert types == {"contact_created", "contact_updated"}

    async def test_teammate_can_read_timeline(
        self, async_client: AsyncClient, admin_headers, sales_headers, other_sales_headers,
        sales_user, other_sales_user,
    ):
        contact = await create_contact(async_client, sales_headers)

        denied = await async_client.get(
            f"{CONTACTS}/{contact['id']}/activities", headers=other_sales_headers
        )
        assert denied.status_code == 403

        team = await async_client.post(
            f"{settings.API_PREFIX}/teams/",
            json={
                "name": "East",
                "members": [{"user_id": sales_user.id}, {"user_id": other_sales_user.id}],
            },
            headers=admin_headers,
        )
        assert team.status_code == 201

        allowed = await async_client.get(
            f"{CONTACTS}/{contact['id']}/activities", headers=other_sales_headers
        )
        assert allowed.status_code == 200
