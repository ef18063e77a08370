"""Integration tests for workflows and email routes."""

import pytest
from httpx import AsyncClient

from crm.config.settings import settings

pytestmark = pytest.mark.asyncio

WORKFLOWS = f"{settings.API_PREFIX}/workflows"
EMAILS = f"{settings.API_PREFIX}/emails"


class TestWorkflows:
    async def test_create_and_toggle(self, async_client: AsyncClient, admin_headers, admin_user):
        created = await async_client.post(
            f"{WORKFLOWS}/",
            json={
                "name": "Welcome new leads",
                "trigger_type": "record_created",
                "trigger_resource": "contact",
                "actions": [{"type": "send_email", "template": "welcome"}],
            },
            headers=admin_headers,
        )
        assert created.status_code == 201
        workflow = created.json()["data"]
        assert workflow["created_by"] == admin_user.id
        assert workflow["is_active"] is False

        activated = await async_client.patch(
            f"{WORKFLOWS}/{workflow['id']}/activate", headers=admin_headers
        )
        assert activated.json()["message"] == "Workflow activated successfully"
        assert activated.json()["data"]["is_active"] is True

        deactivated = await async_client.patch(
            f"{WORKFLOWS}/{workflow['id']}/deactivate", headers=admin_headers
        )
        assert deactivated.json()["data"]["is_active"] is False

        listed = await async_client.get(f"{WORKFLOWS}/", headers=admin_headers)
        assert [w["id"] for w in listed.json()["data"]] == [workflow["id"]]

    async def test_invalid_trigger(self, async_client: AsyncClient, admin_headers):
        response = await async_client.post(
            f"{WORKFLOWS}/",
            json={"name": "Bad", "trigger_type": "whenever", "trigger_resource": "deal"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    async def test_activate_missing(self, async_client: AsyncClient, admin_headers):
        response = await async_client.patch(f"{WORKFLOWS}/missing/activate", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Workflow not found"

    async def test_requires_permission(self, async_client: AsyncClient, sales_headers):
        response = await async_client.get(f"{WORKFLOWS}/", headers=sales_headers)

        assert response.status_code == 403
        assert response.json()["required_permissions"] == ["workflows:read"]


class TestEmails:
    async def test_templates(self, async_client: AsyncClient, make_user, auth_headers):
        marketing = auth_headers(await make_user("Marketing"))

        for name, is_active in [("Welcome", True), ("Retired", False)]:
            response = await async_client.post(
                f"{EMAILS}/templates",
                json={
                    "name": name,
                    "subject": "Hello {{first_name}}",
                    "body_html": "<p>Hi</p>",
                    "variables": ["first_name"],
                    "is_active": is_active,
                },
                headers=marketing,
            )
            assert response.status_code == 201

        listed = await async_client.get(f"{EMAILS}/templates", headers=marketing)

        assert [t["name"] for t in listed.json()["data"]] == ["Welcome"]

    async def test_send_queues_email(self, async_client: AsyncClient, make_user, auth_headers):
        sender = await make_user("Marketing")
        headers = auth_headers(sender)

        response = await async_client.post(
            f"{EMAILS}/send",
            json={
                "from_email": "news@example.com",
                "to_email": "customer@example.com",
                "subject": "Spring offer",
                "body_text": "Twenty percent off",
            },
            headers=headers,
        )

        assert response.status_code == 202
        body = response.json()
        assert body["message"] == "Email queued for sending"
        assert body["data"]["status"] == "pending"
        assert body["data"]["sent_by"] == sender.id

        logs = await async_client.get(f"{EMAILS}/logs", headers=headers)
        assert [log["subject"] for log in logs.json()["data"]] == ["Spring offer"]

    async def test_salesperson_cannot_send(self, async_client: AsyncClient, sales_headers):
        response = await async_client.post(
            f"{EMAILS}/send",
            json={"from_email": "a@example.com", "to_email": "b@example.com", "subject": "Hi"},
            headers=sales_headers,
        )

        assert response.status_code == 403
