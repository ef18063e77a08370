"""Integration tests for tasks and the activity feed."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from crm.config.settings import settings

pytestmark = pytest.mark.asyncio

TASKS = f"{settings.API_PREFIX}/tasks"
ACTIVITIES = f"{settings.API_PREFIX}/activities"


async def create_task(client: AsyncClient, headers, **overrides) -> dict:
    payload = {"title": "Call back"}
    payload.update(overrides)
    response = await client.post(f"{TASKS}/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestTasks:
    async def test_creator_is_default_assignee(
        self, async_client: AsyncClient, sales_headers, sales_user
    ):
        task = await create_task(async_client, sales_headers)

        assert task["assigned_to"] == sales_user.id
        assert task["created_by"] == sales_user.id
        assert task["status"] == "pending"
        assert task["completed_at"] is None

    async def test_assignee_can_update_but_not_delete(
        self, async_client: AsyncClient, make_user, auth_headers, sales_user, sales_headers
    ):
        support = await make_user("Support")
        support_headers = auth_headers(support)
        task = await create_task(async_client, support_headers, assigned_to=sales_user.id)

        update = await async_client.put(
            f"{TASKS}/{task['id']}", json={"status": "in-progress"}, headers=sales_headers
        )
        assert update.status_code == 200
        assert update.json()["data"]["status"] == "in-progress"

        admin = await make_user("Admin")
        # Salesperson lacks tasks:delete
        delete = await async_client.delete(f"{TASKS}/{task['id']}", headers=sales_headers)
        assert delete.status_code == 403

        delete = await async_client.delete(f"{TASKS}/{task['id']}", headers=auth_headers(admin))
        assert delete.status_code == 200

    async def test_only_creator_deletes(self, async_client: AsyncClient, make_user, auth_headers):
        manager = await make_user("Sales Manager")
        other_manager = await make_user("Sales Manager")
        task = await create_task(async_client, auth_headers(manager), assigned_to=other_manager.id)

        # Assignee holds tasks:delete but did not create the task
        denied = await async_client.delete(f"{TASKS}/{task['id']}", headers=auth_headers(other_manager))
        allowed = await async_client.delete(f"{TASKS}/{task['id']}", headers=auth_headers(manager))

        assert denied.status_code == 403
        assert allowed.status_code == 200

    async def test_stranger_cannot_read(
        self, async_client: AsyncClient, sales_headers, other_sales_headers
    ):
        task = await create_task(async_client, sales_headers)

        response = await async_client.get(f"{TASKS}/{task['id']}", headers=other_sales_headers)

        assert response.status_code == 403

    async def test_completion_timestamp(self, async_client: AsyncClient, sales_headers):
        task = await create_task(async_client, sales_headers)

        done = await async_client.put(
            f"{TASKS}/{task['id']}", json={"status": "completed"}, headers=sales_headers
        )
        assert done.json()["data"]["completed_at"] is not None

        reopened = await async_client.put(
            f"{TASKS}/{task['id']}", json={"status": "pending"}, headers=sales_headers
        )
        assert reopened.json()["data"]["completed_at"] is None

    async def test_list_is_scoped_and_ordered_by_due_date(
        self, async_client: AsyncClient, sales_headers, other_sales_headers
    ):
        now = datetime.now(timezone.utc)
        await create_task(async_client, sales_headers, title="later", due_date=(now + timedelta(days=3)).isoformat())
        await create_task(async_client, sales_headers, title="sooner", due_date=(now + timedelta(days=1)).isoformat())
        await create_task(async_client, other_sales_headers, title="not mine")

        response = await async_client.get(f"{TASKS}/", headers=sales_headers)

        assert [t["title"] for t in response.json()["data"]["tasks"]] == ["sooner", "later"]

    async def test_filters(self, async_client: AsyncClient, sales_headers):
        await create_task(async_client, sales_headers, priority="high")
        await create_task(async_client, sales_headers, status="completed")

        high = await async_client.get(f"{TASKS}/", params={"priority": "high"}, headers=sales_headers)
        done = await async_client.get(f"{TASKS}/", params={"status": "completed"}, headers=sales_headers)

        assert high.json()["data"]["pagination"]["total"] == 1
        assert done.json()["data"]["pagination"]["total"] == 1


class TestActivities:
    async def test_log_activity_as_caller(
        self, async_client: AsyncClient, sales_headers, sales_user
    ):
        response = await async_client.post(
            f"{ACTIVITIES}/",
            json={"type": "call", "title": "Intro call", "metadata": {"duration": 15}},
            headers=sales_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user_id"] == sales_user.id
        assert data["metadata"] == {"duration": 15}

    async def test_list_filters(self, async_client: AsyncClient, sales_headers, sales_user):
        await async_client.post(
            f"{ACTIVITIES}/", json={"type": "call", "title": "One"}, headers=sales_headers
        )
        await async_client.post(
            f"{ACTIVITIES}/", json={"type": "meeting", "title": "Two"}, headers=sales_headers
        )

        response = await async_client.get(
            f"{ACTIVITIES}/", params={"type": "call", "user_id": sales_user.id}, headers=sales_headers
        )

        data = response.json()["data"]
        assert [a["title"] for a in data["activities"]] == ["One"]
        assert data["pagination"]["limit"] == 50

    async def test_requires_permission(self, async_client: AsyncClient, make_user, auth_headers):
        user = await make_user()

        response = await async_client.post(
            f"{ACTIVITIES}/", json={"type": "call", "title": "One"}, headers=auth_headers(user)
        )

        assert response.status_code == 403
        assert response.json()["required_permissions"] == ["activities:create"]
