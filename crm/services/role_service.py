"""Role and permission service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.role import Permission, Role
from crm.schemas.role import RoleCreate
from crm.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class RoleService:
    """Service for role management operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_role(self, role_id: str) -> Role | None:
        result = await self.db.execute(
            select(Role)
            .options(selectinload(Role.permissions))
            .where(Role.id == role_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_roles(self) -> list[Role]:
        result = await self.db.execute(
            select(Role).options(selectinload(Role.permissions)).order_by(Role.name)
        )
        return list(result.scalars().all())

    async def list_permissions(self) -> list[Permission]:
        """The permission catalogue ordered by resource then action."""
        result = await self.db.execute(
            select(Permission).order_by(Permission.resource, Permission.action)
        )
        return list(result.scalars().all())

    async def _get_permissions(self, permission_ids: list[str]) -> list[Permission]:
        if not permission_ids:
            return []
        result = await self.db.execute(select(Permission).where(Permission.id.in_(permission_ids)))
        return list(result.scalars().all())

    async def create_role(self, data: RoleCreate) -> Role:
        existing = await self.db.execute(select(Role.id).where(Role.name == data.name))
        if existing.scalar_one_or_none():
            raise ConflictError(f"Role '{data.name}' already exists")

        role = Role(name=data.name, description=data.description)
        role.permissions = await self._get_permissions(data.permission_ids)

        self.db.add(role)
        await self.db.commit()

        logger.info(f"Role created: {role.name}", extra={"role_id": role.id})
        return await self.get_role(role.id)

    async def set_permissions(self, role_id: str, permission_ids: list[str]) -> Role:
        """Replace the permission set of a role. Unknown ids are ignored."""

        role = await self.get_role(role_id)
        if not role:
            raise NotFoundError("Role not found")

        role.permissions = await self._get_permissions(permission_ids)
        await self.db.commit()

        logger.info(
            f"Permissions updated for role {role.name}",
            extra={"role_id": role_id, "permission_ids": permission_ids},
        )
        return await self.get_role(role_id)
