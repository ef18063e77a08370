"""User management service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.role import Role
from crm.models.user import User
from crm.schemas.user import UserCreate
from crm.utils.exceptions import EmailAlreadyExistsError, NotFoundError
from crm.utils.security import hash_password

logger = logging.getLogger(__name__)


def user_load_options():
    """Loader options that make roles and permissions available without lazy loads."""
    return (selectinload(User.roles).selectinload(Role.permissions),)


class UserService:
    """Service for user management operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID with roles and permissions loaded."""
        result = await self.db.execute(
            select(User)
            .options(*user_load_options())
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).options(*user_load_options()).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        """All users, newest first."""
        result = await self.db.execute(
            select(User).options(*user_load_options()).order_by(User.created_at.desc())
        )
        return list(result.scalars().all())

    async def _get_roles(self, role_ids: list[str]) -> list[Role]:
        if not role_ids:
            return []
        result = await self.db.execute(select(Role).where(Role.id.in_(role_ids)))
        return list(result.scalars().all())

    async def create_user(self, data: UserCreate) -> User:
        """Create a new user, optionally with roles."""

        if await self.get_user_by_email(data.email):
            raise EmailAlreadyExistsError()

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            avatar=data.avatar,
            manager_id=data.manager_id,
            is_active=data.is_active,
        )
        user.roles = await self._get_roles(data.role_ids)

        self.db.add(user)
        await self.db.commit()

        logger.info(f"User created: {user.email}", extra={"user_id": user.id})
        return await self.get_user(user.id)

    async def set_roles(self, user_id: str, role_ids: list[str]) -> User:
        """Replace the role set of a user. Unknown role ids are ignored."""

        user = await self.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        user.roles = await self._get_roles(role_ids)
        await self.db.commit()

        logger.info(
            f"Roles updated for user {user_id}",
            extra={"user_id": user_id, "role_ids": role_ids},
        )
        return await self.get_user(user_id)
