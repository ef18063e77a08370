"""Seed the permission catalogue, system roles and the default admin user.

Run with ``python -m crm.seed``. Safe to run repeatedly.
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.config.database import get_async_session_local, init_models
from crm.config.settings import settings
from crm.constants.permissions import (
    ADMIN_ROLE,
    ALL_PERMISSIONS,
    PERMISSIONS,
    SYSTEM_ROLES,
    permission_name,
)
from crm.models import Permission, Role, User
from crm.utils.security import hash_password

logger = logging.getLogger(__name__)


async def seed_permissions(db: AsyncSession) -> dict[str, Permission]:
    """Create missing permissions and return the whole catalogue by name."""

    result = await db.execute(select(Permission))
    existing = {p.name: p for p in result.scalars().all()}

    for resource, action, description in PERMISSIONS:
        name = permission_name(resource, action)
        if name in existing:
            continue
        permission = Permission(
            name=name, resource=resource, action=action, description=description
        )
        db.add(permission)
        existing[name] = permission

    await db.flush()
    return existing


async def seed_roles(db: AsyncSession, permissions: dict[str, Permission]) -> dict[str, Role]:
    """Create missing system roles. Existing roles keep their permissions."""

    result = await db.execute(select(Role).options(selectinload(Role.permissions)))
    existing = {r.name: r for r in result.scalars().all()}

    for name, (description, granted) in SYSTEM_ROLES.items():
        if name in existing:
            continue

        if granted == ALL_PERMISSIONS:
            role_permissions = list(permissions.values())
        else:
            role_permissions = [permissions[p] for p in granted]

        role = Role(
            name=name,
            description=description,
            is_system=True,
            permissions=role_permissions,
        )
        db.add(role)
        existing[name] = role
        logger.info(f"Created role: {name}")

    await db.flush()
    return existing


async def seed_admin(db: AsyncSession, admin_role: Role) -> User:
    result = await db.execute(select(User).where(User.email == settings.ADMIN_EMAIL))
    admin = result.scalar_one_or_none()
    if admin:
        return admin

    admin = User(
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        first_name="Admin",
        last_name="User",
        is_active=True,
        roles=[admin_role],
    )
    db.add(admin)
    await db.flush()

    logger.info(f"Created admin user: {admin.email}")
    return admin


async def seed(db: AsyncSession) -> None:
    """Populate the database with everything a fresh install needs."""

    permissions = await seed_permissions(db)
    roles = await seed_roles(db, permissions)
    await seed_admin(db, roles[ADMIN_ROLE])
    await db.commit()


async def main() -> None:
    await init_models()

    async with get_async_session_local()() as session:
        await seed(session)

    logger.info("Database seeded successfully")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(main())
