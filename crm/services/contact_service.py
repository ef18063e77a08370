"""Contact service."""

import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.contact import Contact
from crm.models.deal import Deal
from crm.policies import Actor
from crm.schemas.contact import ContactCreate, ContactUpdate

from .activity_service import ActivityService

logger = logging.getLogger(__name__)


class ContactService:
    """Service for contact operations. Access checks happen in the routers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activities = ActivityService(db)

    async def get_contact(self, contact_id: str) -> Contact | None:
        result = await self.db.execute(
            select(Contact)
            .options(selectinload(Contact.owner))
            .where(Contact.id == contact_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_contacts(
        self,
        actor: Actor,
        search: str | None = None,
        status: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Contact], int]:
        """Contacts newest first; non-admins only see their own."""

        query = select(Contact)

        if not actor.is_admin:
            query = query.where(Contact.owner_id == actor.id)

        if search:
            search_term = f"%{search}%"
            query = query.where(
                or_(
                    Contact.first_name.ilike(search_term),
                    Contact.last_name.ilike(search_term),
                    Contact.email.ilike(search_term),
                    Contact.company.ilike(search_term),
                )
            )

        if status:
            query = query.where(Contact.status == status)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = (
            query.options(selectinload(Contact.owner))
            .order_by(Contact.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def create_contact(self, actor: Actor, data: ContactCreate) -> Contact:
        """Create a contact owned by the actor."""

        contact = Contact(**data.model_dump(), owner_id=actor.id)
        self.db.add(contact)
        await self.db.flush()

        self.activities.record(
            user_id=actor.id,
            type="contact_created",
            title=f"Created contact: {contact.full_name}",
            related_to_type="contact",
            related_to_id=contact.id,
        )
        await self.db.commit()

        logger.info(f"Contact created: {contact.id}", extra={"user_id": actor.id})
        return await self.get_contact(contact.id)

    async def update_contact(self, actor: Actor, contact: Contact, data: ContactUpdate) -> Contact:
        """Apply a partial update. ``owner_id`` is not part of the payload."""

        contact.apply_updates(data.model_dump(exclude_unset=True))

        self.activities.record(
            user_id=actor.id,
            type="contact_updated",
            title=f"Updated contact: {contact.full_name}",
            related_to_type="contact",
            related_to_id=contact.id,
        )
        await self.db.commit()

        return await self.get_contact(contact.id)

    async def delete_contact(self, actor: Actor, contact: Contact) -> None:
        contact_name = contact.full_name
        contact_id = contact.id

        # Deals outlive their contact
        await self.db.execute(
            update(Deal).where(Deal.contact_id == contact_id).values(contact_id=None)
        )
        await self.db.delete(contact)
        self.activities.record(
            user_id=actor.id,
            type="contact_deleted",
            title=f"Deleted contact: {contact_name}",
            related_to_type="contact",
            related_to_id=contact_id,
        )
        await self.db.commit()

        logger.info(f"Contact deleted: {contact_id}", extra={"user_id": actor.id})
