"""Email template and outgoing email service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.email import EmailLog, EmailTemplate
from crm.policies import Actor
from crm.schemas.email import EmailSendRequest, EmailTemplateCreate

logger = logging.getLogger(__name__)

EMAIL_LOG_LIMIT = 100


class EmailService:
    """Service for email templates and the outgoing email log.

    Sending is queue-only: a log row with status ``pending`` is recorded and
    no mail transport is contacted.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_templates(self) -> list[EmailTemplate]:
        """Active templates only."""
        result = await self.db.execute(
            select(EmailTemplate)
            .where(EmailTemplate.is_active.is_(True))
            .order_by(EmailTemplate.name)
        )
        return list(result.scalars().all())

    async def create_template(self, actor: Actor, data: EmailTemplateCreate) -> EmailTemplate:
        template = EmailTemplate(**data.model_dump(), created_by=actor.id)
        self.db.add(template)
        await self.db.commit()
        await self.db.refresh(template)
        return template

    async def queue_email(self, actor: Actor, data: EmailSendRequest) -> EmailLog:
        """Record an outgoing email as pending."""
        email_log = EmailLog(**data.model_dump(), sent_by=actor.id, status="pending")
        self.db.add(email_log)
        await self.db.commit()
        await self.db.refresh(email_log)

        logger.info(
            f"Email queued for sending to: {email_log.to_email}",
            extra={"email_log_id": email_log.id, "user_id": actor.id},
        )
        return email_log

    async def list_logs(self) -> list[EmailLog]:
        """Most recent outgoing emails."""
        result = await self.db.execute(
            select(EmailLog).order_by(EmailLog.created_at.desc()).limit(EMAIL_LOG_LIMIT)
        )
        return list(result.scalars().all())
