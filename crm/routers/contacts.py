"""Contact routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm.dependencies.auth import require_permission
from crm.dependencies.database import get_db
from crm.dependencies.services import get_activity_service, get_contact_service
from crm.policies import Actor, ensure_team_access, require_ownership
from crm.schemas.activity import ActivityResponse
from crm.schemas.common import BaseResponse, PaginationMeta, SuccessResponse
from crm.schemas.contact import ContactCreate, ContactList, ContactResponse, ContactUpdate
from crm.services.activity_service import ActivityService
from crm.services.contact_service import ContactService

router = APIRouter()


@router.get("/", response_model=SuccessResponse[ContactList])
async def list_contacts(
    actor: Actor = Depends(require_permission("contacts:read")),
    service: ContactService = Depends(get_contact_service),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    search: str | None = Query(None, max_length=100, description="Name, email or company"),
    status_filter: str | None = Query(None, alias="status", description="Contact status"),
):
    """List contacts. Non-admins only see contacts they own."""

    contacts, total = await service.list_contacts(
        actor, search=search, status=status_filter, page=page, limit=limit
    )

    return SuccessResponse(
        data=ContactList(
            contacts=[ContactResponse.model_validate(c) for c in contacts],
            pagination=PaginationMeta.build(page, limit, total),
        )
    )


@router.post("/", response_model=SuccessResponse[ContactResponse], status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact_create: ContactCreate,
    actor: Actor = Depends(require_permission("contacts:create")),
    service: ContactService = Depends(get_contact_service),
):
    """Create a contact owned by the caller."""

    contact = await service.create_contact(actor, contact_create)

    return SuccessResponse(
        message="Contact created successfully",
        data=ContactResponse.model_validate(contact),
    )


@router.get("/{contact_id}", response_model=SuccessResponse[ContactResponse])
async def get_contact(
    contact_id: str,
    actor: Actor = Depends(require_permission("contacts:read")),
    service: ContactService = Depends(get_contact_service),
):
    contact = await service.get_contact(contact_id)
    require_ownership(actor, contact, "owner_id")

    return SuccessResponse(data=ContactResponse.model_validate(contact))


@router.put("/{contact_id}", response_model=SuccessResponse[ContactResponse])
async def update_contact(
    contact_id: str,
    contact_update: ContactUpdate,
    actor: Actor = Depends(require_permission("contacts:update")),
    service: ContactService = Depends(get_contact_service),
):
    """Update a contact. Ownership cannot be reassigned."""

    contact = await service.get_contact(contact_id)
    require_ownership(actor, contact, "owner_id")

    contact = await service.update_contact(actor, contact, contact_update)

    return SuccessResponse(
        message="Contact updated successfully",
        data=ContactResponse.model_validate(contact),
    )


@router.delete("/{contact_id}", response_model=BaseResponse)
async def delete_contact(
    contact_id: str,
    actor: Actor = Depends(require_permission("contacts:delete")),
    service: ContactService = Depends(get_contact_service),
):
    contact = await service.get_contact(contact_id)
    require_ownership(actor, contact, "owner_id")

    await service.delete_contact(actor, contact)

    return BaseResponse(message="Contact deleted successfully")


@router.get("/{contact_id}/activities", response_model=SuccessResponse[list[ActivityResponse]])
async def get_contact_activities(
    contact_id: str,
    actor: Actor = Depends(require_permission("activities:read")),
    service: ContactService = Depends(get_contact_service),
    activity_service: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db),
):
    """Activity timeline of a contact, visible to the owner's teammates."""

    contact = await service.get_contact(contact_id)
    await ensure_team_access(db, actor, contact)

    activities = await activity_service.list_for_resource("contact", contact.id)

    return SuccessResponse(data=[ActivityResponse.model_validate(a) for a in activities])
