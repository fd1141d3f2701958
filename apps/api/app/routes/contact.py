"""Contact form submission and inbox routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.routes.dependencies import contact_form_gate, get_contact_service, require_authenticated, resource_gate
from app.schemas.auth import AuthContext
from app.schemas.common import MessageResponse, SuccessResponse
from app.schemas.contact import ContactMessage, ContactMessageList, ContactStats, CreateContactMessageRequest
from app.schemas.error import ErrorResponse
from app.services.contact import ContactService

# Submissions come from anonymous visitors; the inbox sits behind the resource gate.
form_router = APIRouter(prefix="/contact", tags=["Contact"], dependencies=[Depends(contact_form_gate)])
router = APIRouter(
    prefix="/contact",
    tags=["Contact"],
    dependencies=[Depends(resource_gate)],
    responses={401: {"model": ErrorResponse}},
)

MessageId = Annotated[str, Path(alias="messageId")]
Service = Annotated[ContactService, Depends(get_contact_service)]
Context = Annotated[AuthContext, Depends(require_authenticated)]


@form_router.post("", response_model=SuccessResponse[ContactMessage], status_code=status.HTTP_201_CREATED)
async def submit_contact_message(
    payload: CreateContactMessageRequest,
    service: Service,
) -> SuccessResponse[ContactMessage]:
    message = await service.submit(payload)
    return SuccessResponse[ContactMessage](
        message="Message sent successfully! I will get back to you soon.",
        data=message,
    )


@router.get("", response_model=ContactMessageList)
async def list_contact_messages(service: Service, is_read: bool | None = None) -> ContactMessageList:
    messages = await service.list_records(filters={"is_read": is_read})
    return ContactMessageList(count=len(messages), unread=await service.unread_count(), data=messages)


@router.get("/stats/summary", response_model=SuccessResponse[ContactStats])
async def contact_stats(service: Service) -> SuccessResponse[ContactStats]:
    return SuccessResponse[ContactStats](data=await service.stats())


@router.get(
    "/{messageId}",
    response_model=SuccessResponse[ContactMessage],
    responses={404: {"model": ErrorResponse}},
)
async def get_contact_message(message_id: MessageId, service: Service) -> SuccessResponse[ContactMessage]:
    return SuccessResponse[ContactMessage](data=await service.get(message_id))


@router.patch(
    "/{messageId}/mark-read",
    response_model=SuccessResponse[ContactMessage],
    responses={404: {"model": ErrorResponse}},
)
async def mark_contact_message_read(
    message_id: MessageId,
    service: Service,
    context: Context,
) -> SuccessResponse[ContactMessage]:
    message = await service.update(message_id, {"is_read": True}, actor=context.principal)
    return SuccessResponse[ContactMessage](message="Message marked as read", data=message)


@router.patch(
    "/{messageId}/mark-unread",
    response_model=SuccessResponse[ContactMessage],
    responses={404: {"model": ErrorResponse}},
)
async def mark_contact_message_unread(
    message_id: MessageId,
    service: Service,
    context: Context,
) -> SuccessResponse[ContactMessage]:
    message = await service.update(message_id, {"is_read": False}, actor=context.principal)
    return SuccessResponse[ContactMessage](message="Message marked as unread", data=message)


@router.delete("/{messageId}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def delete_contact_message(message_id: MessageId, service: Service, context: Context) -> MessageResponse:
    await service.delete(message_id, actor=context.principal)
    return MessageResponse(message="Message deleted successfully")
