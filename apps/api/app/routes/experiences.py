"""Experience routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.routes.dependencies import get_experience_service, require_authenticated, resource_gate
from app.schemas.auth import AuthContext
from app.schemas.common import ListResponse, MessageResponse, SuccessResponse
from app.schemas.error import ErrorResponse
from app.schemas.experience import CreateExperienceRequest, Experience, UpdateExperienceRequest
from app.services.experiences import ExperienceService

router = APIRouter(
    prefix="/experiences",
    tags=["Experiences"],
    dependencies=[Depends(resource_gate)],
    responses={401: {"model": ErrorResponse}},
)

ExperienceId = Annotated[str, Path(alias="experienceId")]
Service = Annotated[ExperienceService, Depends(get_experience_service)]
Context = Annotated[AuthContext, Depends(require_authenticated)]


@router.get("", response_model=ListResponse[Experience])
async def list_experiences(service: Service, is_published: bool | None = None) -> ListResponse[Experience]:
    experiences = await service.list_records(filters={"is_published": is_published})
    return ListResponse[Experience](count=len(experiences), data=experiences)


@router.get(
    "/{experienceId}",
    response_model=SuccessResponse[Experience],
    responses={404: {"model": ErrorResponse}},
)
async def get_experience(experience_id: ExperienceId, service: Service) -> SuccessResponse[Experience]:
    return SuccessResponse[Experience](data=await service.get(experience_id))


@router.post("", response_model=SuccessResponse[Experience], status_code=status.HTTP_201_CREATED)
async def create_experience(
    payload: CreateExperienceRequest,
    service: Service,
    context: Context,
) -> SuccessResponse[Experience]:
    experience = await service.create(payload.model_dump(mode="json"), actor=context.principal)
    return SuccessResponse[Experience](message="Experience created successfully", data=experience)


@router.put(
    "/{experienceId}",
    response_model=SuccessResponse[Experience],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_experience(
    experience_id: ExperienceId,
    payload: UpdateExperienceRequest,
    service: Service,
    context: Context,
) -> SuccessResponse[Experience]:
    changes = payload.changes()
    experience = await service.update(experience_id, changes, actor=context.principal)
    return SuccessResponse[Experience](message="Experience updated successfully", data=experience)


@router.delete("/{experienceId}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def delete_experience(experience_id: ExperienceId, service: Service, context: Context) -> MessageResponse:
    await service.delete(experience_id, actor=context.principal)
    return MessageResponse(message="Experience deleted successfully")


@router.patch(
    "/{experienceId}/toggle-publish",
    response_model=SuccessResponse[Experience],
    responses={404: {"model": ErrorResponse}},
)
async def toggle_experience_publish(
    experience_id: ExperienceId,
    service: Service,
    context: Context,
) -> SuccessResponse[Experience]:
    experience = await service.toggle(experience_id, "is_published", actor=context.principal)
    state = "published" if experience.is_published else "unpublished"
    return SuccessResponse[Experience](message=f"Experience {state} successfully", data=experience)
