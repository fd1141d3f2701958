"""Skill routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status

from app.routes.dependencies import get_skill_service, get_upload_service, require_authenticated, resource_gate
from app.routes.forms import validate_form
from app.schemas.auth import AuthContext
from app.schemas.common import ListResponse, MessageResponse, SuccessResponse
from app.schemas.error import ErrorResponse
from app.schemas.skill import CreateSkillRequest, Skill, UpdateSkillRequest
from app.services.skills import SkillService
from app.services.uploads import ICON_FOLDER, UploadService

router = APIRouter(
    prefix="/skills",
    tags=["Skills"],
    dependencies=[Depends(resource_gate)],
    responses={401: {"model": ErrorResponse}},
)

SkillId = Annotated[str, Path(alias="skillId")]
Service = Annotated[SkillService, Depends(get_skill_service)]
Context = Annotated[AuthContext, Depends(require_authenticated)]


@router.get("", response_model=ListResponse[Skill])
async def list_skills(
    service: Service,
    category: str | None = None,
    is_published: bool | None = None,
) -> ListResponse[Skill]:
    skills = await service.list_records(filters={"category": category, "is_published": is_published})
    return ListResponse[Skill](count=len(skills), data=skills)


@router.get("/{skillId}", response_model=SuccessResponse[Skill], responses={404: {"model": ErrorResponse}})
async def get_skill(skill_id: SkillId, service: Service) -> SuccessResponse[Skill]:
    return SuccessResponse[Skill](data=await service.get(skill_id))


@router.post("", response_model=SuccessResponse[Skill], status_code=status.HTTP_201_CREATED)
async def create_skill(payload: CreateSkillRequest, service: Service, context: Context) -> SuccessResponse[Skill]:
    skill = await service.create(payload.model_dump(mode="json"), actor=context.principal)
    return SuccessResponse[Skill](message="Skill created successfully", data=skill)


@router.post("/with-icon", response_model=SuccessResponse[Skill], status_code=status.HTTP_201_CREATED)
async def create_skill_with_icon(
    service: Service,
    uploads: Annotated[UploadService, Depends(get_upload_service)],
    context: Context,
    name: Annotated[str | None, Form()] = None,
    level: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    order_index: Annotated[str | None, Form()] = None,
    is_published: Annotated[str | None, Form()] = None,
    icon: Annotated[UploadFile | None, File()] = None,
) -> SuccessResponse[Skill]:
    payload = validate_form(
        CreateSkillRequest,
        {
            "name": name,
            "level": level,
            "category": category,
            "order_index": order_index,
            "is_published": is_published,
        },
    )
    values = payload.model_dump(mode="json")
    if icon is not None:
        stored = await uploads.store_image(icon, subfolder=ICON_FOLDER, missing_message="Please upload an icon")
        values["icon"] = stored.url

    skill = await service.create(values, actor=context.principal)
    return SuccessResponse[Skill](message="Skill created successfully with icon", data=skill)


@router.put(
    "/{skillId}",
    response_model=SuccessResponse[Skill],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_skill(
    skill_id: SkillId,
    payload: UpdateSkillRequest,
    service: Service,
    context: Context,
) -> SuccessResponse[Skill]:
    changes = payload.changes()
    skill = await service.update(skill_id, changes, actor=context.principal)
    return SuccessResponse[Skill](message="Skill updated successfully", data=skill)


@router.put(
    "/{skillId}/with-icon",
    response_model=SuccessResponse[Skill],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_skill_with_icon(
    skill_id: SkillId,
    service: Service,
    uploads: Annotated[UploadService, Depends(get_upload_service)],
    context: Context,
    name: Annotated[str | None, Form()] = None,
    level: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    order_index: Annotated[str | None, Form()] = None,
    is_published: Annotated[str | None, Form()] = None,
    icon: Annotated[UploadFile | None, File()] = None,
) -> SuccessResponse[Skill]:
    payload = validate_form(
        UpdateSkillRequest,
        {
            "name": name,
            "level": level,
            "category": category,
            "order_index": order_index,
            "is_published": is_published,
        },
    )
    changes = payload.changes()
    if icon is not None:
        await service.get(skill_id)
        stored = await uploads.store_image(icon, subfolder=ICON_FOLDER, missing_message="Please upload an icon")
        changes["icon"] = stored.url

    skill = await service.update(skill_id, changes, actor=context.principal)
    return SuccessResponse[Skill](message="Skill updated successfully", data=skill)


@router.delete("/{skillId}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def delete_skill(skill_id: SkillId, service: Service, context: Context) -> MessageResponse:
    await service.delete(skill_id, actor=context.principal)
    return MessageResponse(message="Skill deleted successfully")


@router.patch(
    "/{skillId}/toggle-publish",
    response_model=SuccessResponse[Skill],
    responses={404: {"model": ErrorResponse}},
)
async def toggle_skill_publish(skill_id: SkillId, service: Service, context: Context) -> SuccessResponse[Skill]:
    skill = await service.toggle(skill_id, "is_published", actor=context.principal)
    state = "published" if skill.is_published else "unpublished"
    return SuccessResponse[Skill](message=f"Skill {state} successfully", data=skill)
