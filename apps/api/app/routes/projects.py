"""Project routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.routes.dependencies import get_project_service, require_authenticated, resource_gate
from app.schemas.auth import AuthContext
from app.schemas.common import ListResponse, MessageResponse, SuccessResponse
from app.schemas.error import ErrorResponse
from app.schemas.project import CreateProjectRequest, Project, ProjectStatus, UpdateProjectRequest
from app.services.projects import ProjectService

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    dependencies=[Depends(resource_gate)],
    responses={401: {"model": ErrorResponse}},
)

ProjectId = Annotated[str, Path(alias="projectId")]
Service = Annotated[ProjectService, Depends(get_project_service)]
Context = Annotated[AuthContext, Depends(require_authenticated)]


@router.get("", response_model=ListResponse[Project])
async def list_projects(
    service: Service,
    is_published: bool | None = None,
    featured: bool | None = None,
    status: ProjectStatus | None = None,
) -> ListResponse[Project]:
    projects = await service.list_records(
        filters={
            "is_published": is_published,
            "featured": featured,
            "status": status.value if status is not None else None,
        }
    )
    return ListResponse[Project](count=len(projects), data=projects)


@router.get("/{projectId}", response_model=SuccessResponse[Project], responses={404: {"model": ErrorResponse}})
async def get_project(project_id: ProjectId, service: Service) -> SuccessResponse[Project]:
    return SuccessResponse[Project](data=await service.get(project_id))


@router.post("", response_model=SuccessResponse[Project], status_code=201)
async def create_project(
    payload: CreateProjectRequest,
    service: Service,
    context: Context,
) -> SuccessResponse[Project]:
    project = await service.create(payload.model_dump(mode="json"), actor=context.principal)
    return SuccessResponse[Project](message="Project created successfully", data=project)


@router.put(
    "/{projectId}",
    response_model=SuccessResponse[Project],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_project(
    project_id: ProjectId,
    payload: UpdateProjectRequest,
    service: Service,
    context: Context,
) -> SuccessResponse[Project]:
    changes = payload.changes()
    project = await service.update(project_id, changes, actor=context.principal)
    return SuccessResponse[Project](message="Project updated successfully", data=project)


@router.delete("/{projectId}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def delete_project(project_id: ProjectId, service: Service, context: Context) -> MessageResponse:
    await service.delete(project_id, actor=context.principal)
    return MessageResponse(message="Project deleted successfully")


@router.patch(
    "/{projectId}/toggle-publish",
    response_model=SuccessResponse[Project],
    responses={404: {"model": ErrorResponse}},
)
async def toggle_project_publish(project_id: ProjectId, service: Service, context: Context) -> SuccessResponse[Project]:
    project = await service.toggle(project_id, "is_published", actor=context.principal)
    state = "published" if project.is_published else "unpublished"
    return SuccessResponse[Project](message=f"Project {state} successfully", data=project)


@router.patch(
    "/{projectId}/toggle-featured",
    response_model=SuccessResponse[Project],
    responses={404: {"model": ErrorResponse}},
)
async def toggle_project_featured(project_id: ProjectId, service: Service, context: Context) -> SuccessResponse[Project]:
    project = await service.toggle(project_id, "featured", actor=context.principal)
    state = "featured" if project.featured else "unfeatured"
    return SuccessResponse[Project](message=f"Project {state} successfully", data=project)
