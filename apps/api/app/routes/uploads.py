"""Image upload routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from app.routes.dependencies import get_upload_service, require_authenticated, resource_gate
from app.schemas.auth import AuthContext
from app.schemas.common import SuccessResponse
from app.schemas.error import ErrorResponse
from app.schemas.upload import UploadedImage
from app.services.uploads import ICON_FOLDER, PROJECT_FOLDER, UploadService

router = APIRouter(
    prefix="/upload",
    tags=["Uploads"],
    dependencies=[Depends(resource_gate)],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)

Service = Annotated[UploadService, Depends(get_upload_service)]
Context = Annotated[AuthContext, Depends(require_authenticated)]


@router.post("", response_model=SuccessResponse[UploadedImage])
async def upload_image(
    service: Service,
    context: Context,
    image: Annotated[UploadFile | None, File()] = None,
) -> SuccessResponse[UploadedImage]:
    stored = await service.store_image(image)
    return SuccessResponse[UploadedImage](message="Image uploaded successfully", data=stored)


@router.post("/multiple", response_model=SuccessResponse[list[UploadedImage]])
async def upload_images(
    service: Service,
    context: Context,
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> SuccessResponse[list[UploadedImage]]:
    stored = await service.store_images(images)
    return SuccessResponse[list[UploadedImage]](
        message=f"{len(stored)} image(s) uploaded successfully",
        data=stored,
    )


@router.post("/skill-icon", response_model=SuccessResponse[UploadedImage])
async def upload_skill_icon(
    service: Service,
    context: Context,
    icon: Annotated[UploadFile | None, File()] = None,
) -> SuccessResponse[UploadedImage]:
    stored = await service.store_image(icon, subfolder=ICON_FOLDER, missing_message="Please upload an icon")
    return SuccessResponse[UploadedImage](message="Skill icon uploaded successfully", data=stored)


@router.post("/project-image", response_model=SuccessResponse[UploadedImage])
async def upload_project_image(
    service: Service,
    context: Context,
    image: Annotated[UploadFile | None, File()] = None,
) -> SuccessResponse[UploadedImage]:
    stored = await service.store_image(image, subfolder=PROJECT_FOLDER)
    return SuccessResponse[UploadedImage](message="Project image uploaded successfully", data=stored)
