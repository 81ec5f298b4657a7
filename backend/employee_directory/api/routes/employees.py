"""Employee Routes — HTTP surface for directory listing and mutations.

Invariants:
    - Every route requires an authenticated RequestContext
    - Routes never contain business logic: they translate HTTP <-> DirectoryService calls
    - Domain failures propagate as DirectoryError and are rendered by the global handlers
    - Create is multipart/form-data with an optional "image" file part

Design Decisions:
    - Missing form fields default to "" so the service reports them with its own
      stable message instead of a generic 422/400 from FastAPI
    - Toggle uses PUT /{id}/active and returns the new flag, mirroring the original client
"""

import logging
import mimetypes
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import Response

from employee_directory.api.deps import (
    RequestContext, get_asset_store, get_directory_service, require_context,
)
from employee_directory.config import Settings, get_settings
from employee_directory.core.domain_types import EmployeeId
from employee_directory.core.errors import ResourceNotFoundError
from employee_directory.infrastructure.asset_store import LocalAssetStore
from employee_directory.schemas.employee import (
    EmployeeCreateResponse, EmployeeListResponse, EmployeeResponse,
    EmployeeUpdate, MessageResponse, ToggleActiveResponse,
)
from employee_directory.services.directory_service import DirectoryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/employees", tags=["employees"])


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    page: int = Query(1),
    limit: int | None = Query(None),
    search: str = Query(""),
    sort_field: str = Query("created_at"),
    sort_order: str = Query("asc"),
    service: DirectoryService = Depends(get_directory_service),
    settings: Settings = Depends(get_settings),
    ctx: RequestContext = Depends(require_context),
):
    """List employees with search, sorting, and pagination."""
    result = await service.list_employees(
        page=page,
        page_size=settings.default_page_size if limit is None else limit,
        search_text=search,
        sort_field=sort_field,
        sort_direction=sort_order,
    )
    return EmployeeListResponse(
        records=[EmployeeResponse.model_validate(r) for r in result.records],
        total_count=result.total_count,
        total_active_count=result.total_active_count,
        page=result.page,
        page_size=result.page_size,
    )


@router.post(
    "", response_model=EmployeeCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    name: str = Form(""),
    email: str = Form(""),
    mobile: str = Form(""),
    designation: str = Form(""),
    course: str = Form(""),
    gender: str = Form(""),
    image: UploadFile | None = File(None),
    service: DirectoryService = Depends(get_directory_service),
    ctx: RequestContext = Depends(require_context),
):
    """Create an employee, optionally with an image upload."""
    image_bytes = await image.read() if image else None
    record = await service.create_employee(
        {
            "name": name,
            "email": email,
            "mobile": mobile,
            "designation": designation,
            "course": course,
            "gender": gender,
        },
        image=image_bytes,
        image_filename=image.filename if image else None,
    )
    logger.info(
        "Employee added via API",
        extra={"employee_id": record.id, "username": ctx.username},
    )
    return EmployeeCreateResponse(
        message="Employee added successfully",
        employee=EmployeeResponse.model_validate(record),
    )


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    service: DirectoryService = Depends(get_directory_service),
    ctx: RequestContext = Depends(require_context),
):
    """Get one employee."""
    record = await service.get_employee(EmployeeId(employee_id))
    return EmployeeResponse.model_validate(record)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: UUID,
    body: EmployeeUpdate,
    service: DirectoryService = Depends(get_directory_service),
    ctx: RequestContext = Depends(require_context),
):
    """Apply a partial update; only fields present in the body change."""
    record = await service.update_employee(
        EmployeeId(employee_id), body.model_dump(exclude_unset=True),
    )
    return EmployeeResponse.model_validate(record)


@router.put("/{employee_id}/active", response_model=ToggleActiveResponse)
async def toggle_employee_active(
    employee_id: UUID,
    service: DirectoryService = Depends(get_directory_service),
    ctx: RequestContext = Depends(require_context),
):
    """Flip the active flag."""
    active = await service.toggle_active(EmployeeId(employee_id))
    return ToggleActiveResponse(message="Employee status updated", active=active)


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: UUID,
    service: DirectoryService = Depends(get_directory_service),
    ctx: RequestContext = Depends(require_context),
):
    """Delete an employee permanently."""
    await service.delete_employee(EmployeeId(employee_id))
    logger.info(
        "Employee deleted via API",
        extra={"employee_id": employee_id, "username": ctx.username},
    )
    return MessageResponse(message="Employee deleted successfully")


@router.get("/{employee_id}/image")
async def get_employee_image(
    employee_id: UUID,
    service: DirectoryService = Depends(get_directory_service),
    assets: LocalAssetStore = Depends(get_asset_store),
    ctx: RequestContext = Depends(require_context),
):
    """Stream the stored image for an employee."""
    record = await service.get_employee(EmployeeId(employee_id))
    if not record.image_ref:
        raise ResourceNotFoundError("Image", str(employee_id))
    data = await assets.load(record.image_ref)
    media_type = mimetypes.guess_type(record.image_ref)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)
