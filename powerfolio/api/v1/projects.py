"""Project endpoints"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from powerfolio.database import get_db
from powerfolio.api.deps import get_active_user, get_optional_user
from powerfolio.core.exceptions import ProjectNotFoundException
from powerfolio.core.logging_config import get_logger
from powerfolio.core.policy import is_owner_or_admin, require_owner_or_admin
from powerfolio.models.project import ProjectStatus
from powerfolio.models.user import User
from powerfolio.schemas.project import (
    MessageResponse,
    ProjectCreate,
    ProjectEnvelope,
    ProjectListItem,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from powerfolio.services.project_service import ProjectService

logger = get_logger(__name__)
router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Public listing of approved projects"""
    logger.debug(f"Listing public projects (search: {search!r}, skip: {skip}, limit: {limit})")
    projects, total = await ProjectService(db).list_public(search=search, skip=skip, limit=limit)
    return ProjectListResponse(
        projects=[ProjectListItem.model_validate(p) for p in projects],
        total=total
    )


@router.post("", response_model=ProjectEnvelope, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Submit a new project for moderation"""
    logger.info(f"Creating project '{project_data.title}' for user {current_user.id}")
    project = await ProjectService(db).create(current_user, project_data)
    return ProjectEnvelope(project=ProjectResponse.model_validate(project))


@router.get("/{project_id}", response_model=ProjectEnvelope)
async def get_project(
    project_id: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a project.

    Approved projects are public and each read counts as a view. Pending or
    rejected projects are visible to their author and to admins only, and
    look like missing projects to everyone else.
    """
    service = ProjectService(db)
    project = await service.get_or_404(project_id)

    if project.status == ProjectStatus.APPROVED:
        project = await service.record_view(project)
    elif viewer is None or not is_owner_or_admin(viewer, project):
        raise ProjectNotFoundException(project_id)

    return ProjectEnvelope(project=ProjectResponse.model_validate(project))


@router.put("/{project_id}", response_model=ProjectEnvelope)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    current_user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a project's content; author or admin only"""
    service = ProjectService(db)
    project = await service.get_or_404(project_id)
    require_owner_or_admin(current_user, project)

    project = await service.update(project, payload)
    return ProjectEnvelope(project=ProjectResponse.model_validate(project))


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    current_user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a project; author or admin only"""
    service = ProjectService(db)
    project = await service.get_or_404(project_id)
    require_owner_or_admin(current_user, project)

    await service.delete(project)
    return MessageResponse(message="Project deleted")
