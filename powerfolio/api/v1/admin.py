"""Admin endpoints for moderation and account management."""
from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from powerfolio.database import get_db
from powerfolio.api.deps import get_current_admin_user
from powerfolio.core.logging_config import get_logger
from powerfolio.models.project import ProjectStatus
from powerfolio.models.user import User
from powerfolio.schemas.project import (
    AnalyticsResponse,
    ProjectEnvelope,
    AdminProjectListItem,
    AdminProjectListResponse,
    ProjectResponse,
    RejectRequest,
)
from powerfolio.schemas.user import UserEnvelope, UserListResponse, UserPublic
from powerfolio.services.analytics import collect_analytics
from powerfolio.services.project_service import ProjectService
from powerfolio.services.user_service import UserService

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/analytics", response_model=AnalyticsResponse)
async def admin_analytics(
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    """Dashboard analytics."""
    return AnalyticsResponse(analytics=await collect_analytics(db))


@router.get("/projects", response_model=AdminProjectListResponse)
async def admin_list_projects(
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    """All projects, optionally narrowed to one moderation status."""
    projects, total = await ProjectService(db).list_all(status=status_filter, skip=skip, limit=limit)
    return AdminProjectListResponse(
        projects=[AdminProjectListItem.model_validate(p) for p in projects],
        total=total
    )


@router.put("/projects/{project_id}/approve", response_model=ProjectEnvelope)
async def admin_approve_project(
    project_id: str,
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProjectService(db)
    project = await service.get_or_404(project_id)
    project = await service.approve(project, current_admin)
    return ProjectEnvelope(project=ProjectResponse.model_validate(project))


@router.put("/projects/{project_id}/reject", response_model=ProjectEnvelope)
async def admin_reject_project(
    project_id: str,
    payload: Optional[RejectRequest] = Body(None),
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProjectService(db)
    project = await service.get_or_404(project_id)
    reason = payload.reason if payload else None
    project = await service.reject(project, current_admin, reason)
    return ProjectEnvelope(project=ProjectResponse.model_validate(project))


@router.get("/users", response_model=UserListResponse)
async def admin_list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    users, total = await UserService(db).list_users(skip=skip, limit=limit)
    return UserListResponse(
        users=[UserPublic.model_validate(u) for u in users],
        total=total
    )


@router.put("/users/{user_id}/deactivate", response_model=UserEnvelope)
async def admin_deactivate_user(
    user_id: str,
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    service = UserService(db)
    user = await service.get_or_404(user_id)
    if user.id == current_admin.id:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own account")
    user = await service.set_active(user, False)
    return UserEnvelope(user=UserPublic.model_validate(user))


@router.put("/users/{user_id}/activate", response_model=UserEnvelope)
async def admin_activate_user(
    user_id: str,
    current_admin: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db)
):
    service = UserService(db)
    user = await service.get_or_404(user_id)
    user = await service.set_active(user, True)
    return UserEnvelope(user=UserPublic.model_validate(user))
