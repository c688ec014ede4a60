"""User profile endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from powerfolio.database import get_db
from powerfolio.api.deps import get_active_user
from powerfolio.core.logging_config import get_logger
from powerfolio.models.user import User
from powerfolio.schemas.project import ProfileResponse, ProjectResponse
from powerfolio.schemas.user import ProfileUpdate, UserEnvelope, UserPublic
from powerfolio.services.project_service import ProjectService
from powerfolio.services.user_service import UserService

logger = get_logger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Current user's profile with all of their projects, whatever the status"""
    projects = await ProjectService(db).list_by_author(current_user.id)
    return ProfileResponse(
        user=UserPublic.model_validate(current_user),
        projects=[ProjectResponse.model_validate(p) for p in projects]
    )


@router.put("/profile", response_model=UserEnvelope)
async def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Update the caller's own profile fields"""
    user = await UserService(db).update_profile(current_user, payload)
    return UserEnvelope(user=UserPublic.model_validate(user))


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Public profile with approved projects only"""
    user = await UserService(db).get_or_404(user_id)
    projects = await ProjectService(db).list_by_author(user.id, approved_only=True)
    return ProfileResponse(
        user=UserPublic.model_validate(user),
        projects=[ProjectResponse.model_validate(p) for p in projects]
    )
