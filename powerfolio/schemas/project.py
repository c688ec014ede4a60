"""Project schemas"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from powerfolio.models.project import ProjectCategory, ProjectStatus
from powerfolio.schemas.user import UserPublic


class ProjectCreate(BaseModel):
    """Project submission request"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    tech_stack: List[str] = Field(default_factory=list)
    github: str = Field(..., min_length=1, max_length=512)
    live_link: Optional[str] = Field(None, max_length=512)
    thumbnail: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    category: ProjectCategory = ProjectCategory.WEB


class ProjectUpdate(BaseModel):
    """Generic project update.

    Unknown keys are kept in ``model_extra`` so the service can refuse
    moderation-owned fields by name instead of silently dropping them.
    """
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    tech_stack: Optional[List[str]] = None
    github: Optional[str] = Field(None, min_length=1, max_length=512)
    live_link: Optional[str] = Field(None, max_length=512)
    thumbnail: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    category: Optional[ProjectCategory] = None


class RejectRequest(BaseModel):
    """Reject request; the reason may be empty or null"""
    reason: Optional[str] = ""


class ProjectResponse(BaseModel):
    """Project response"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    tech_stack: List[str]
    github: str
    live_link: Optional[str] = None
    thumbnail: str
    tags: List[str]
    category: ProjectCategory
    author_id: UUID
    status: ProjectStatus
    rejection_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[UUID] = None
    views: int
    created_at: datetime
    updated_at: datetime


class AuthorSummary(BaseModel):
    """Who wrote a listed project"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar: Optional[str] = None


class AdminAuthorSummary(AuthorSummary):
    email: str


class ProjectListItem(ProjectResponse):
    author: AuthorSummary


class AdminProjectListItem(ProjectResponse):
    author: AdminAuthorSummary


class ProjectEnvelope(BaseModel):
    success: bool = True
    project: ProjectResponse


class ProjectListResponse(BaseModel):
    """List of projects response"""
    success: bool = True
    total: int
    projects: List[ProjectListItem]


class AdminProjectListResponse(BaseModel):
    """Moderation queue listing; authors include their email"""
    success: bool = True
    total: int
    projects: List[AdminProjectListItem]


class ProfileResponse(BaseModel):
    """A user together with their projects"""
    success: bool = True
    user: UserPublic
    projects: List[ProjectResponse]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class AnalyticsResponse(BaseModel):
    success: bool = True
    analytics: Dict[str, Any]
