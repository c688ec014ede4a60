"""User schemas"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from powerfolio.models.user import UserRole


class UserPublic(BaseModel):
    """Public projection of a user; never carries the password hash"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: UserRole
    is_active: bool
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    project_count: int = 0
    created_at: datetime


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile"""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserPublic


class UserListResponse(BaseModel):
    success: bool = True
    total: int
    users: List[UserPublic]
