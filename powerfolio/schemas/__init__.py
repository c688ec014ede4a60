"""Pydantic schemas for request/response validation"""
from powerfolio.schemas.auth import UserRegister, UserLogin, AuthResponse
from powerfolio.schemas.user import UserPublic, ProfileUpdate, UserEnvelope, UserListResponse
from powerfolio.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    RejectRequest,
    ProjectResponse,
    ProjectEnvelope,
    ProjectListResponse,
    ProfileResponse,
    MessageResponse,
    AnalyticsResponse,
)

__all__ = [
    # Auth
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    # Users
    "UserPublic",
    "ProfileUpdate",
    "UserEnvelope",
    "UserListResponse",
    # Projects
    "ProjectCreate",
    "ProjectUpdate",
    "RejectRequest",
    "ProjectResponse",
    "ProjectEnvelope",
    "ProjectListResponse",
    "ProfileResponse",
    "MessageResponse",
    "AnalyticsResponse",
]
