"""Authentication schemas"""
from pydantic import BaseModel, EmailStr, Field
from powerfolio.schemas.user import UserPublic


class UserRegister(BaseModel):
    """User registration request"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    """User login request"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Token plus the authenticated user's public projection"""
    success: bool = True
    token: str
    user: UserPublic
