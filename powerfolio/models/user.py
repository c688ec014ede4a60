"""User model"""
from sqlalchemy import Boolean, Column, Enum, Integer, String, Text
from sqlalchemy.orm import deferred
import enum
from powerfolio.models.base import BaseModel


class UserRole(str, enum.Enum):
    """User role enumeration"""
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """User model"""
    __tablename__ = "users"
    
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Only loaded through UserService.find_by_email_with_secret
    hashed_password = deferred(Column(String(255), nullable=False))
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    
    bio = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    avatar = Column(Text, nullable=True)
    website = Column(String(512), nullable=True)
    github = Column(String(512), nullable=True)
    linkedin = Column(String(512), nullable=True)
    twitter = Column(String(512), nullable=True)
    
    project_count = Column(Integer, default=0, nullable=False)
    
    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role}, active={self.is_active})>"
