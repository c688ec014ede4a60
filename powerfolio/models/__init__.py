"""Database models"""
from powerfolio.models.base import Base
from powerfolio.models.user import User, UserRole
from powerfolio.models.project import Project, ProjectStatus, ProjectCategory

__all__ = ["Base", "User", "UserRole", "Project", "ProjectStatus", "ProjectCategory"]
