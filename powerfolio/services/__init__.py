"""Business logic services"""
from powerfolio.services.user_service import UserService
from powerfolio.services.project_service import ProjectService

__all__ = [
    "UserService",
    "ProjectService",
]
