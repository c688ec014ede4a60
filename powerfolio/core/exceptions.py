"""Custom exception classes"""
from typing import Any, List, Optional
from uuid import UUID
from fastapi import HTTPException, status


class PortfolioException(HTTPException):
    """Base exception for the PowerFolio API"""
    pass


class ValidationException(PortfolioException):
    """Raised when request input is missing or malformed"""
    def __init__(self, detail: str, errors: Optional[List[Any]] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
        self.errors = errors or []


class EmailAlreadyRegisteredException(ValidationException):
    """Raised when registering an email that already has an account"""
    def __init__(self):
        super().__init__(
            "User already exists with this email",
            errors=[{"field": "email", "message": "already registered"}]
        )


class UnauthorizedException(PortfolioException):
    """Raised when the request carries no usable session"""
    def __init__(self, detail: str = "Not authorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenException(PortfolioException):
    """Raised when user lacks required permissions"""
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class AccountDeactivatedException(ForbiddenException):
    """Raised when an administratively suspended account is used"""
    def __init__(self):
        super().__init__(
            "Your account has been deactivated. Please contact the administrator."
        )


class NotFoundException(PortfolioException):
    """Raised when a resource id does not resolve"""
    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )


class ProjectNotFoundException(NotFoundException):
    """Raised when project is not found"""
    def __init__(self, project_id: UUID):
        super().__init__(f"Project with ID {project_id} not found")


class UserNotFoundException(NotFoundException):
    """Raised when user is not found"""
    def __init__(self, user_id: UUID):
        super().__init__(f"User with ID {user_id} not found")


class InvalidTransitionException(PortfolioException):
    """Raised when a moderation action does not apply to the project's current status"""
    def __init__(self, current: str, target: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot move project from '{current}' to '{target}'"
        )
