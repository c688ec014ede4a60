"""API routes"""
from powerfolio.api.v1 import admin, auth, projects, users

__all__ = ["admin", "auth", "projects", "users"]
