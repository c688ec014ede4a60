"""Project model"""
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import relationship
import enum
from powerfolio.models.base import BaseModel


class ProjectCategory(str, enum.Enum):
    """Project category enumeration"""
    WEB = "web"
    MOBILE = "mobile"
    AI = "ai"
    DATA = "data"
    OTHER = "other"


class ProjectStatus(str, enum.Enum):
    """Moderation status enumeration"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Project(BaseModel):
    """Project model"""
    __tablename__ = "projects"
    
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    tech_stack = Column(JSON, default=list, nullable=False)  # List of strings
    github = Column(String(512), nullable=False)
    live_link = Column(String(512), nullable=True)
    thumbnail = Column(Text, nullable=False)  # URL or storage reference
    tags = Column(JSON, default=list, nullable=False)  # List of strings
    category = Column(Enum(ProjectCategory), default=ProjectCategory.WEB, nullable=False)
    author_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    views = Column(Integer, default=0, nullable=False)
    
    # Owned by services.moderation
    status = Column(Enum(ProjectStatus), default=ProjectStatus.PENDING, index=True, nullable=False)
    rejection_reason = Column(Text, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    
    # Listings opt in with selectinload; never lazy-loaded
    author = relationship("User", foreign_keys=[author_id], lazy="raise")
    
    def __repr__(self):
        return f"<Project(id={self.id}, title={self.title}, status={self.status})>"
