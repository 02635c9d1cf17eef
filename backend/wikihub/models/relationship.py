# backend/wikihub/models/relationship.py
import enum

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from ..database import Base


class RoleType(enum.IntEnum):
    PARTICIPANT = 0
    OWNER = 1


class Relationship(Base):
    """Membership of a member in a project"""
    __tablename__ = "relationships"
    __table_args__ = (
        UniqueConstraint("project_id", "member_id", name="uq_relationship_project_member"),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    role_type = Column(Integer, nullable=False, default=RoleType.PARTICIPANT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
