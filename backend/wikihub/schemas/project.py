# backend/wikihub/schemas/project.py
from datetime import datetime
from typing import Optional
from pydantic import ConfigDict
from .base import BaseSchema, TimestampMixin

class ProjectBase(BaseSchema):
    name: str
    description: Optional[str] = None
    open_state: int = 0

class ProjectCreate(ProjectBase):
    password: Optional[str] = None

class ProjectUpdate(BaseSchema):
    name: Optional[str] = None
    description: Optional[str] = None
    open_state: Optional[int] = None
    password: Optional[str] = None

class Project(ProjectBase, TimestampMixin):
    id: int
    creator_id: int
    modified_at: Optional[datetime] = None

class ProjectParticipation(Project):
    role_type: int
    member_count: int = 0

class ProjectSnapshot(BaseSchema):
    """Cached projection of a project row; never written back"""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    description: Optional[str] = None
    open_state: int
    password: Optional[str] = None
    creator_id: int
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

class ProjectPermissions(BaseSchema):
    project_id: int
    can_view: bool
    can_edit: bool
    membership: str
