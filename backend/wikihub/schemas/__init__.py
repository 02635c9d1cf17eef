# backend/wikihub/schemas/__init__.py
from .project import (
    Project, ProjectCreate, ProjectUpdate, ProjectParticipation,
    ProjectSnapshot, ProjectPermissions
)
from .member import ProjectMember
from .document import TreeEntry

__all__ = [
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectParticipation",
    "ProjectSnapshot", "ProjectPermissions",
    "ProjectMember",
    "TreeEntry"
]
