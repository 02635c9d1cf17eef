# backend/wikihub/models/__init__.py
from ..database import Base
from .member import Member
from .project import Project, ProjectState
from .relationship import Relationship, RoleType
from .document import Document
from .document_history import DocumentHistory

__all__ = [
    "Base",
    "Member",
    "Project",
    "ProjectState",
    "Relationship",
    "RoleType",
    "Document",
    "DocumentHistory"
]
