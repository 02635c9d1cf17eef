# backend/wikihub/services/visibility.py
import enum
from typing import Optional

from sqlalchemy.orm import Session

from ..models import ProjectState, Relationship, RoleType
from ..utils.logging import service_logger
from .cache import ProjectCache, project_cache


class Membership(str, enum.Enum):
    NONE = "none"
    OWNER = "owner"
    PARTICIPANT = "participant"


class VisibilityService:
    """Decides what a caller may do with a project"""

    def __init__(self, cache: ProjectCache = project_cache):
        self.cache = cache

    def can_view(
            self,
            db: Session,
            project_id: Optional[int],
            member_id: Optional[int] = None,
            password: Optional[str] = None
    ) -> bool:
        """Check whether the caller may read the project's documents.

        Public projects are open to everyone. A matching password (compared
        ignoring case) opens a password protected project before any
        relationship lookup. Otherwise the caller must be the creator or hold
        a relationship with the project.
        """
        project = self.cache.get(db, project_id)
        if project is None:
            return False

        if project.open_state == ProjectState.PUBLIC:
            return True

        if (password and project.open_state == ProjectState.PASSWORD_PROTECTED
                and project.password is not None
                and password.lower() == project.password.lower()):
            return True

        if member_id:
            if project.creator_id == member_id:
                return True
            return self._find_relationship(db, project_id, member_id) is not None

        return False

    def can_edit(self, db: Session, project_id: Optional[int], member_id: Optional[int]) -> bool:
        """Any relationship, owner or participant, grants edit rights"""
        if not project_id or not member_id:
            return False
        return self._find_relationship(db, project_id, member_id) is not None

    def membership(self, db: Session, project_id: Optional[int], member_id: Optional[int]) -> Membership:
        if not project_id or not member_id:
            return Membership.NONE

        relationship = self._find_relationship(db, project_id, member_id)
        if relationship is None:
            return Membership.NONE
        if relationship.role_type == RoleType.OWNER:
            return Membership.OWNER
        return Membership.PARTICIPANT

    def is_owner(self, db: Session, project_id: Optional[int], member_id: Optional[int]) -> bool:
        return self.membership(db, project_id, member_id) is Membership.OWNER

    def is_partner(self, db: Session, project_id: Optional[int], member_id: Optional[int]) -> bool:
        return self.membership(db, project_id, member_id) is Membership.PARTICIPANT

    @staticmethod
    def _find_relationship(db: Session, project_id: int, member_id: int) -> Optional[Relationship]:
        relationship = db.query(Relationship) \
            .filter(Relationship.project_id == project_id, Relationship.member_id == member_id) \
            .first()
        service_logger.debug("Relationship lookup", extra={
            "project_id": project_id,
            "member_id": member_id,
            "found": relationship is not None
        })
        return relationship


visibility_service = VisibilityService()
