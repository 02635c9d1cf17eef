# backend/wikihub/services/projects.py
import time
from typing import List, Optional

from sqlalchemy import exists, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import (
    NotFoundError, PersistenceError, ValidationError,
    PROJECT_DESCRIPTION_LENGTH, PROJECT_NAME_LENGTH, PROJECT_OPEN_STATE, PROJECT_PASSWORD_LENGTH
)
from ..models import Document, DocumentHistory, Member, Project, ProjectState, Relationship, RoleType
from ..utils.logging import service_logger
from .cache import ProjectCache, project_cache

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 1000
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 20


class ProjectService:
    """Creates, updates, deletes and lists projects"""

    def __init__(self, cache: ProjectCache = project_cache):
        self.cache = cache

    @staticmethod
    def validate(project: Project) -> None:
        """Check field constraints and clear the password of non protected projects"""
        name = project.name or ""
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise ValidationError("Project name must be between 2 and 50 characters", PROJECT_NAME_LENGTH)

        if len(project.description or "") > DESCRIPTION_MAX_LENGTH:
            raise ValidationError("Project description cannot exceed 1000 characters", PROJECT_DESCRIPTION_LENGTH)

        if project.open_state not in {state.value for state in ProjectState}:
            raise ValidationError("Invalid project open state", PROJECT_OPEN_STATE)

        if project.open_state == ProjectState.PASSWORD_PROTECTED:
            if not PASSWORD_MIN_LENGTH <= len(project.password or "") <= PASSWORD_MAX_LENGTH:
                raise ValidationError("Project password must be between 6 and 20 characters", PROJECT_PASSWORD_LENGTH)
        else:
            project.password = None

    def create_or_update(self, db: Session, project: Project) -> bool:
        """Validate and persist a project.

        A project without an id is new: its creator is recorded as owner in the
        same transaction that inserts the project row.
        """
        self.validate(project)

        is_new = not project.id
        service_logger.info("Saving project", extra={
            "project_id": project.id,
            "project_name": project.name,
            "is_new": is_new
        })

        try:
            owner = None
            if is_new:
                project.id = None
                owner = Relationship(member_id=project.creator_id, role_type=RoleType.OWNER)

            db.add(project)
            db.flush()

            if owner is not None:
                owner.project_id = project.id
                db.add(owner)

            project_id = project.id
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            service_logger.error("Failed to save project", extra={
                "project_name": project.name,
                "is_new": is_new,
                "error": str(e)
            })
            raise PersistenceError(str(e)) from e
        except Exception:
            db.rollback()
            raise

        self.cache.invalidate(project_id)
        service_logger.info("Project saved", extra={"project_id": project_id, "is_new": is_new})
        return True

    def delete_by_project_id(self, db: Session, project_id: Optional[int]) -> bool:
        """Delete a project with its documents, their history and its relationships"""
        project = db.get(Project, project_id) if project_id else None
        if project is None:
            service_logger.warning("Project not found for deletion", extra={"project_id": project_id})
            raise NotFoundError("Project not found")

        start_time = time.time()
        try:
            doc_ids = [row.id for row in db.query(Document.id).filter(Document.project_id == project_id).all()]

            if doc_ids:
                db.query(DocumentHistory) \
                    .filter(DocumentHistory.document_id.in_(doc_ids)) \
                    .delete(synchronize_session=False)
                db.query(Document) \
                    .filter(Document.project_id == project_id) \
                    .delete(synchronize_session=False)

            db.query(Relationship) \
                .filter(Relationship.project_id == project_id) \
                .delete(synchronize_session=False)
            db.delete(project)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            service_logger.error("Failed to delete project", extra={
                "project_id": project_id,
                "error": str(e)
            })
            raise PersistenceError(str(e)) from e
        except Exception:
            db.rollback()
            raise

        self.cache.invalidate(project_id)
        service_logger.info("Project deleted", extra={
            "project_id": project_id,
            "document_count": len(doc_ids),
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })
        return True

    @staticmethod
    def list_viewable(
            db: Session,
            member_id: Optional[int] = None,
            page: int = 1,
            page_size: int = settings.DEFAULT_PAGE_SIZE
    ) -> List[Project]:
        """Projects the caller may browse, newest first.

        Public and password protected projects are listed for everyone; private
        ones only for their creator and members.
        """
        listed = or_(
            Project.open_state == ProjectState.PUBLIC,
            Project.open_state == ProjectState.PASSWORD_PROTECTED
        )
        if member_id:
            is_member = exists().where(
                Relationship.project_id == Project.id,
                Relationship.member_id == member_id
            )
            listed = or_(listed, Project.creator_id == member_id, is_member)

        return db.query(Project) \
            .filter(listed) \
            .order_by(Project.id.desc()) \
            .offset(_offset(page, page_size)) \
            .limit(page_size) \
            .all()

    @staticmethod
    def list_participation(
            db: Session,
            member_id: int,
            page: int = 1,
            page_size: int = settings.DEFAULT_PAGE_SIZE
    ) -> List[dict]:
        """Projects the member belongs to, with the member's role and the member count"""
        rows = db.query(Project, Relationship.role_type) \
            .join(Relationship, Relationship.project_id == Project.id) \
            .filter(Relationship.member_id == member_id) \
            .order_by(Project.id.desc()) \
            .offset(_offset(page, page_size)) \
            .limit(page_size) \
            .all()
        if not rows:
            return []

        project_ids = [project.id for project, _ in rows]
        counts = dict(
            db.query(Relationship.project_id, func.count(Relationship.id))
            .filter(Relationship.project_id.in_(project_ids))
            .group_by(Relationship.project_id)
            .all()
        )

        result = []
        for project, role_type in rows:
            result.append({
                "id": project.id,
                "name": project.name,
                "description": project.description,
                "open_state": project.open_state,
                "creator_id": project.creator_id,
                "created_at": project.created_at,
                "modified_at": project.modified_at,
                "role_type": role_type,
                "member_count": counts.get(project.id, 0)
            })
        return result

    @staticmethod
    def list_members(db: Session, project_id: int) -> List[dict]:
        rows = db.query(
            Relationship.member_id,
            Relationship.role_type,
            Member.account,
            Member.nickname,
            Member.email,
            Member.avatar_url
        ) \
            .outerjoin(Member, Member.id == Relationship.member_id) \
            .filter(Relationship.project_id == project_id) \
            .order_by(Relationship.id.desc()) \
            .all()
        return [dict(row._mapping) for row in rows]


def _offset(page: int, page_size: int) -> int:
    return max(page - 1, 0) * page_size


project_service = ProjectService()
