# backend/wikihub/api/projects.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from ..config import settings
from ..database import get_db
from ..exceptions import NotFoundError
from ..models.project import Project
from ..schemas.document import TreeEntry
from ..schemas.member import ProjectMember
from ..schemas.project import (
    ProjectCreate, ProjectUpdate, Project as ProjectSchema, ProjectParticipation, ProjectPermissions
)
from ..services import tree
from ..services.projects import project_service
from ..services.visibility import visibility_service
from ..utils.logging import api_logger
from .deps import get_member_id, get_project_password, require_member_id

router = APIRouter(prefix="/api/projects", tags=["projects"])


def ensure_viewable(db: Session, project_id: int, member_id: Optional[int], password: Optional[str]) -> None:
    if visibility_service.cache.get(db, project_id) is None:
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise NotFoundError("Project not found")

    if not visibility_service.can_view(db, project_id, member_id, password):
        api_logger.warning("Project view denied", extra={
            "project_id": project_id,
            "member_id": member_id
        })
        raise HTTPException(status_code=403, detail="Not allowed to view this project")


def ensure_owner(db: Session, project_id: int, member_id: int) -> Project:
    project = db.get(Project, project_id)
    if not project:
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise NotFoundError("Project not found")

    if not visibility_service.is_owner(db, project_id, member_id):
        api_logger.warning("Project owner check failed", extra={
            "project_id": project_id,
            "member_id": member_id
        })
        raise HTTPException(status_code=403, detail="Only the project owner may do this")
    return project


@router.get("", response_model=List[ProjectSchema])
async def list_projects(
        page: int = Query(1, ge=1),
        page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
        member_id: Optional[int] = Depends(get_member_id),
        db: Session = Depends(get_db)
):
    """List projects visible to the caller"""
    api_logger.info("Listing projects", extra={"member_id": member_id, "page": page})

    projects = project_service.list_viewable(db, member_id, page, page_size)
    api_logger.info(f"Found {len(projects)} projects")
    return projects


@router.get("/participation", response_model=List[ProjectParticipation])
async def list_participation(
        page: int = Query(1, ge=1),
        page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
        member_id: int = Depends(require_member_id),
        db: Session = Depends(get_db)
):
    """List projects the caller belongs to"""
    api_logger.info("Listing participation projects", extra={"member_id": member_id, "page": page})
    return project_service.list_participation(db, member_id, page, page_size)


@router.get("/{project_id}", response_model=ProjectSchema)
async def get_project(
        project_id: int,
        member_id: Optional[int] = Depends(get_member_id),
        password: Optional[str] = Depends(get_project_password),
        db: Session = Depends(get_db)
):
    api_logger.info("Fetching project", extra={"project_id": project_id, "member_id": member_id})

    ensure_viewable(db, project_id, member_id, password)
    return db.get(Project, project_id)


@router.post("", response_model=ProjectSchema)
async def create_project(
        project: ProjectCreate,
        member_id: int = Depends(require_member_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Creating new project", extra={"project_name": project.name, "member_id": member_id})

    db_project = Project(**project.model_dump(), creator_id=member_id, modified_by=member_id)
    project_service.create_or_update(db, db_project)
    db.refresh(db_project)

    api_logger.info("Project created successfully", extra={
        "project_id": db_project.id,
        "project_name": db_project.name
    })
    return db_project


@router.put("/{project_id}", response_model=ProjectSchema)
async def update_project(
        project_id: int,
        project: ProjectUpdate,
        member_id: int = Depends(require_member_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Updating project", extra={
        "project_id": project_id,
        "update_fields": list(project.model_dump(exclude_unset=True).keys())
    })

    db_project = ensure_owner(db, project_id, member_id)
    for field, value in project.model_dump(exclude_unset=True).items():
        setattr(db_project, field, value)
    db_project.modified_by = member_id

    project_service.create_or_update(db, db_project)
    db.refresh(db_project)

    api_logger.info("Project updated successfully", extra={"project_id": project_id})
    return db_project


@router.delete("/{project_id}")
async def delete_project(
        project_id: int,
        member_id: int = Depends(require_member_id),
        db: Session = Depends(get_db)
):
    api_logger.info("Deleting project", extra={"project_id": project_id, "member_id": member_id})

    ensure_owner(db, project_id, member_id)
    project_service.delete_by_project_id(db, project_id)

    api_logger.info(f"Successfully deleted project {project_id}")
    return {"success": True}


@router.get("/{project_id}/members", response_model=List[ProjectMember])
async def list_project_members(
        project_id: int,
        member_id: Optional[int] = Depends(get_member_id),
        password: Optional[str] = Depends(get_project_password),
        db: Session = Depends(get_db)
):
    ensure_viewable(db, project_id, member_id, password)
    return project_service.list_members(db, project_id)


@router.get("/{project_id}/tree", response_model=List[TreeEntry])
async def get_project_tree(
        project_id: int,
        member_id: Optional[int] = Depends(get_member_id),
        password: Optional[str] = Depends(get_project_password),
        db: Session = Depends(get_db)
):
    """Document tree as parent pointers for jsTree"""
    ensure_viewable(db, project_id, member_id, password)
    return tree.project_tree(db, project_id)


@router.get("/{project_id}/navigation", response_class=HTMLResponse)
async def get_project_navigation(
        project_id: int,
        selected_id: int = Query(0, ge=0),
        member_id: Optional[int] = Depends(get_member_id),
        password: Optional[str] = Depends(get_project_password),
        db: Session = Depends(get_db)
):
    """Document navigation markup with the selected document's path expanded"""
    ensure_viewable(db, project_id, member_id, password)
    return HTMLResponse(content=tree.project_navigation_html(db, project_id, selected_id))


@router.get("/{project_id}/permissions", response_model=ProjectPermissions)
async def get_project_permissions(
        project_id: int,
        member_id: Optional[int] = Depends(get_member_id),
        password: Optional[str] = Depends(get_project_password),
        db: Session = Depends(get_db)
):
    if visibility_service.cache.get(db, project_id) is None:
        raise NotFoundError("Project not found")

    return ProjectPermissions(
        project_id=project_id,
        can_view=visibility_service.can_view(db, project_id, member_id, password),
        can_edit=visibility_service.can_edit(db, project_id, member_id),
        membership=visibility_service.membership(db, project_id, member_id).value
    )
