"""
Project Endpoints Module

This module provides the project REST contract used by the dashboard: list,
read, create and full-record replace. Projects are never deleted. Milestone
sub-resources apply the milestone workflow server-side and commit each step.
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from pms_dash.db.session import get_db
from pms_dash.models.enums import ProjectCategory
from pms_dash.models.project import Project
from pms_dash.models.user import User
from pms_dash.schemas.project import (
    MilestoneCreate, ProjectCreate, ProjectRead, ProjectUpdate
)
from pms_dash.services import milestones as milestone_workflow
from pms_dash.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_project_or_404(db: Session, project_id: str) -> Project:
    project = db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _store(db: Session, project: Project, data: ProjectRead) -> Project:
    """Write a workflow result back onto the row and commit."""
    payload = data.model_dump(mode="json", exclude={"id", "created_at", "updated_at"})
    for key, value in payload.items():
        setattr(project, key, value)
    project.updated_at = datetime.utcnow().isoformat()
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@router.get("", response_model=List[ProjectRead])
def list_projects(
    category: Optional[ProjectCategory] = None,
    skip: int = 0,
    limit: int = 500,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Retrieve the project working set, optionally restricted to one category.

    All approved users see all projects; the dashboard is portfolio-wide.
    """
    statement = select(Project)
    if category is not None:
        statement = statement.where(Project.category == category)
    statement = statement.order_by(Project.created_at).offset(skip).limit(limit)
    return db.exec(statement).all()


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    return _get_project_or_404(db, project_id)


@router.post("", response_model=ProjectRead, status_code=201)
def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Create a new project. The server assigns the id.

    Returns:
        ProjectRead: The stored project, including its id
    """
    project = Project(**project_in.model_dump(mode="json"), owner_id=current_user.id)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Project %s (%s) created by %s", project.id, project.name, current_user.employee_code)
    return project


@router.put("/{project_id}", response_model=ProjectRead)
def replace_project(
    project_id: str,
    project_in: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Replace a project record in full. The id in the path wins over any id in the body.

    Raises:
        HTTPException 404: If the project doesn't exist
    """
    project = _get_project_or_404(db, project_id)
    payload = project_in.model_dump(mode="json", exclude={"id"})
    for key, value in payload.items():
        setattr(project, key, value)
    project.updated_at = datetime.utcnow().isoformat()

    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Project %s updated by %s", project.id, current_user.employee_code)
    return project


@router.post("/{project_id}/milestones", response_model=ProjectRead, status_code=201)
def add_milestone(
    project_id: str,
    milestone_in: MilestoneCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    project = _get_project_or_404(db, project_id)
    updated = milestone_workflow.add_milestone(
        ProjectRead.model_validate(project), milestone_in.title, milestone_in.due_date
    )
    return _store(db, project, updated)


@router.post("/{project_id}/milestones/{milestone_id}/toggle", response_model=ProjectRead)
def toggle_milestone(
    project_id: str,
    milestone_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Advance a milestone Pending -> In Progress -> Completed -> Pending.

    Raises:
        HTTPException 404: If the project or the milestone doesn't exist
    """
    project = _get_project_or_404(db, project_id)
    current = ProjectRead.model_validate(project)
    if not any(m.id == milestone_id for m in current.milestones):
        raise HTTPException(status_code=404, detail="Milestone not found")
    return _store(db, project, milestone_workflow.toggle_milestone_status(current, milestone_id))


@router.delete("/{project_id}/milestones/{milestone_id}", response_model=ProjectRead)
def remove_milestone(
    project_id: str,
    milestone_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Remove a milestone and return the updated project.

    Raises:
        HTTPException 404: If the project or the milestone doesn't exist
    """
    project = _get_project_or_404(db, project_id)
    current = ProjectRead.model_validate(project)
    remaining = milestone_workflow.remove_milestone(current, milestone_id)
    if remaining is current:
        raise HTTPException(status_code=404, detail="Milestone not found")
    logger.info("Milestone %s removed from %s by %s", milestone_id, project_id, current_user.employee_code)
    return _store(db, project, remaining)
