"""
Milestone workflow.

Each operation takes a project and returns an updated copy; the input is never
mutated. Persisting the result is the caller's job (ProjectStore.update on the
client, a commit in the project endpoints on the backend).
"""
import uuid
from datetime import date
from typing import Optional

from pms_dash.core.exceptions import ValidationFailed
from pms_dash.models.enums import MilestoneStatus
from pms_dash.schemas.project import Milestone, ProjectRead


def _iso(day: Optional[date]) -> str:
    return (day or date.today()).isoformat()


def add_milestone(
    project: ProjectRead,
    title: str,
    due_date: Optional[str] = None,
    today: Optional[date] = None,
) -> ProjectRead:
    """
    Append a new Pending milestone.

    Args:
        project: Project to extend
        title: Milestone title; surrounding whitespace is stripped
        due_date: ISO due date, defaults to today
        today: Override for the current date

    Raises:
        ValidationFailed: If the title is blank
    """
    title = (title or "").strip()
    if not title:
        raise ValidationFailed("Milestone title is required", field="title")

    milestone = Milestone(
        id=str(uuid.uuid4()),
        title=title,
        due_date=due_date or _iso(today),
        status=MilestoneStatus.PENDING,
    )
    return project.model_copy(update={"milestones": [*project.milestones, milestone]})


def toggle_milestone_status(
    project: ProjectRead,
    milestone_id: str,
    today: Optional[date] = None,
) -> ProjectRead:
    """
    Advance one milestone to its next status.

    The completion date is set when the milestone enters Completed and cleared
    on every other transition. An unknown milestone id leaves the project as is.
    """
    if not any(m.id == milestone_id for m in project.milestones):
        return project

    milestones = []
    for m in project.milestones:
        if m.id == milestone_id:
            next_status = m.status.next()
            m = m.model_copy(update={
                "status": next_status,
                "completed_date": _iso(today) if next_status is MilestoneStatus.COMPLETED else None,
            })
        milestones.append(m)
    return project.model_copy(update={"milestones": milestones})


def remove_milestone(project: ProjectRead, milestone_id: str) -> ProjectRead:
    """Drop one milestone. An unknown milestone id leaves the project as is."""
    remaining = [m for m in project.milestones if m.id != milestone_id]
    if len(remaining) == len(project.milestones):
        return project
    return project.model_copy(update={"milestones": remaining})


def update_remarks(project: ProjectRead, remarks: Optional[str]) -> ProjectRead:
    remarks = (remarks or "").strip() or None
    return project.model_copy(update={"delay_remarks": remarks})
