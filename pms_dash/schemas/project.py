from typing import List, Optional

from pydantic import Field, field_validator

from pms_dash.models.enums import MilestoneStatus, ProjectCategory, ProjectStatus
from pms_dash.schemas.base import CamelModel


class Milestone(CamelModel):
    id: str
    title: str
    due_date: str  # ISO date (YYYY-MM-DD)
    status: MilestoneStatus = MilestoneStatus.PENDING
    completed_date: Optional[str] = None


# Shared properties
class ProjectBase(CamelModel):
    name: str = Field(min_length=1)
    category: ProjectCategory
    total_budget: float = Field(default=0, ge=0)
    expenditure: float = 0
    status: ProjectStatus = ProjectStatus.ON_TRACK
    description: str = "New project created."
    delay_remarks: Optional[str] = None
    milestones: List[Milestone] = []

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name must not be blank")
        return v


# Properties to receive via API on creation
class ProjectCreate(ProjectBase):
    pass


# Full-record replacement body for PUT
class ProjectUpdate(ProjectBase):
    id: Optional[str] = None


# Properties to return to client
class ProjectRead(ProjectBase):
    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MilestoneCreate(CamelModel):
    title: str
    due_date: Optional[str] = None
