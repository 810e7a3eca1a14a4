"""
Project Model Module

This module defines the Project table: a budgeted piece of work in one of the
fixed categories, tracked by status and an ordered list of milestones.
"""
from typing import List, Optional
from sqlmodel import SQLModel, Field, JSON, Column, AutoString
import uuid

from datetime import datetime

from pms_dash.models.enums import ProjectCategory, ProjectStatus


class Project(SQLModel, table=True):
    """
    Project model with budget, expenditure and milestone tracking.

    Projects are never deleted. Milestones belong exclusively to their project
    and are stored inline as a JSON array; they are only ever written as part
    of a full project update.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each project
        name: Project name/title (required)
        category: One of the four ProjectCategory values
        total_budget: Sanctioned budget, non-negative
        expenditure: Amount spent so far (may exceed the budget)
        status: Current ProjectStatus, "On Track" for new projects
        description: Free-text description
        delay_remarks: Management remarks explaining a delay, if any
        milestones: JSON array of milestone objects (id, title, due_date, status, completed_date)
        owner_id: User who created the project
        created_at: ISO timestamp when the project was created
        updated_at: ISO timestamp when the project was last replaced
    """
    __tablename__ = "projects"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    name: str = Field(nullable=False)
    category: ProjectCategory = Field(sa_type=AutoString, index=True)

    # Budget tracking
    total_budget: float = Field(default=0, ge=0)
    expenditure: float = 0

    status: ProjectStatus = Field(default=ProjectStatus.ON_TRACK, sa_type=AutoString)

    description: str = "New project created."
    delay_remarks: Optional[str] = None

    # Stored as JSON array in database
    milestones: List[dict] = Field(default_factory=list, sa_column=Column(JSON))

    owner_id: Optional[str] = Field(default=None, foreign_key="users.id")

    # Audit timestamps
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())
