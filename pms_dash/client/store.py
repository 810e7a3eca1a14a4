"""
Client-side project working set.

ProjectStore owns the list of projects the dashboard shows and keeps it in
step with the backend. Writes follow update-then-merge: local state only
changes after the backend has accepted the call, so a failure never leaves
the working set ahead of the server.
"""
import logging
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator

from pms_dash.client.api import BackendClient
from pms_dash.core.exceptions import BackendUnavailable, ValidationFailed
from pms_dash.models.enums import ProjectCategory, ProjectStatus
from pms_dash.schemas.base import CamelModel
from pms_dash.schemas.project import ProjectCreate, ProjectRead
from pms_dash.services import milestones as milestone_workflow

logger = logging.getLogger(__name__)


class NewProjectForm(CamelModel):
    """The create-project prompt: a category, a name and a budget."""
    category: ProjectCategory
    name: str
    budget: float = Field(ge=0)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v

    @classmethod
    def parse(cls, category, name, budget) -> "NewProjectForm":
        """
        Validate raw prompt input.

        Raises:
            ValidationFailed: With the first offending field.
        """
        try:
            return cls(category=category, name=name, budget=budget)
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else None
            raise ValidationFailed(error["msg"], field=field) from e

    def to_project(self) -> ProjectCreate:
        return ProjectCreate(
            name=self.name,
            category=self.category,
            total_budget=self.budget,
            expenditure=0,
            status=ProjectStatus.ON_TRACK,
            milestones=[],
        )


class ProjectStore:
    """
    Working set of projects backed by the REST API.

    Attributes:
        projects: Last successfully loaded or written projects
        offline: True after a failed load, until the next successful one
        last_error: Message of the most recent failure, for the banner
    """

    def __init__(self, client: BackendClient):
        self.client = client
        self.projects: List[ProjectRead] = []
        self.offline = False
        self.last_error: Optional[str] = None

    def _fail(self, e: BackendUnavailable, action: str) -> None:
        self.last_error = e.message
        logger.warning("Project %s failed: %s", action, e.message)

    def load(self) -> List[ProjectRead]:
        """
        Fetch all projects.

        A failure sets ``offline`` and keeps whatever was loaded last, so the
        dashboard stays usable. It is not raised.
        """
        try:
            body = self.client.get("projects")
        except BackendUnavailable as e:
            self._fail(e, "load")
            self.offline = True
            return self.projects

        self.projects = [ProjectRead.model_validate(p) for p in body or []]
        self.offline = False
        self.last_error = None
        return self.projects

    def get(self, project_id: str) -> Optional[ProjectRead]:
        return next((p for p in self.projects if p.id == project_id), None)

    def by_category(self, category: ProjectCategory) -> List[ProjectRead]:
        return [p for p in self.projects if p.category == category]

    def create(self, category, name, budget) -> ProjectRead:
        """
        Create a project from prompt input and append the server's record.

        Raises:
            ValidationFailed: Blank name, negative or non-numeric budget, unknown category
            BackendUnavailable: The backend rejected or missed the call
        """
        form = NewProjectForm.parse(category, name, budget)
        try:
            body = self.client.post("projects", form.to_project().to_wire())
        except BackendUnavailable as e:
            self._fail(e, "create")
            raise

        if not body:
            error = BackendUnavailable("Backend returned no project")
            self._fail(error, "create")
            raise error

        created = ProjectRead.model_validate(body)
        self.projects = [*self.projects, created]
        self.last_error = None
        logger.info("Created project %s (%s)", created.id, created.name)
        return created

    def update(self, project: ProjectRead) -> ProjectRead:
        """
        Replace a project on the backend, then merge the result by id.

        The server's body wins when one is returned; a 2xx without a body
        merges the caller's copy.

        Raises:
            BackendUnavailable: Local state is left unchanged
        """
        try:
            body = self.client.put(f"projects/{project.id}", project.to_wire())
        except BackendUnavailable as e:
            self._fail(e, "update")
            raise

        stored = ProjectRead.model_validate(body) if body else project
        self.projects = [stored if p.id == stored.id else p for p in self.projects]
        self.last_error = None
        return stored

    def _require(self, project_id: str) -> ProjectRead:
        project = self.get(project_id)
        if project is None:
            raise ValidationFailed(f"Unknown project: {project_id}", field="id")
        return project

    def add_milestone(self, project_id: str, title: str, due_date: Optional[str] = None) -> ProjectRead:
        project = self._require(project_id)
        return self.update(milestone_workflow.add_milestone(project, title, due_date))

    def toggle_milestone(self, project_id: str, milestone_id: str) -> ProjectRead:
        project = self._require(project_id)
        toggled = milestone_workflow.toggle_milestone_status(project, milestone_id)
        if toggled is project:
            return project
        return self.update(toggled)

    def remove_milestone(self, project_id: str, milestone_id: str) -> ProjectRead:
        project = self._require(project_id)
        remaining = milestone_workflow.remove_milestone(project, milestone_id)
        if remaining is project:
            return project
        return self.update(remaining)

    def save_remarks(self, project_id: str, remarks: Optional[str]) -> ProjectRead:
        project = self._require(project_id)
        return self.update(milestone_workflow.update_remarks(project, remarks))
