"""
Dashboard view controller.

One DashboardController exists per signed-in session. It owns the navigation
state (which view is shown and what is selected) and routes user actions to
the ProjectStore. Metrics are always computed from the store's working set,
never cached, so they cannot drift from the projects on screen.
"""
import logging
from enum import Enum
from typing import List, Optional

from pms_dash.client.store import NewProjectForm, ProjectStore
from pms_dash.models.enums import ProjectCategory, UserRole
from pms_dash.schemas.dashboard import DashboardSummary
from pms_dash.schemas.project import ProjectRead
from pms_dash.services import aggregation

logger = logging.getLogger(__name__)


class View(str, Enum):
    DASHBOARD = "dashboard"
    CATEGORY_DETAIL = "category_detail"
    PROJECT_DETAIL = "project_detail"


# Landing page per role after login
HOME_PAGES = {
    UserRole.ADMIN: "role-management",
    UserRole.PROJECT_DIRECTOR: "dashboard",
    UserRole.PROGRAMME_DIRECTOR: "programme-dashboard",
    UserRole.CHAIRMAN: "strategic-dashboard",
}


def home_page_for(role) -> str:
    return HOME_PAGES[UserRole(role)]


class DashboardController:
    def __init__(self, store: ProjectStore):
        self.store = store
        self.view = View.DASHBOARD
        self.selected_category: Optional[ProjectCategory] = None
        self.selected_project_id: Optional[str] = None

    def navigate_to_dashboard(self) -> None:
        self.view = View.DASHBOARD
        self.selected_category = None
        self.selected_project_id = None

    def navigate_to_category(self, category) -> None:
        self.view = View.CATEGORY_DETAIL
        self.selected_category = ProjectCategory(category)
        self.selected_project_id = None

    def navigate_to_project(self, project_id: str) -> None:
        project = self.store.get(project_id)
        if project is None:
            logger.warning("Ignoring navigation to unknown project %s", project_id)
            return
        self.view = View.PROJECT_DETAIL
        self.selected_project_id = project.id

    def back(self) -> None:
        """Project detail returns to its category when one is selected, else to the dashboard."""
        if self.view is View.PROJECT_DETAIL and self.selected_category is not None:
            self.view = View.CATEGORY_DETAIL
            self.selected_project_id = None
        else:
            self.navigate_to_dashboard()

    @property
    def selected_project(self) -> Optional[ProjectRead]:
        if self.selected_project_id is None:
            return None
        return self.store.get(self.selected_project_id)

    @property
    def category_projects(self) -> List[ProjectRead]:
        if self.selected_category is None:
            return list(self.store.projects)
        return self.store.by_category(self.selected_category)

    def metrics(self) -> DashboardSummary:
        return aggregation.summarize(self.store.projects, self.selected_category)

    def submit_new_project(self, form: NewProjectForm) -> ProjectRead:
        """Create the project, then open its detail view."""
        created = self.store.create(form.category, form.name, form.budget)
        self.selected_category = created.category
        self.view = View.PROJECT_DETAIL
        self.selected_project_id = created.id
        return created

    def close(self) -> None:
        """Tear down session state on logout."""
        self.navigate_to_dashboard()
        self.store.projects = []
        self.store.client.logout()
