from .api import BackendClient
from .controller import DashboardController, View, home_page_for
from .insight import InsightClient, FALLBACK_INSIGHT
from .roles import RoleRequestQueue
from .store import NewProjectForm, ProjectStore

__all__ = [
    "BackendClient",
    "DashboardController", "View", "home_page_for",
    "InsightClient", "FALLBACK_INSIGHT",
    "RoleRequestQueue",
    "NewProjectForm", "ProjectStore",
]
