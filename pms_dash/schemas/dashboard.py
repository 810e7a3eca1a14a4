from typing import Dict, List, Optional

from pms_dash.models.enums import ProjectCategory, ProjectStatus
from pms_dash.schemas.base import CamelModel


class CategoryRollup(CamelModel):
    category: ProjectCategory
    project_count: int = 0
    total_budget: float = 0
    total_expenditure: float = 0
    utilization: int = 0


class DashboardSummary(CamelModel):
    """Portfolio (or single-category) metrics shown on the dashboard KPIs."""
    category: Optional[ProjectCategory] = None
    project_count: int = 0
    total_budget: float = 0
    total_expenditure: float = 0
    utilization: int = 0
    on_track_count: int = 0
    status_histogram: Dict[ProjectStatus, int] = {}
    categories: List[CategoryRollup] = []
