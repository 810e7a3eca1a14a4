from typing import Optional
from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from pms_dash.db.session import get_db
from pms_dash.models.enums import ProjectCategory
from pms_dash.models.project import Project
from pms_dash.models.user import User
from pms_dash.schemas.dashboard import DashboardSummary
from pms_dash.services import aggregation
from pms_dash.api import deps

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    category: Optional[ProjectCategory] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """
    Portfolio KPIs: totals, utilization, status histogram and category rollups.

    With ``category`` the totals and histogram cover that category only.
    """
    projects = db.exec(select(Project)).all()
    return aggregation.summarize(projects, category)
