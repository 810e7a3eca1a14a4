"""
Portfolio aggregation.

Pure functions that turn a collection of projects into dashboard metrics:
budget and expenditure totals, utilization percentages, status counts and
per-category rollups. They accept anything exposing ``total_budget``,
``expenditure``, ``status`` and ``category`` attributes, so both database rows
and API schemas can be passed in. An empty collection yields zeros everywhere.
"""
import math
from typing import Dict, Iterable, List, Optional, Sequence

from pms_dash.models.enums import ProjectCategory, ProjectStatus
from pms_dash.schemas.dashboard import CategoryRollup, DashboardSummary


def _in_category(projects: Iterable, category: Optional[ProjectCategory]) -> List:
    if category is None:
        return list(projects)
    return [p for p in projects if p.category == category]


def utilization(budget: float, expenditure: float) -> int:
    """
    Percentage of the budget spent, rounded half-up to a whole number.

    Defined as 0 when the budget is 0 so callers never see NaN or infinity.
    """
    if not budget:
        return 0
    return int(math.floor(100 * expenditure / budget + 0.5))


def total_budget(projects: Iterable, category: Optional[ProjectCategory] = None) -> float:
    return sum(p.total_budget for p in _in_category(projects, category))


def total_expenditure(projects: Iterable, category: Optional[ProjectCategory] = None) -> float:
    return sum(p.expenditure for p in _in_category(projects, category))


def project_utilization(project) -> int:
    return utilization(project.total_budget, project.expenditure)


def remaining_budget(project) -> float:
    return max(0, project.total_budget - project.expenditure)


def status_histogram(projects: Iterable) -> Dict[ProjectStatus, int]:
    """Count projects per status; every status is present, zero-filled."""
    counts = {status: 0 for status in ProjectStatus}
    for p in projects:
        counts[ProjectStatus(p.status)] += 1
    return counts


def category_rollups(projects: Sequence) -> List[CategoryRollup]:
    """One rollup per fixed category, in declaration order."""
    rollups = []
    for category in ProjectCategory:
        members = _in_category(projects, category)
        budget = total_budget(members)
        spent = total_expenditure(members)
        rollups.append(CategoryRollup(
            category=category,
            project_count=len(members),
            total_budget=budget,
            total_expenditure=spent,
            utilization=utilization(budget, spent),
        ))
    return rollups


def summarize(projects: Iterable, category: Optional[ProjectCategory] = None) -> DashboardSummary:
    """
    Build the full dashboard summary.

    When ``category`` is given, the totals, histogram and counts are restricted
    to that category; the per-category rollups always cover the whole input.
    """
    projects = list(projects)
    scoped = _in_category(projects, category)
    budget = total_budget(scoped)
    spent = total_expenditure(scoped)
    histogram = status_histogram(scoped)
    return DashboardSummary(
        category=category,
        project_count=len(scoped),
        total_budget=budget,
        total_expenditure=spent,
        utilization=utilization(budget, spent),
        on_track_count=histogram[ProjectStatus.ON_TRACK],
        status_histogram=histogram,
        categories=category_rollups(projects),
    )
