from unittest.mock import MagicMock

import pytest

from pms_dash.client.api import BackendClient
from pms_dash.client.controller import DashboardController, View, home_page_for
from pms_dash.client.store import NewProjectForm, ProjectStore
from pms_dash.core.exceptions import BackendUnavailable
from pms_dash.models.enums import ProjectCategory, UserRole


def wire(pid, category, budget, spent, status="On Track"):
    return {"id": pid, "name": pid.upper(), "category": category, "totalBudget": budget,
            "expenditure": spent, "status": status, "milestones": []}


@pytest.fixture()
def backend():
    backend = MagicMock(spec=BackendClient)
    backend.get.return_value = [
        wire("a", "Launch Vehicles", 100, 50),
        wire("b", "Launch Vehicles", 200, 200, "Completed"),
        wire("c", "User Funded Projects", 50, 10, "Delayed"),
    ]
    return backend


@pytest.fixture()
def controller(backend):
    store = ProjectStore(backend)
    store.load()
    return DashboardController(store)


def test_starts_on_dashboard_with_portfolio_metrics(controller):
    assert controller.view is View.DASHBOARD
    metrics = controller.metrics()
    assert metrics.project_count == 3
    assert metrics.total_budget == 350


def test_category_then_project_then_back(controller):
    controller.navigate_to_category("Launch Vehicles")
    assert controller.view is View.CATEGORY_DETAIL
    assert [p.id for p in controller.category_projects] == ["a", "b"]
    assert controller.metrics().utilization == 83

    controller.navigate_to_project("b")
    assert controller.view is View.PROJECT_DETAIL
    assert controller.selected_project.id == "b"

    controller.back()
    assert controller.view is View.CATEGORY_DETAIL
    assert controller.selected_project is None

    controller.back()
    assert controller.view is View.DASHBOARD
    assert controller.selected_category is None


def test_project_from_dashboard_goes_back_to_dashboard(controller):
    controller.navigate_to_project("c")
    controller.back()
    assert controller.view is View.DASHBOARD


def test_unknown_project_does_not_navigate(controller):
    controller.navigate_to_project("zzz")
    assert controller.view is View.DASHBOARD


def test_submit_new_project_opens_detail(controller, backend):
    backend.post.return_value = wire("d", "Satellite Communication", 5000, 0)
    form = NewProjectForm.parse("Satellite Communication", "Sat-X", 5000)

    created = controller.submit_new_project(form)
    assert controller.view is View.PROJECT_DETAIL
    assert controller.selected_project.id == created.id == "d"
    assert controller.selected_category is ProjectCategory.SATELLITE_COMM


def test_submit_failure_stays_put(controller, backend):
    backend.post.side_effect = BackendUnavailable("down")
    with pytest.raises(BackendUnavailable):
        controller.submit_new_project(NewProjectForm.parse("Launch Vehicles", "X", 1))
    assert controller.view is View.DASHBOARD
    assert len(controller.store.projects) == 3


def test_close_tears_down_session(controller, backend):
    controller.navigate_to_project("a")
    controller.close()
    assert controller.view is View.DASHBOARD
    assert controller.store.projects == []
    backend.logout.assert_called_once()


def test_home_page_per_role():
    assert home_page_for(UserRole.ADMIN) == "role-management"
    assert home_page_for("CHAIRMAN") == "strategic-dashboard"
    assert {home_page_for(r) for r in UserRole} == {
        "role-management", "dashboard", "programme-dashboard", "strategic-dashboard"
    }
