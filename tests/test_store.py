from unittest.mock import MagicMock

import pytest

from pms_dash.client.api import BackendClient
from pms_dash.client.store import NewProjectForm, ProjectStore
from pms_dash.core.exceptions import BackendUnavailable, ValidationFailed
from pms_dash.models.enums import MilestoneStatus, ProjectCategory, ProjectStatus


def wire_project(pid="p1", **overrides):
    project = {
        "id": pid,
        "name": "GSLV Mark IV",
        "category": "Launch Vehicles",
        "totalBudget": 100,
        "expenditure": 40,
        "status": "On Track",
        "description": "Heavy lift",
        "milestones": [{"id": "m1", "title": "Design", "dueDate": "2024-03-01", "status": "Pending"}],
    }
    project.update(overrides)
    return project


@pytest.fixture()
def backend():
    return MagicMock(spec=BackendClient)


@pytest.fixture()
def store(backend):
    backend.get.return_value = [wire_project("p1"), wire_project("p2", category="User Funded Projects")]
    store = ProjectStore(backend)
    store.load()
    return store


class TestLoad:
    def test_load_parses_projects(self, store):
        assert [p.id for p in store.projects] == ["p1", "p2"]
        assert store.projects[1].category is ProjectCategory.USER_FUNDED
        assert store.offline is False

    def test_first_failure_is_offline_and_empty(self, backend):
        backend.get.side_effect = BackendUnavailable("Backend unreachable")
        store = ProjectStore(backend)
        assert store.load() == []
        assert store.offline is True
        assert store.last_error == "Backend unreachable"

    def test_failure_keeps_last_good_data(self, store, backend):
        backend.get.side_effect = BackendUnavailable("down")
        store.load()
        assert store.offline is True
        assert len(store.projects) == 2

        backend.get.side_effect = None
        backend.get.return_value = [wire_project("p1")]
        store.load()
        assert store.offline is False
        assert store.last_error is None


class TestCreate:
    def test_create_posts_defaults_and_appends(self, store, backend):
        backend.post.return_value = wire_project("p3", name="Sat-X", category="Satellite Communication",
                                                 totalBudget=5000, expenditure=0, milestones=[])
        created = store.create("Satellite Communication", " Sat-X ", "5000")

        path, body = backend.post.call_args.args
        assert path == "projects"
        assert body["name"] == "Sat-X"
        assert body["totalBudget"] == 5000
        assert body["expenditure"] == 0
        assert body["status"] == "On Track"
        assert body["milestones"] == []
        assert created.id == "p3"
        assert store.projects[-1].id == "p3"

    @pytest.mark.parametrize("category, name, budget, field", [
        ("Launch Vehicles", "   ", 10, "name"),
        ("Launch Vehicles", "X", -5, "budget"),
        ("Launch Vehicles", "X", "lots", "budget"),
        ("Moon Base", "X", 10, "category"),
    ])
    def test_invalid_form_never_calls_backend(self, store, backend, category, name, budget, field):
        with pytest.raises(ValidationFailed) as exc:
            store.create(category, name, budget)
        assert exc.value.field == field
        backend.post.assert_not_called()

    def test_failure_leaves_state(self, store, backend):
        backend.post.side_effect = BackendUnavailable("HTTP 500", status_code=500)
        with pytest.raises(BackendUnavailable):
            store.create("Launch Vehicles", "X", 1)
        assert len(store.projects) == 2
        assert store.last_error == "HTTP 500"

    def test_empty_body_is_backend_failure(self, store, backend):
        backend.post.return_value = None
        with pytest.raises(BackendUnavailable):
            store.create("Launch Vehicles", "X", 1)
        assert len(store.projects) == 2
        assert store.last_error == "Backend returned no project"


class TestUpdate:
    def test_merges_server_body(self, store, backend):
        backend.put.return_value = wire_project("p1", status="Delayed")
        project = store.get("p1").model_copy(update={"status": ProjectStatus.AT_RISK})

        stored = store.update(project)
        assert stored.status is ProjectStatus.DELAYED
        assert store.get("p1").status is ProjectStatus.DELAYED
        assert backend.put.call_args.args[0] == "projects/p1"

    def test_merges_caller_copy_without_body(self, store, backend):
        backend.put.return_value = None
        project = store.get("p1").model_copy(update={"expenditure": 90})
        store.update(project)
        assert store.get("p1").expenditure == 90

    def test_failure_leaves_local_state(self, store, backend):
        backend.put.side_effect = BackendUnavailable("HTTP 503", status_code=503)
        before = store.get("p1")
        with pytest.raises(BackendUnavailable):
            store.update(before.model_copy(update={"expenditure": 99}))
        assert store.get("p1") == before


class TestWorkflowWrappers:
    def test_toggle_persists_through_update(self, store, backend):
        backend.put.return_value = None
        updated = store.toggle_milestone("p1", "m1")
        assert updated.milestones[0].status is MilestoneStatus.IN_PROGRESS
        sent = backend.put.call_args.args[1]
        assert sent["milestones"][0]["status"] == "In Progress"

    def test_toggle_unknown_milestone_sends_nothing(self, store, backend):
        store.toggle_milestone("p1", "nope")
        backend.put.assert_not_called()

    def test_remove_milestone_persists_through_update(self, store, backend):
        backend.put.return_value = None
        updated = store.remove_milestone("p1", "m1")
        assert updated.milestones == []
        assert backend.put.call_args.args[1]["milestones"] == []
        assert store.get("p1").milestones == []

    def test_remove_unknown_milestone_sends_nothing(self, store, backend):
        store.remove_milestone("p1", "nope")
        backend.put.assert_not_called()

    def test_remove_milestone_failure_does_not_drift(self, store, backend):
        backend.put.side_effect = BackendUnavailable("down")
        with pytest.raises(BackendUnavailable):
            store.remove_milestone("p1", "m1")
        assert len(store.get("p1").milestones) == 1

    def test_add_milestone_failure_does_not_drift(self, store, backend):
        backend.put.side_effect = BackendUnavailable("down")
        with pytest.raises(BackendUnavailable):
            store.add_milestone("p1", "Static fire")
        assert len(store.get("p1").milestones) == 1

    def test_save_remarks(self, store, backend):
        backend.put.return_value = None
        assert store.save_remarks("p1", "Supplier late").delay_remarks == "Supplier late"

    def test_blank_milestone_title_is_rejected_before_call(self, store, backend):
        with pytest.raises(ValidationFailed):
            store.add_milestone("p1", "")
        backend.put.assert_not_called()


def test_new_project_form_builds_on_track_project():
    project = NewProjectForm.parse("Launch Vehicles", "Sat-X", 10).to_project()
    assert project.status is ProjectStatus.ON_TRACK
    assert project.expenditure == 0
    assert project.milestones == []
