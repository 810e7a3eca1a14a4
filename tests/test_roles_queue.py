from unittest.mock import MagicMock

import pytest

from pms_dash.client.api import BackendClient
from pms_dash.client.roles import RoleRequestQueue
from pms_dash.core.exceptions import BackendUnavailable, ValidationFailed
from pms_dash.models.enums import UserRole

PENDING = [
    {"id": "u1", "employeeName": "Kiran Rao", "employeeCode": "PGD001",
     "requestedRole": "PROGRAMME_DIRECTOR", "submissionDate": "2024-05-01T10:00:00", "status": "PENDING"},
    {"id": "u2", "employeeName": "Leela Menon", "employeeCode": "CH001",
     "requestedRole": "CHAIRMAN", "submissionDate": "2024-05-02T10:00:00", "status": "PENDING"},
]
APPROVED = [
    {"id": "u0", "employeeName": "Ravi Director", "employeeCode": "PD001", "assignedRole": "PROJECT_DIRECTOR",
     "assignedProgramme": None, "approvalStatus": "APPROVED", "approvedDate": "2024-04-01T09:00:00"},
]
PROGRAMMES = [{"id": 1, "programmeName": "GSLV"}, {"id": 2, "programmeName": "PSLV"}]


def envelope(data):
    return {"success": True, "message": "ok", "data": data}


@pytest.fixture()
def backend():
    backend = MagicMock(spec=BackendClient)
    responses = {
        "admin/role-management/pending-requests": envelope(PENDING),
        "admin/role-management/approved-employees": envelope(APPROVED),
        "admin/role-management/programmes": envelope(PROGRAMMES),
    }
    backend.get.side_effect = lambda path: responses[path]
    return backend


@pytest.fixture()
def queue(backend):
    queue = RoleRequestQueue(backend)
    queue.refresh()
    return queue


def test_refresh_loads_all_lists(queue):
    assert [r.id for r in queue.pending] == ["u1", "u2"]
    assert queue.pending[0].requested_role is UserRole.PROGRAMME_DIRECTOR
    assert [e.employee_code for e in queue.approved] == ["PD001"]
    assert [p.programme_name for p in queue.programmes] == ["GSLV", "PSLV"]


def test_programme_director_without_programme_is_rejected_locally(queue, backend):
    with pytest.raises(ValidationFailed) as exc:
        queue.approve("u1")
    assert exc.value.field == "programmeId"
    backend.post.assert_not_called()
    assert [r.id for r in queue.pending] == ["u1", "u2"]
    assert len(queue.approved) == 1


def test_approve_moves_request_to_registry(queue, backend):
    backend.post.return_value = envelope({
        "id": "u1", "employeeName": "Kiran Rao", "employeeCode": "PGD001",
        "assignedRole": "PROGRAMME_DIRECTOR", "assignedProgramme": "PSLV",
        "approvalStatus": "APPROVED", "approvedDate": "2024-05-03T12:00:00",
    })
    employee = queue.approve("u1", programme_id=2)

    backend.post.assert_called_once_with(
        "admin/role-management/pending-requests/u1/approve", {"programmeId": 2}
    )
    assert employee.assigned_programme == "PSLV"
    assert [r.id for r in queue.pending] == ["u2"]
    assert queue.approved[-1].employee_code == "PGD001"


def test_approve_without_body_builds_entry_locally(queue, backend):
    backend.post.return_value = envelope(None)
    employee = queue.approve("u1", programme_id=1)
    assert employee.assigned_role is UserRole.PROGRAMME_DIRECTOR
    assert employee.assigned_programme == "GSLV"
    assert employee.approved_date


def test_backend_failure_keeps_request_pending(queue, backend):
    backend.post.side_effect = BackendUnavailable("HTTP 500", status_code=500)
    with pytest.raises(BackendUnavailable):
        queue.approve("u2")
    with pytest.raises(BackendUnavailable):
        queue.reject("u2", "Not eligible")

    assert [r.id for r in queue.pending] == ["u1", "u2"]
    assert len(queue.approved) == 1
    assert queue.last_error == "HTTP 500"


@pytest.mark.parametrize("reason", ["", "   ", None, "no", "abcd", "  abc  "])
def test_reject_requires_reason(queue, backend, reason):
    with pytest.raises(ValidationFailed) as exc:
        queue.reject("u2", reason)
    assert exc.value.field == "rejectionReason"
    backend.post.assert_not_called()
    assert len(queue.pending) == 2


def test_reject_removes_request(queue, backend):
    backend.post.return_value = envelope(None)
    queue.reject("u2", "  Not eligible ")
    backend.post.assert_called_once_with(
        "admin/role-management/pending-requests/u2/reject", {"rejectionReason": "Not eligible"}
    )
    assert [r.id for r in queue.pending] == ["u1"]
    assert len(queue.approved) == 1


def test_unknown_request(queue):
    with pytest.raises(ValidationFailed):
        queue.approve("nobody")


def test_search_by_name_or_code(queue):
    pending, approved = queue.search("ch0")
    assert [r.id for r in pending] == ["u2"]
    assert approved == []

    pending, approved = queue.search("RAVI")
    assert pending == []
    assert [e.id for e in approved] == ["u0"]

    pending, approved = queue.search("")
    assert len(pending) == 2 and len(approved) == 1
