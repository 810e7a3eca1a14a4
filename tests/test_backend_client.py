from unittest.mock import MagicMock

import pytest
import requests

from pms_dash.client.api import BackendClient
from pms_dash.core.exceptions import BackendUnavailable


def response(status=200, body=None):
    r = MagicMock(spec=requests.Response)
    r.status_code = status
    r.ok = 200 <= status < 300
    r.content = b"" if body is None else b"{}"
    r.json.return_value = body
    return r


@pytest.fixture()
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    s.cookies = MagicMock()
    return s


def test_builds_urls_and_applies_timeout(session):
    session.request.return_value = response(body=[{"id": "1"}])
    client = BackendClient("http://api.test/api/v1/", timeout=3, session=session)

    assert client.get("projects") == [{"id": "1"}]
    session.request.assert_called_once_with(
        "GET", "http://api.test/api/v1/projects", timeout=3, params=None
    )


def test_empty_body_is_none(session):
    session.request.return_value = response(204)
    client = BackendClient("http://api.test", session=session)
    assert client.put("projects/1", {"id": "1"}) is None


def test_connection_error_becomes_backend_unavailable(session):
    session.request.side_effect = requests.ConnectionError("refused")
    client = BackendClient("http://api.test", session=session)
    with pytest.raises(BackendUnavailable) as exc:
        client.get("projects")
    assert exc.value.status_code is None


def test_error_status_carries_server_message(session):
    session.request.return_value = response(400, {"success": False, "message": "Programme ID is required"})
    client = BackendClient("http://api.test", session=session)
    with pytest.raises(BackendUnavailable) as exc:
        client.post("admin/role-management/pending-requests/x/approve", {})
    assert exc.value.status_code == 400
    assert exc.value.message == "Programme ID is required"


def test_login_sets_bearer_and_logout_drops_it(session):
    session.request.return_value = response(body={"token": "abc", "employeeCode": "PD001", "role": "ADMIN"})
    client = BackendClient("http://api.test", session=session)

    client.login("PD001", "pw")
    assert session.headers["Authorization"] == "Bearer abc"
    _, kwargs = session.request.call_args
    assert kwargs["json"] == {"employeeCode": "PD001", "password": "pw"}

    client.logout()
    assert "Authorization" not in session.headers
    session.cookies.clear.assert_called_once()
