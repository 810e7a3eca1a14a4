"""
Admin role-request queue.

Mirrors the role-management page: a list of pending requests, the registry
of approved employees and the programme catalogue. Approve and reject are
validated locally before any call, and the lists only change after the
backend confirms, so a failed call leaves the request pending.
"""
import logging
from datetime import datetime
from typing import List, Optional

from pms_dash.client.api import BackendClient
from pms_dash.core.exceptions import BackendUnavailable, ValidationFailed
from pms_dash.models.enums import UserRole
from pms_dash.schemas.role_management import (
    ApprovedEmployee, PendingRoleRequest, ProgrammeRead,
)
from pms_dash.services.role_approval import MIN_REJECTION_REASON_LENGTH

logger = logging.getLogger(__name__)

BASE_PATH = "admin/role-management"


def _data(envelope) -> object:
    """Unwrap the {success, message, data} envelope."""
    if isinstance(envelope, dict) and "data" in envelope:
        return envelope["data"]
    return envelope


class RoleRequestQueue:
    def __init__(self, client: BackendClient):
        self.client = client
        self.pending: List[PendingRoleRequest] = []
        self.approved: List[ApprovedEmployee] = []
        self.programmes: List[ProgrammeRead] = []
        self.last_error: Optional[str] = None

    def _call(self, method: str, path: str, body=None):
        try:
            if method == "GET":
                return _data(self.client.get(f"{BASE_PATH}/{path}"))
            return _data(self.client.post(f"{BASE_PATH}/{path}", body))
        except BackendUnavailable as e:
            self.last_error = e.message
            logger.warning("Role management %s %s failed: %s", method, path, e.message)
            raise

    def refresh(self) -> None:
        """Reload pending requests, approved employees and programmes together."""
        pending = self._call("GET", "pending-requests") or []
        approved = self._call("GET", "approved-employees") or []
        programmes = self._call("GET", "programmes") or []
        self.pending = [PendingRoleRequest.model_validate(r) for r in pending]
        self.approved = [ApprovedEmployee.model_validate(e) for e in approved]
        self.programmes = [ProgrammeRead.model_validate(p) for p in programmes]
        self.last_error = None

    def _find(self, request_id: str) -> PendingRoleRequest:
        for request in self.pending:
            if request.id == request_id:
                return request
        raise ValidationFailed(f"No pending request with ID: {request_id}", field="id")

    def _programme_name(self, programme_id: Optional[int]) -> Optional[str]:
        for programme in self.programmes:
            if programme.id == programme_id:
                return programme.programme_name
        return None

    def approve(self, request_id: str, programme_id: Optional[int] = None) -> ApprovedEmployee:
        """
        Approve a pending request.

        Raises:
            ValidationFailed: A Programme Director request without a programme.
                Nothing is sent.
            BackendUnavailable: The request stays pending.
        """
        request = self._find(request_id)
        if UserRole(request.requested_role).requires_programme and programme_id is None:
            raise ValidationFailed("Please select a programme for the Programme Director", field="programmeId")

        body = self._call("POST", f"pending-requests/{request_id}/approve", {"programmeId": programme_id})

        if body:
            employee = ApprovedEmployee.model_validate(body)
        else:
            employee = ApprovedEmployee(
                id=request.id,
                employee_name=request.employee_name,
                employee_code=request.employee_code,
                assigned_role=request.requested_role,
                assigned_programme=self._programme_name(programme_id),
                approved_date=datetime.utcnow().isoformat(),
            )
        self.pending = [r for r in self.pending if r.id != request_id]
        self.approved = [*self.approved, employee]
        self.last_error = None
        logger.info("Approved %s as %s", employee.employee_code, employee.assigned_role.label)
        return employee

    def reject(self, request_id: str, reason: str) -> None:
        """
        Reject a pending request.

        Raises:
            ValidationFailed: Blank or short reason. Nothing is sent.
            BackendUnavailable: The request stays pending.
        """
        self._find(request_id)
        reason = (reason or "").strip()
        if not reason:
            raise ValidationFailed("Please provide a reason for rejection", field="rejectionReason")
        if len(reason) < MIN_REJECTION_REASON_LENGTH:
            raise ValidationFailed(
                f"Rejection reason must be at least {MIN_REJECTION_REASON_LENGTH} characters",
                field="rejectionReason",
            )

        self._call("POST", f"pending-requests/{request_id}/reject", {"rejectionReason": reason})
        self.pending = [r for r in self.pending if r.id != request_id]
        self.last_error = None
        logger.info("Rejected request %s", request_id)

    def search(self, term: str):
        """Filter pending and approved entries by name or employee code."""
        term = (term or "").strip().lower()
        if not term:
            return list(self.pending), list(self.approved)

        def matches(entry) -> bool:
            return term in entry.employee_name.lower() or term in entry.employee_code.lower()

        return (
            [r for r in self.pending if matches(r)],
            [e for e in self.approved if matches(e)],
        )
