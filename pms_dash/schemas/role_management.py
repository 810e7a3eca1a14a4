from typing import Optional

from pms_dash.models.enums import RequestStatus, UserRole
from pms_dash.schemas.base import CamelModel


class PendingRoleRequest(CamelModel):
    id: str
    employee_name: str
    employee_code: str
    requested_role: UserRole
    submission_date: Optional[str] = None
    status: RequestStatus = RequestStatus.PENDING


class ApprovedEmployee(CamelModel):
    id: str
    employee_name: str
    employee_code: str
    assigned_role: UserRole
    assigned_programme: Optional[str] = None
    approval_status: RequestStatus = RequestStatus.APPROVED
    approved_date: Optional[str] = None


class RejectedRequest(CamelModel):
    id: str
    employee_name: str
    employee_code: str
    requested_role: UserRole
    submission_date: Optional[str] = None
    rejection_reason: Optional[str] = None
    status: RequestStatus = RequestStatus.REJECTED


class ProgrammeRead(CamelModel):
    id: int
    programme_name: str
    description: Optional[str] = None


class ApproveRoleRequest(CamelModel):
    programme_id: Optional[int] = None


class RejectRoleRequest(CamelModel):
    rejection_reason: Optional[str] = None
