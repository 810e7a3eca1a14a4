from typing import Optional

from pms_dash.models.enums import RequestStatus, UserRole
from pms_dash.schemas.base import CamelModel


# Properties to return to client
class UserRead(CamelModel):
    id: str
    employee_code: str
    full_name: str
    role: UserRole
    approval_status: RequestStatus
    assigned_programme_id: Optional[int] = None
    created_at: Optional[str] = None
