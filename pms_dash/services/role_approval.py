"""
Role approval workflow.

A role request is a User row in PENDING state. Approval binds a programme when
the requested role needs one; rejection records the reason. Both outcomes are
terminal. Every check happens before the row is touched, so a failed call
leaves the request exactly as it was.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from pms_dash.core.exceptions import ValidationFailed
from pms_dash.models.enums import RequestStatus, UserRole
from pms_dash.models.programme import Programme
from pms_dash.models.user import User
from pms_dash.schemas.role_management import (
    ApprovedEmployee, PendingRoleRequest, RejectedRequest,
)

logger = logging.getLogger(__name__)

MIN_REJECTION_REASON_LENGTH = 5


def to_pending_request(user: User) -> PendingRoleRequest:
    return PendingRoleRequest(
        id=user.id,
        employee_name=user.full_name,
        employee_code=user.employee_code,
        requested_role=user.role,
        submission_date=user.created_at,
        status=user.approval_status,
    )


def to_approved_employee(user: User, programme: Optional[Programme]) -> ApprovedEmployee:
    return ApprovedEmployee(
        id=user.id,
        employee_name=user.full_name,
        employee_code=user.employee_code,
        assigned_role=user.role,
        assigned_programme=programme.programme_name if programme else None,
        approval_status=user.approval_status,
        approved_date=user.approved_at,
    )


def _users_with_status(db: Session, status: RequestStatus) -> List[User]:
    statement = select(User).where(User.approval_status == status).order_by(User.created_at)
    return db.exec(statement).all()


def list_pending_requests(db: Session) -> List[PendingRoleRequest]:
    return [to_pending_request(u) for u in _users_with_status(db, RequestStatus.PENDING)]


def list_approved_employees(db: Session) -> List[ApprovedEmployee]:
    employees = []
    for user in _users_with_status(db, RequestStatus.APPROVED):
        programme = db.get(Programme, user.assigned_programme_id) if user.assigned_programme_id else None
        employees.append(to_approved_employee(user, programme))
    return employees


def list_rejected_requests(db: Session) -> List[RejectedRequest]:
    return [
        RejectedRequest(
            id=u.id,
            employee_name=u.full_name,
            employee_code=u.employee_code,
            requested_role=u.role,
            submission_date=u.created_at,
            rejection_reason=u.rejection_reason,
        )
        for u in _users_with_status(db, RequestStatus.REJECTED)
    ]


def _ensure_pending(user: User, target: RequestStatus) -> None:
    current = RequestStatus(user.approval_status)
    if not current.can_transition_to(target):
        raise ValidationFailed(
            f"Role request is {current.value}, only PENDING requests can be processed",
            field="status",
        )


def approve_request(db: Session, user: User, programme_id: Optional[int] = None) -> ApprovedEmployee:
    """
    Approve a pending request.

    Raises:
        ValidationFailed: The request is not pending, or the role requires a
            programme and none (or an unknown one) was given.
    """
    _ensure_pending(user, RequestStatus.APPROVED)

    programme = None
    role = UserRole(user.role)
    if role.requires_programme:
        if programme_id is None:
            raise ValidationFailed("Programme ID is required for Programme Director role", field="programmeId")
        programme = db.get(Programme, programme_id)
        if programme is None:
            raise ValidationFailed(f"Programme not found with ID: {programme_id}", field="programmeId")

    user.approval_status = RequestStatus.APPROVED
    user.assigned_programme_id = programme.id if programme else None
    user.approved_at = datetime.utcnow().isoformat()
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(
        "Approved %s as %s%s",
        user.employee_code,
        role.value,
        f" for {programme.programme_name}" if programme else "",
    )
    return to_approved_employee(user, programme)


def reject_request(db: Session, user: User, reason: Optional[str]) -> User:
    """
    Reject a pending request with a reason of at least five characters.

    Raises:
        ValidationFailed: Missing or short reason, or the request is not pending.
    """
    reason = (reason or "").strip()
    if not reason:
        raise ValidationFailed("Rejection reason is required", field="rejectionReason")
    if len(reason) < MIN_REJECTION_REASON_LENGTH:
        raise ValidationFailed(
            f"Rejection reason must be at least {MIN_REJECTION_REASON_LENGTH} characters",
            field="rejectionReason",
        )
    _ensure_pending(user, RequestStatus.REJECTED)

    user.approval_status = RequestStatus.REJECTED
    user.rejection_reason = reason
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Rejected role request of %s: %s", user.employee_code, reason)
    return user
