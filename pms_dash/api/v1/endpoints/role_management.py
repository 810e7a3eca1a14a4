"""
Role Management Endpoints Module

Administrator endpoints for working through role requests: list pending,
approved and rejected requests, approve (binding a programme where the role
requires one) or reject with a reason. Responses use the ApiResponse envelope.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from pms_dash.api import deps
from pms_dash.db.session import get_db
from pms_dash.models.programme import Programme
from pms_dash.models.user import User
from pms_dash.schemas.base import ApiResponse
from pms_dash.schemas.role_management import (
    ApprovedEmployee, ApproveRoleRequest, PendingRoleRequest, ProgrammeRead,
    RejectedRequest, RejectRoleRequest,
)
from pms_dash.services import role_approval

router = APIRouter(dependencies=[Depends(deps.get_current_admin)])


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User not found with ID: {user_id}")
    return user


@router.get("/pending-requests", response_model=ApiResponse[List[PendingRoleRequest]])
def get_pending_requests(db: Session = Depends(get_db)):
    return ApiResponse.ok(
        "Pending role requests retrieved successfully",
        role_approval.list_pending_requests(db),
    )


@router.get("/approved-employees", response_model=ApiResponse[List[ApprovedEmployee]])
def get_approved_employees(db: Session = Depends(get_db)):
    return ApiResponse.ok(
        "Approved employees retrieved successfully",
        role_approval.list_approved_employees(db),
    )


@router.get("/rejected-requests", response_model=ApiResponse[List[RejectedRequest]])
def get_rejected_requests(db: Session = Depends(get_db)):
    return ApiResponse.ok(
        "Rejected role requests retrieved successfully",
        role_approval.list_rejected_requests(db),
    )


@router.post("/pending-requests/{user_id}/approve", response_model=ApiResponse[ApprovedEmployee])
def approve_pending_request(
    user_id: str,
    request: ApproveRoleRequest,
    db: Session = Depends(get_db),
):
    """
    Approve a pending role request.

    Programme Directors must be bound to an existing programme (programmeId).

    Raises:
        HTTPException 404: If the user doesn't exist
        HTTPException 400: If the request is not pending or the programme is missing
    """
    user = _get_user_or_404(db, user_id)
    employee = role_approval.approve_request(db, user, request.programme_id)
    return ApiResponse.ok("Role request approved successfully", employee)


@router.post("/pending-requests/{user_id}/reject", response_model=ApiResponse[None])
def reject_pending_request(
    user_id: str,
    request: RejectRoleRequest,
    db: Session = Depends(get_db),
):
    """
    Reject a pending role request. A reason of at least five characters is required.
    """
    user = _get_user_or_404(db, user_id)
    role_approval.reject_request(db, user, request.rejection_reason)
    return ApiResponse.ok("Role request rejected successfully")


@router.get("/programmes", response_model=ApiResponse[List[ProgrammeRead]])
def get_programmes(db: Session = Depends(get_db)):
    programmes = db.exec(select(Programme).order_by(Programme.id)).all()
    return ApiResponse.ok(
        "Programmes retrieved successfully",
        [ProgrammeRead.model_validate(p) for p in programmes],
    )


@router.get("/programmes/{programme_id}", response_model=ApiResponse[ProgrammeRead])
def get_programme(programme_id: int, db: Session = Depends(get_db)):
    programme = db.get(Programme, programme_id)
    if not programme:
        raise HTTPException(status_code=404, detail="Programme not found")
    return ApiResponse.ok("Programme details retrieved successfully", ProgrammeRead.model_validate(programme))
