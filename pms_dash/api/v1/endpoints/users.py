"""
User Endpoints Module

The /me endpoint lets any approved user read their own profile; the dashboard
uses it to pick the landing page for the signed-in role. Administrators can
list every account regardless of approval state.
"""
from typing import Any, List
from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from pms_dash.api import deps
from pms_dash.db.session import get_db
from pms_dash.models.user import User
from pms_dash.schemas.user import UserRead

router = APIRouter()


@router.get("", response_model=List[UserRead])
def read_users(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(deps.get_current_admin),
) -> Any:
    """
    Retrieve a paginated list of all users.

    Only administrators can access this endpoint.
    """
    return db.exec(select(User).order_by(User.created_at).offset(skip).limit(limit)).all()


@router.get("/me", response_model=UserRead)
def read_user_me(
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Get the current authenticated user's profile.
    """
    return current_user
