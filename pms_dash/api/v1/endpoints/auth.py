"""
Authentication Endpoints Module

This module provides registration, login and logout. Registration files a role
request: the new account stays PENDING and cannot log in until an administrator
approves it. The system supports both JWT bearer token authentication and
HTTP-only cookie-based authentication for browser clients.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select
from pms_dash.db.session import get_db
from pms_dash.models.enums import RequestStatus, UserRole
from pms_dash.models.user import User
from pms_dash.core.security import verify_password, get_password_hash, create_access_token
from pms_dash.core.config import settings
from pms_dash.schemas.auth import AuthResponse, LoginRequest, UserRegister
from pms_dash.schemas.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(db: Session, employee_code: str, password: str) -> User:
    """
    Check credentials and approval state.

    Raises:
        HTTPException 401: If credentials are invalid
        HTTPException 403: If the account is still pending or was rejected
    """
    user = db.exec(select(User).where(User.employee_code == employee_code.strip().upper())).first()
    if not user or not verify_password(password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect employee code or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.approval_status == RequestStatus.PENDING:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is pending approval")
    if user.approval_status == RequestStatus.REJECTED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Role request was rejected")
    return user


def _issue_token(response: Response, user: User) -> str:
    access_token = create_access_token(subject=user.employee_code)

    # httponly=True prevents JavaScript access to the cookie
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax"
    )
    return access_token


@router.post("/register", response_model=UserRead, status_code=201)
def register_user(user_in: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new employee and file their role request.

    Raises:
        HTTPException 400: Passwords differ, terms not accepted, Admin role requested,
            or the employee code is already registered
    """
    if user_in.password != user_in.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if not user_in.agree_to_terms:
        raise HTTPException(status_code=400, detail="Terms and conditions must be accepted")
    if user_in.role == UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="The Admin role cannot be requested")

    existing = db.exec(select(User).where(User.employee_code == user_in.employee_code)).first()
    if existing:
        raise HTTPException(
            status_code=400,
            detail="An employee with this code is already registered."
        )

    db_user = User(
        employee_code=user_in.employee_code,
        full_name=user_in.full_name.strip(),
        password=get_password_hash(user_in.password),
        role=user_in.role,
        approval_status=RequestStatus.PENDING,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Role request filed by %s for %s", db_user.employee_code, user_in.role.value)
    return db_user


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """
    Authenticate with employee code and password.

    Returns the token together with the user's identity and role so the
    dashboard can pick the right landing page. The token is also set as an
    HTTP-only cookie for browser clients.
    """
    user = _authenticate(db, credentials.employee_code, credentials.password)
    token = _issue_token(response, user)
    return AuthResponse(
        token=token,
        user_id=user.id,
        employee_code=user.employee_code,
        full_name=user.full_name,
        role=user.role,
        assigned_programme_id=user.assigned_programme_id,
    )


@router.post("/token")
def login_for_access_token(
    response: Response,
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
):
    """
    OAuth2 password flow for the interactive API docs.

    The form's 'username' field carries the employee code.
    """
    user = _authenticate(db, form_data.username, form_data.password)
    return {"access_token": _issue_token(response, user), "token_type": "bearer"}


@router.get("/logout")
def logout():
    """
    Log out the current user by clearing their authentication cookie.

    API clients can simply discard their token.
    """
    response = RedirectResponse(url="/")
    response.delete_cookie("access_token")
    return response
