"""
User Model Module

This module defines the User model. A user row doubles as a role request: it is
created PENDING at registration and only becomes usable once an administrator
approves it.
"""
from typing import Optional
from sqlmodel import SQLModel, Field, AutoString
import uuid
from datetime import datetime

from pms_dash.models.enums import RequestStatus, UserRole


class User(SQLModel, table=True):
    """
    User model representing registered employees.

    Users are identified by UUID and authenticated via employee code/password.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each user
        employee_code: Organisation employee code, used to log in (unique, indexed)
        full_name: User's full display name
        password: Hashed password (bcrypt)
        role: The UserRole requested at registration and granted on approval
        approval_status: PENDING until an administrator approves or rejects
        assigned_programme_id: Programme bound on approval (Programme Directors only)
        rejection_reason: Reason recorded when the request was rejected
        approved_at: ISO timestamp of approval
        created_at: ISO timestamp when the request was submitted
    """
    __tablename__ = "users"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Authentication fields
    employee_code: str = Field(unique=True, index=True, nullable=False)
    password: Optional[str] = None  # Hashed password (bcrypt)

    full_name: str = Field(nullable=False)

    # Authorization
    role: UserRole = Field(sa_type=AutoString)
    approval_status: RequestStatus = Field(default=RequestStatus.PENDING, sa_type=AutoString, index=True)

    # Approval outcome
    assigned_programme_id: Optional[int] = Field(default=None, foreign_key="programmes.id")
    rejection_reason: Optional[str] = None
    approved_at: Optional[str] = None

    # Audit timestamp
    created_at: Optional[str] = Field(default_factory=lambda: datetime.utcnow().isoformat())

    @property
    def is_privileged(self) -> bool:
        """Helper to check if user has admin-level roles."""
        return self.role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self.approval_status == RequestStatus.APPROVED
