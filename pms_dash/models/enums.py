"""
Enumerations Module

Closed value sets shared by the database models, the API schemas and the
dashboard client. Statuses that move through a lifecycle carry an explicit
transition table instead of relying on string comparisons.
"""
from enum import Enum
from typing import Dict, FrozenSet


class ProjectCategory(str, Enum):
    """The four programme areas a project can belong to."""
    LAUNCH_VEHICLES = "Launch Vehicles"
    SATELLITE_COMM = "Satellite Communication"
    INFRASTRUCTURE_RD = "Infrastructure & Advanced R&D"
    USER_FUNDED = "User Funded Projects"


class ProjectStatus(str, Enum):
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    DELAYED = "Delayed"
    COMPLETED = "Completed"


class MilestoneStatus(str, Enum):
    """
    Milestone progression. Toggling cycles through the states in order and
    wraps from COMPLETED back to PENDING.
    """
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    def next(self) -> "MilestoneStatus":
        return _MILESTONE_CYCLE[self]


_MILESTONE_CYCLE: Dict[MilestoneStatus, MilestoneStatus] = {
    MilestoneStatus.PENDING: MilestoneStatus.IN_PROGRESS,
    MilestoneStatus.IN_PROGRESS: MilestoneStatus.COMPLETED,
    MilestoneStatus.COMPLETED: MilestoneStatus.PENDING,
}


class RequestStatus(str, Enum):
    """
    Lifecycle of a role request. PENDING may move to APPROVED or REJECTED;
    both are terminal.
    """
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def can_transition_to(self, target: "RequestStatus") -> bool:
        return target in _REQUEST_TRANSITIONS[self]


_REQUEST_TRANSITIONS: Dict[RequestStatus, FrozenSet[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}


class UserRole(str, Enum):
    """
    Roles a dashboard user can hold.

    - ADMIN: manages role requests and reference data
    - PROJECT_DIRECTOR: owns and edits individual projects
    - PROGRAMME_DIRECTOR: monitors the projects of one assigned programme
    - CHAIRMAN: read-only oversight of the whole portfolio
    """
    ADMIN = "ADMIN"
    PROJECT_DIRECTOR = "PROJECT_DIRECTOR"
    PROGRAMME_DIRECTOR = "PROGRAMME_DIRECTOR"
    CHAIRMAN = "CHAIRMAN"

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    @property
    def requires_programme(self) -> bool:
        """Approval of this role must bind a programme."""
        return self is UserRole.PROGRAMME_DIRECTOR


_ROLE_LABELS: Dict[UserRole, str] = {
    UserRole.ADMIN: "Admin",
    UserRole.PROJECT_DIRECTOR: "Project Director",
    UserRole.PROGRAMME_DIRECTOR: "Programme Director",
    UserRole.CHAIRMAN: "Chairman",
}
