from .enums import (
    MilestoneStatus, ProjectCategory, ProjectStatus, RequestStatus, UserRole
)
from .programme import Programme, PROGRAMME_CATALOGUE
from .user import User
from .project import Project

__all__ = [
    "User", "UserRole", "RequestStatus",
    "Project", "ProjectCategory", "ProjectStatus", "MilestoneStatus",
    "Programme", "PROGRAMME_CATALOGUE",
]
