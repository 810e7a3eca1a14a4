from fastapi import APIRouter
from pms_dash.api.v1.endpoints import (
    auth, health, users, projects, dashboard, role_management
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(
    role_management.router, prefix="/admin/role-management", tags=["admin"]
)

# Resource endpoints
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
