"""
Main API router
"""
from fastapi import APIRouter

from app.api.routes import (
    health,
    auth,
    permissions,
    resources,
    roles,
    users,
    staff,
    document_locations,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(resources.router, prefix="/resources", tags=["resources"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(staff.router, prefix="/staff-members", tags=["staff"])
api_router.include_router(document_locations.router, prefix="/document-locations", tags=["document-locations"])
