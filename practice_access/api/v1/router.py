"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from practice_access.api.v1.dependencies (no manual
repo/service construction).
"""

from fastapi import APIRouter

from practice_access.api.v1.endpoints import (
    access,
    admin,
    doctors,
    exemptions,
    health,
    payment_status,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(access.router, prefix="/access", tags=["access"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["doctors"])
api_router.include_router(exemptions.router, tags=["exemptions"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(payment_status.router, tags=["scheduler"])
