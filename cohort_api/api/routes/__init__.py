"""
API Routes - Combines the /api route modules into a single router.

Auth routes live at the root (/auth/...) and are included by main.py.
"""

from fastapi import APIRouter

from cohort_api.api.routes.cohort_routes import router as cohort_router
from cohort_api.api.routes.student_routes import router as student_router
from cohort_api.api.routes.user_routes import router as user_router
from cohort_api.api.routes.auth_routes import router as auth_router

# Main API router (mounted at /api)
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(cohort_router)
api_router.include_router(student_router)
api_router.include_router(user_router)

__all__ = ["api_router", "auth_router"]
