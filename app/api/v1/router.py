"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, challenges, users, wellness

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    auth.router, prefix="/auth", tags=["Identity"]
)
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
api_router.include_router(
    challenges.router, prefix="/challenges", tags=["Challenges"]
)
api_router.include_router(
    wellness.router, prefix="/wellness", tags=["Wellness content"]
)
