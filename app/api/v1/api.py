"""API v1 router composition."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, users

api_router: APIRouter = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
