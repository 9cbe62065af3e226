"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import dashboard, health, logs, profile, state

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(state.router, prefix="/state", tags=["state"])
