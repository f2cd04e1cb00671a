"""API v1 endpoints"""
from fastapi import APIRouter
from .endpoints import auth, profiles, tasks, analytics, logos, storage

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(logos.router, prefix="/logos", tags=["logos"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
