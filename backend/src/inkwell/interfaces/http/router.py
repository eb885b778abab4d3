"""Aggregate all API routers."""
from fastapi import APIRouter

from .routers.auth import router as auth_router
from .routers.posts import router as posts_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(posts_router)
