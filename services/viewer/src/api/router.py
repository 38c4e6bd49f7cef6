from fastapi import APIRouter

from .endpoints import health, views

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(views.router)
