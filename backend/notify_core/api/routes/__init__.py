"""API Routes module"""
from fastapi import APIRouter

from .recipients import router as recipients_router
from .templates import router as templates_router
from .notifications import router as notifications_router

# Main API router
api_router = APIRouter()

api_router.include_router(recipients_router, prefix="/recipients", tags=["Recipients"])
api_router.include_router(templates_router, prefix="/templates", tags=["Templates"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])

__all__ = ["api_router"]
