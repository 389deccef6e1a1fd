"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from daydicated.api.routes import auth, users, calendar, export, settings

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(calendar.router)
api_router.include_router(export.router)
api_router.include_router(settings.router)
