"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from boothbook.api.routes import events, booths, reservations

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(events.router)
api_router.include_router(booths.router)
api_router.include_router(reservations.router)
