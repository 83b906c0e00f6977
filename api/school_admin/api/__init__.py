"""
API router aggregation.
"""
from fastapi import APIRouter
from school_admin.api.endpoints import groups, lessons, schedule

api_router = APIRouter()

# Each router already defines its own prefix
api_router.include_router(schedule.router)
api_router.include_router(groups.router)
api_router.include_router(lessons.router)
