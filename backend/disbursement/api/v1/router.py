"""API v1 router aggregation"""
from fastapi import APIRouter

from disbursement.api.v1 import clock, schedules, token

api_router = APIRouter()

api_router.include_router(schedules.router, prefix="/schedules", tags=["Schedules"])
api_router.include_router(token.router, prefix="/token", tags=["Token"])
api_router.include_router(clock.router, prefix="/clock", tags=["Clock"])
