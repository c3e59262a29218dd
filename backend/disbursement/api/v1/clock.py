"""Clock API endpoints"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from disbursement.services.clock import ManualClock
from disbursement.services.registry import ScheduleRegistry, get_registry

router = APIRouter()


class ClockResponse(BaseModel):
    timestamp: int
    manual: bool


class AdvanceClockRequest(BaseModel):
    seconds: int = Field(..., ge=0)


@router.get("", response_model=ClockResponse)
async def get_clock(registry: ScheduleRegistry = Depends(get_registry)):
    return ClockResponse(
        timestamp=registry.clock.now(),
        manual=isinstance(registry.clock, ManualClock),
    )


@router.post("/advance", response_model=ClockResponse)
async def advance_clock(
    request: AdvanceClockRequest,
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Move the manual clock forward (simulation mode only)"""
    if not isinstance(registry.clock, ManualClock):
        raise HTTPException(status_code=400, detail="Clock is not in manual mode")
    timestamp = registry.clock.advance(request.seconds)
    return ClockResponse(timestamp=timestamp, manual=True)
