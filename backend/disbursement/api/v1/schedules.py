"""Vesting schedule API endpoints"""
from fastapi import APIRouter, Depends, Path
from typing import List

from disbursement.models.vesting import VestingSchedule
from disbursement.schemas.vesting import (
    CreateScheduleRequest,
    DisbursementResponse,
    FundRequest,
    MaxWithdrawResponse,
    ReclaimRequest,
    ScheduleResponse,
    WithdrawRequest,
)
from disbursement.services.registry import ScheduleRegistry, get_registry

router = APIRouter()


def _schedule_to_response(schedule: VestingSchedule) -> ScheduleResponse:
    return ScheduleResponse(**schedule.snapshot().to_dict())


def _disbursement_to_response(record) -> DisbursementResponse:
    return DisbursementResponse(
        kind=record.kind,
        caller=record.caller,
        destination=record.destination,
        amount=record.amount,
        timestamp=record.timestamp,
    )


@router.post("", response_model=ScheduleResponse, status_code=201)
async def create_schedule(
    request: CreateScheduleRequest,
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Create a new, unfunded disbursement schedule"""
    schedule = registry.create_schedule(
        receiver=request.receiver,
        controller=request.controller,
        disbursement_period=request.disbursement_period,
        start_date=request.start_date,
        cliff_date=request.cliff_date,
    )
    return _schedule_to_response(schedule)


@router.get("", response_model=List[ScheduleResponse])
async def list_schedules(registry: ScheduleRegistry = Depends(get_registry)):
    """List all schedules"""
    return [_schedule_to_response(s) for s in registry.list()]


@router.get("/{address}", response_model=ScheduleResponse)
async def get_schedule(
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    return _schedule_to_response(registry.get(address))


@router.get("/{address}/max-withdraw", response_model=MaxWithdrawResponse)
async def get_max_withdraw(
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Amount the receiver may withdraw right now"""
    schedule = registry.get(address)
    snapshot = schedule.snapshot()
    return MaxWithdrawResponse(
        address=schedule.address,
        max_withdraw=snapshot.max_withdraw,
        timestamp=snapshot.timestamp,
    )


@router.post("/{address}/withdraw", response_model=DisbursementResponse)
async def withdraw(
    request: WithdrawRequest,
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Withdraw vested tokens to any destination (receiver only)"""
    schedule = registry.get(address)
    record = schedule.withdraw(request.caller, request.destination, request.amount)
    return _disbursement_to_response(record)


@router.post("/{address}/reclaim", response_model=DisbursementResponse)
async def reclaim(
    request: ReclaimRequest,
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Return the entire remaining balance to the controller wallet (controller only)"""
    schedule = registry.get(address)
    record = schedule.reclaim(request.caller)
    return _disbursement_to_response(record)


@router.get("/{address}/history", response_model=List[DisbursementResponse])
async def get_history(
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    schedule = registry.get(address)
    return [_disbursement_to_response(r) for r in schedule.history]


@router.post("/{address}/fund", response_model=ScheduleResponse)
async def fund_schedule(
    request: FundRequest,
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Mint tokens onto the schedule's holding address"""
    schedule = registry.fund(address, request.amount)
    return _schedule_to_response(schedule)
