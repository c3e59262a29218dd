"""Vesting schedule schemas"""
from pydantic import BaseModel, Field
from typing import Optional

from disbursement.models.vesting import DisbursementKind, SchedulePhase


class CreateScheduleRequest(BaseModel):
    """Create a new disbursement schedule.

    The schedule starts unfunded. Tokens are moved onto its address
    afterwards, either through ``/fund`` or a plain ledger transfer.
    """
    receiver: str = Field(..., min_length=1)
    controller: str = Field(..., min_length=1)
    disbursement_period: int  # Seconds
    start_date: Optional[int] = None  # Unix timestamp, defaults to now
    cliff_date: Optional[int] = None  # Unix timestamp, defaults to start_date


class ScheduleResponse(BaseModel):
    address: str
    receiver: str
    controller: str
    start_date: int
    cliff_date: int
    disbursement_period: int
    withdrawn_tokens: int
    reclaimed_tokens: int
    balance: int
    total_allocated: int
    max_withdraw: int
    phase: SchedulePhase
    timestamp: int


class MaxWithdrawResponse(BaseModel):
    address: str
    max_withdraw: int
    timestamp: int


class WithdrawRequest(BaseModel):
    caller: str
    destination: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


class ReclaimRequest(BaseModel):
    caller: str


class FundRequest(BaseModel):
    amount: int = Field(..., gt=0)


class DisbursementResponse(BaseModel):
    kind: DisbursementKind
    caller: str
    destination: str
    amount: int
    timestamp: int
