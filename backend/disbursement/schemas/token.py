"""Token operation schemas"""
from pydantic import BaseModel, Field


class MintRequest(BaseModel):
    recipient: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)


class TransferRequest(BaseModel):
    sender: str
    recipient: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


class TokenInfoResponse(BaseModel):
    name: str
    symbol: str
    decimals: int
    total_supply: int
    holder_count: int


class BalanceResponse(BaseModel):
    address: str
    balance: int
    ui_balance: float
