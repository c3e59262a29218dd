"""Token ledger API endpoints"""
from fastapi import APIRouter, Depends, HTTPException, Path

from disbursement.schemas.token import (
    BalanceResponse,
    MintRequest,
    TokenInfoResponse,
    TransferRequest,
)
from disbursement.services.registry import ScheduleRegistry, get_registry

router = APIRouter()


@router.get("", response_model=TokenInfoResponse)
async def get_token_info(registry: ScheduleRegistry = Depends(get_registry)):
    ledger = registry.ledger
    return TokenInfoResponse(
        name=ledger.name,
        symbol=ledger.symbol,
        decimals=ledger.decimals,
        total_supply=ledger.total_supply,
        holder_count=len(ledger.holders()),
    )


@router.post("/mint", response_model=BalanceResponse)
async def mint_tokens(
    request: MintRequest,
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Mint new tokens to an address"""
    ledger = registry.ledger
    ledger.mint(request.recipient, request.amount)
    balance = ledger.balance_of(request.recipient)
    return BalanceResponse(
        address=request.recipient,
        balance=balance,
        ui_balance=ledger.to_ui_amount(balance),
    )


@router.post("/transfer", response_model=BalanceResponse)
async def transfer_tokens(
    request: TransferRequest,
    registry: ScheduleRegistry = Depends(get_registry),
):
    """Transfer tokens between addresses; returns the recipient's new balance.

    Schedule holdings only leave through withdraw or reclaim.
    """
    if registry.is_schedule(request.sender):
        raise HTTPException(status_code=403, detail="Schedule funds can only leave via withdraw or reclaim")

    ledger = registry.ledger
    if not ledger.transfer(request.sender, request.recipient, request.amount):
        raise HTTPException(status_code=409, detail="Insufficient balance for transfer")
    balance = ledger.balance_of(request.recipient)
    return BalanceResponse(
        address=request.recipient,
        balance=balance,
        ui_balance=ledger.to_ui_amount(balance),
    )


@router.get("/balance/{address}", response_model=BalanceResponse)
async def get_balance(
    address: str = Path(...),
    registry: ScheduleRegistry = Depends(get_registry),
):
    ledger = registry.ledger
    balance = ledger.balance_of(address)
    return BalanceResponse(
        address=address,
        balance=balance,
        ui_balance=ledger.to_ui_amount(balance),
    )
