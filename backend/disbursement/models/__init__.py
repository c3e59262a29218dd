"""Domain models"""
from disbursement.models.ledger import (
    FungibleTokenLedger,
    InMemoryTokenLedger,
    LedgerEntry,
    LedgerEntryType,
)
from disbursement.models.vesting import (
    Disbursement,
    DisbursementKind,
    SchedulePhase,
    ScheduleSnapshot,
    VestingSchedule,
)

__all__ = [
    # Token ledger
    "FungibleTokenLedger",
    "InMemoryTokenLedger",
    "LedgerEntry",
    "LedgerEntryType",
    # Vesting
    "Disbursement",
    "DisbursementKind",
    "SchedulePhase",
    "ScheduleSnapshot",
    "VestingSchedule",
]
