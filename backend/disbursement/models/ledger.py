"""Fungible token ledger models"""
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol

import structlog

logger = structlog.get_logger()


class FungibleTokenLedger(Protocol):
    """The token ledger a schedule keeps its funds on.

    A schedule only ever reads its own balance and asks for transfers out of
    its own account; minting and funding happen outside of it.
    """

    def balance_of(self, account: str) -> int:
        ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        ...


class LedgerEntryType(str, Enum):
    """Journal entry types"""
    MINT = "mint"
    TRANSFER = "transfer"


@dataclass
class LedgerEntry:
    """A single journal entry on the ledger"""
    entry_type: LedgerEntryType
    recipient: str
    amount: int
    sender: Optional[str] = None  # None for mints


@dataclass
class InMemoryTokenLedger:
    """Process-local token ledger.

    Balances are integer base units. ``transfer`` is atomic: it either moves
    the full amount or returns False without touching any balance.
    """
    name: str
    symbol: str
    decimals: int = 18
    total_supply: int = 0
    balances: Dict[str, int] = field(default_factory=dict)
    journal: List[LedgerEntry] = field(default_factory=list)

    def __post_init__(self):
        if self.decimals < 0:
            raise ValueError("Decimals cannot be negative")
        self._lock = threading.RLock()

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self.balances.get(account, 0)

    def mint(self, recipient: str, amount: int) -> None:
        """Create ``amount`` new tokens on ``recipient``'s account"""
        if amount <= 0:
            raise ValueError("Mint amount must be positive")

        with self._lock:
            self.balances[recipient] = self.balances.get(recipient, 0) + amount
            self.total_supply += amount
            self.journal.append(LedgerEntry(
                entry_type=LedgerEntryType.MINT,
                recipient=recipient,
                amount=amount,
            ))

        logger.debug("Minted tokens", symbol=self.symbol, recipient=recipient, amount=amount)

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` from ``sender`` to ``recipient``.

        Returns False when the sender cannot cover the amount. Zero-amount
        transfers succeed and leave no journal entry.
        """
        if amount < 0:
            raise ValueError("Transfer amount cannot be negative")
        if amount == 0:
            return True

        with self._lock:
            sender_balance = self.balances.get(sender, 0)
            if sender_balance < amount:
                logger.debug(
                    "Transfer rejected",
                    symbol=self.symbol,
                    sender=sender,
                    balance=sender_balance,
                    amount=amount,
                )
                return False

            self.balances[sender] = sender_balance - amount
            self.balances[recipient] = self.balances.get(recipient, 0) + amount
            self.journal.append(LedgerEntry(
                entry_type=LedgerEntryType.TRANSFER,
                sender=sender,
                recipient=recipient,
                amount=amount,
            ))

        logger.debug(
            "Transferred tokens",
            symbol=self.symbol,
            sender=sender,
            recipient=recipient,
            amount=amount,
        )
        return True

    def holders(self) -> Dict[str, int]:
        """Accounts with a non-zero balance"""
        with self._lock:
            return {account: balance for account, balance in self.balances.items() if balance > 0}

    def to_ui_amount(self, amount: int) -> float:
        return amount / (10 ** self.decimals)

    def __repr__(self):
        return f"<InMemoryTokenLedger {self.symbol} (supply={self.total_supply})>"
