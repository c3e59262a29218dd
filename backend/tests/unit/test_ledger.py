"""Unit tests for the in-memory token ledger"""
import pytest

from disbursement.models.ledger import InMemoryTokenLedger, LedgerEntryType

from tests.constants import RECEIVER as ALICE, STRANGER as BOB


class TestMint:
    """Tests for minting"""

    def test_mint_credits_recipient(self, ledger):
        ledger.mint(ALICE, 500)
        assert ledger.balance_of(ALICE) == 500
        assert ledger.total_supply == 500

    def test_mint_records_journal_entry(self, ledger):
        ledger.mint(ALICE, 500)
        entry = ledger.journal[-1]
        assert entry.entry_type == LedgerEntryType.MINT
        assert entry.recipient == ALICE
        assert entry.sender is None
        assert entry.amount == 500

    @pytest.mark.parametrize("amount", [0, -1])
    def test_mint_requires_positive_amount(self, ledger, amount):
        with pytest.raises(ValueError):
            ledger.mint(ALICE, amount)
        assert ledger.total_supply == 0


class TestTransfer:
    """Tests for transfers"""

    def test_unknown_account_has_zero_balance(self, ledger):
        assert ledger.balance_of(BOB) == 0

    def test_transfer_moves_tokens(self, ledger):
        ledger.mint(ALICE, 500)
        assert ledger.transfer(ALICE, BOB, 200) is True
        assert ledger.balance_of(ALICE) == 300
        assert ledger.balance_of(BOB) == 200
        assert ledger.total_supply == 500

        entry = ledger.journal[-1]
        assert entry.entry_type == LedgerEntryType.TRANSFER
        assert (entry.sender, entry.recipient, entry.amount) == (ALICE, BOB, 200)

    def test_insufficient_balance_changes_nothing(self, ledger):
        ledger.mint(ALICE, 100)
        assert ledger.transfer(ALICE, BOB, 101) is False
        assert ledger.balance_of(ALICE) == 100
        assert ledger.balance_of(BOB) == 0
        assert len(ledger.journal) == 1

    def test_zero_transfer_succeeds_silently(self, ledger):
        assert ledger.transfer(ALICE, BOB, 0) is True
        assert ledger.journal == []

    def test_negative_transfer_rejected(self, ledger):
        ledger.mint(ALICE, 100)
        with pytest.raises(ValueError):
            ledger.transfer(ALICE, BOB, -5)
        assert ledger.balance_of(ALICE) == 100


class TestLedgerInfo:
    """Tests for supply and holder queries"""

    def test_holders_skip_empty_accounts(self, ledger):
        ledger.mint(ALICE, 100)
        ledger.transfer(ALICE, BOB, 100)
        assert ledger.holders() == {BOB: 100}

    def test_ui_amount(self, ledger):
        assert ledger.to_ui_amount(15 * 10 ** 17) == 1.5

    def test_custom_decimals(self):
        ledger = InMemoryTokenLedger(name="Cents", symbol="CNT", decimals=2)
        assert ledger.to_ui_amount(250) == 2.5

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValueError):
            InMemoryTokenLedger(name="Bad", symbol="BAD", decimals=-1)
