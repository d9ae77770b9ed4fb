"""
Tests for the in-memory balance ledger.
"""

import math

import pytest

from swapdesk.core.swap.constants import INITIAL_BALANCES
from swapdesk.core.swap.ledger import BalanceLedger
from swapdesk.core.swap.models import LedgerError


@pytest.fixture
def ledger() -> BalanceLedger:
    return BalanceLedger({"BTC": 5.0, "USDT": 1000.0})


class TestBalanceLedger:

    def test_default_seed(self):
        ledger = BalanceLedger()
        assert ledger.balances() == {symbol: float(qty) for symbol, qty in INITIAL_BALANCES.items()}

    def test_seed_is_copied(self):
        seed = {"BTC": 1.0}
        ledger = BalanceLedger(seed)
        ledger.transfer("BTC", "ETH", 0.5, 10)
        assert seed == {"BTC": 1.0}
        assert INITIAL_BALANCES["BTC"] == 12.34

    def test_balances_returns_copy(self, ledger):
        snapshot = ledger.balances()
        snapshot["BTC"] = 0
        assert ledger.balance("BTC") == 5.0

    def test_unknown_symbol_has_zero_balance(self, ledger):
        assert ledger.balance("DOGE") == 0.0

    def test_transfer_debits_and_credits(self, ledger):
        receipt = ledger.transfer("BTC", "USDT", 2.0, 100000.0)

        assert ledger.balance("BTC") == 3.0
        assert ledger.balance("USDT") == 101000.0
        assert receipt.debited == 2.0
        assert receipt.credited == 100000.0

    def test_transfer_credits_new_symbol(self, ledger):
        ledger.transfer("USDT", "ETH", 250.0, 0.1)
        assert ledger.balance("ETH") == 0.1

    def test_debit_is_clamped_at_zero(self, ledger):
        receipt = ledger.transfer("BTC", "USDT", 8.0, 1.0)

        assert ledger.balance("BTC") == 0.0
        assert ledger.balance("USDT") == 1001.0
        assert receipt.debited == 5.0

    @pytest.mark.parametrize(
        "source_qty, destination_qty",
        [(-1.0, 1.0), (1.0, -1.0), (math.nan, 1.0), (1.0, math.inf)],
    )
    def test_invalid_quantities_leave_both_sides_untouched(self, ledger, source_qty, destination_qty):
        before = ledger.balances()
        with pytest.raises(LedgerError):
            ledger.transfer("BTC", "USDT", source_qty, destination_qty)
        assert ledger.balances() == before

    def test_same_symbol_rejected(self, ledger):
        with pytest.raises(LedgerError):
            ledger.transfer("BTC", "BTC", 1.0, 1.0)
        assert ledger.balance("BTC") == 5.0

    def test_negative_seed_rejected(self):
        with pytest.raises(LedgerError):
            BalanceLedger({"BTC": -1.0})
