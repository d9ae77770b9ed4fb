"""In-memory balance ledger for a swap session."""

from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Optional

from .constants import INITIAL_BALANCES
from .models import LedgerError, TransferReceipt

logger = logging.getLogger(__name__)


class BalanceLedger:
    """Symbol -> available quantity. Balances never go below zero.

    The only mutation is ``transfer``, which computes both new balances
    before writing either, so no caller can observe a half-applied swap.
    """

    def __init__(self, seed: Optional[Mapping[str, float]] = None) -> None:
        source = INITIAL_BALANCES if seed is None else seed
        self._balances: Dict[str, float] = {}
        for symbol, quantity in source.items():
            if not math.isfinite(quantity) or quantity < 0:
                raise LedgerError(f"Seed balance for {symbol} must be a non-negative number, got {quantity}")
            self._balances[symbol] = float(quantity)

    def balance(self, symbol: str) -> float:
        return self._balances.get(symbol, 0.0)

    def balances(self) -> Dict[str, float]:
        return dict(self._balances)

    def transfer(
        self,
        source_symbol: str,
        destination_symbol: str,
        source_quantity: float,
        destination_quantity: float,
    ) -> TransferReceipt:
        """Debit ``source_quantity`` of one asset and credit ``destination_quantity`` of another."""
        if source_symbol == destination_symbol:
            raise LedgerError(f"Cannot transfer {source_symbol} into itself")
        for label, quantity in (("source", source_quantity), ("destination", destination_quantity)):
            if not math.isfinite(quantity) or quantity < 0:
                raise LedgerError(f"Invalid {label} quantity: {quantity}")

        previous = self.balance(source_symbol)
        new_source = max(0.0, previous - source_quantity)
        new_destination = self.balance(destination_symbol) + destination_quantity

        if previous < source_quantity:
            # The controller checks sufficiency first; reaching this means a stale check.
            logger.warning(
                "Clamped %s debit: requested %s, available %s",
                source_symbol,
                source_quantity,
                previous,
            )

        self._balances[source_symbol] = new_source
        self._balances[destination_symbol] = new_destination

        return TransferReceipt(
            source_symbol=source_symbol,
            destination_symbol=destination_symbol,
            debited=previous - new_source,
            credited=destination_quantity,
        )
