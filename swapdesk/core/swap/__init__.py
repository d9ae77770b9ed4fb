"""
Swap Form Engine

Computes a consistent view of a two-asset swap from user input, prices and
balances, and applies confirmed swaps to an in-memory ledger.
"""

from .calculator import compute_derived, exchange_rate, parse_amount, to_amount
from .catalog import build_catalog, get_token_icon_url, pick_defaults
from .controller import SwapFormController
from .formatting import (
    format_asset_amount,
    format_balance_display,
    format_exchange_rate,
    format_fiat_value,
    trim_trailing_zeros,
)
from .ledger import BalanceLedger
from .models import (
    Asset,
    DerivedState,
    FormState,
    InvalidTransitionError,
    LedgerError,
    PriceTable,
    SwapConfirmation,
    SwapEngineError,
    SwapField,
    SwapFormStatus,
    SwapFormView,
    TransferReceipt,
    ValidationError,
)
from .validation import validate

__all__ = [
    # Controller
    "SwapFormController",
    # Engine
    "BalanceLedger",
    "compute_derived",
    "exchange_rate",
    "parse_amount",
    "to_amount",
    "validate",
    "build_catalog",
    "get_token_icon_url",
    "pick_defaults",
    # Formatting
    "trim_trailing_zeros",
    "format_asset_amount",
    "format_balance_display",
    "format_exchange_rate",
    "format_fiat_value",
    # Models
    "Asset",
    "DerivedState",
    "FormState",
    "PriceTable",
    "SwapConfirmation",
    "SwapField",
    "SwapFormStatus",
    "SwapFormView",
    "TransferReceipt",
    "ValidationError",
    # Errors
    "SwapEngineError",
    "LedgerError",
    "InvalidTransitionError",
]
