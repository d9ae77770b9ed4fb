"""Typed models used by the swap form engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


PriceTable = Dict[str, float]


class SwapField(str, Enum):
    """Form fields a validation error can be attached to."""

    SOURCE_ASSET = "source-asset"
    DESTINATION_ASSET = "destination-asset"
    SOURCE_AMOUNT = "source-amount"


class SwapFormStatus(str, Enum):
    """Lifecycle of a swap form session."""

    LOADING = "loading"    # Catalog and prices not yet available
    READY = "ready"        # Interactive


@dataclass(frozen=True)
class Asset:
    """A catalog entry. ``price`` is None when no source quoted it."""

    symbol: str
    name: str
    icon_url: str
    price: Optional[float] = None

    @property
    def has_price(self) -> bool:
        return self.price is not None and self.price > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "iconUrl": self.icon_url,
        }


@dataclass(frozen=True)
class FormState:
    """Raw user input. The destination amount is always derived, never stored."""

    source_asset: Optional[Asset] = None
    destination_asset: Optional[Asset] = None
    source_amount: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceAsset": self.source_asset.to_dict() if self.source_asset else None,
            "destinationAsset": self.destination_asset.to_dict() if self.destination_asset else None,
            "sourceAmount": self.source_amount,
        }


@dataclass(frozen=True)
class ValidationError:
    field: SwapField
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field.value, "message": self.message}


@dataclass(frozen=True)
class DerivedState:
    """Snapshot of every value computed from form state, prices and balances."""

    source_amount: float = 0.0
    exchange_rate: Optional[float] = None
    formatted_exchange_rate: Optional[str] = None
    destination_amount: float = 0.0
    formatted_destination_amount: str = ""
    source_fiat_value: Optional[float] = None
    destination_fiat_value: Optional[float] = None
    formatted_source_fiat_value: Optional[str] = None
    formatted_destination_fiat_value: Optional[str] = None
    source_balance: float = 0.0
    destination_balance: float = 0.0
    sufficient_balance: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceAmount": self.source_amount,
            "exchangeRate": self.exchange_rate,
            "formattedExchangeRate": self.formatted_exchange_rate,
            "destinationAmount": self.destination_amount,
            "formattedDestinationAmount": self.formatted_destination_amount,
            "sourceFiatValue": self.formatted_source_fiat_value,
            "destinationFiatValue": self.formatted_destination_fiat_value,
            "sourceBalance": self.source_balance,
            "destinationBalance": self.destination_balance,
            "sufficientBalance": self.sufficient_balance,
        }


@dataclass(frozen=True)
class SwapConfirmation:
    """What the user is shown after a swap went through."""

    source_amount: str
    source_symbol: str
    destination_amount: str
    destination_symbol: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceAmount": self.source_amount,
            "sourceSymbol": self.source_symbol,
            "destinationAmount": self.destination_amount,
            "destinationSymbol": self.destination_symbol,
        }


@dataclass(frozen=True)
class TransferReceipt:
    source_symbol: str
    destination_symbol: str
    debited: float
    credited: float


@dataclass(frozen=True)
class SwapFormView:
    """Read-only projection of a form session for the presentation layer."""

    status: SwapFormStatus
    form: FormState
    available_assets: Tuple[Asset, ...]
    derived: DerivedState
    errors: Tuple[ValidationError, ...] = ()
    balances: Dict[str, float] = field(default_factory=dict)
    confirmation: Optional[SwapConfirmation] = None
    can_submit: bool = False
    notice: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == SwapFormStatus.LOADING

    def error_for(self, swap_field: SwapField) -> Optional[str]:
        for error in self.errors:
            if error.field == swap_field:
                return error.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        field_errors: Dict[str, str] = {}
        for error in self.errors:
            field_errors.setdefault(error.field.value, error.message)
        return {
            "status": self.status.value,
            "isLoading": self.is_loading,
            "formData": self.form.to_dict(),
            "availableAssets": [asset.to_dict() for asset in self.available_assets],
            "computed": self.derived.to_dict(),
            "errors": [error.to_dict() for error in self.errors],
            "fieldErrors": field_errors,
            "balances": dict(self.balances),
            "confirmation": self.confirmation.to_dict() if self.confirmation else None,
            "canSubmit": self.can_submit,
            "notice": self.notice,
        }


class SwapEngineError(Exception):
    """Base error for defects inside the swap engine."""


class LedgerError(SwapEngineError, ValueError):
    """A transfer would leave a negative or half-applied balance."""


class InvalidTransitionError(SwapEngineError):
    """Raised when a form session is asked to make a transition it cannot make."""

    def __init__(self, from_status: SwapFormStatus, to_status: SwapFormStatus, reason: Optional[str] = None):
        self.from_status = from_status
        self.to_status = to_status
        message = f"Invalid transition from {from_status.value} to {to_status.value}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
