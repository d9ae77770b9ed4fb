"""SwapFormController owns a swap form session: form state, ledger, and intents."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from .calculator import compute_derived
from .catalog import build_catalog, pick_defaults
from .constants import CATALOG_SYMBOLS
from .formatting import format_asset_amount
from .ledger import BalanceLedger
from .models import (
    Asset,
    DerivedState,
    FormState,
    InvalidTransitionError,
    PriceTable,
    SwapConfirmation,
    SwapField,
    SwapFormStatus,
    SwapFormView,
    ValidationError,
)
from .validation import validate

# Digits with at most one decimal point. The empty string and "." are allowed
# so the user can type freely.
AMOUNT_INPUT_PATTERN = re.compile(r"[0-9]*\.?[0-9]*")

MSG_NO_RATE = "No exchange rate available for this pair, so nothing would be received"


class PriceSource(Protocol):
    async def fetch_prices(self, symbols: Iterable[str] = ...) -> PriceTable:
        ...


class SwapFormController:
    """
    Single-session swap form engine.

    Starts in LOADING and moves to READY once ``load_catalog`` has fetched
    prices. Every intent is synchronous and rejected while loading. After each
    mutation the derived snapshot is recomputed, so readers never see values
    computed from an older form or ledger.
    """

    TRANSITIONS = {
        SwapFormStatus.LOADING: {SwapFormStatus.READY},
        SwapFormStatus.READY: set(),
    }

    def __init__(
        self,
        price_service: PriceSource,
        *,
        initial_balances: Optional[Mapping[str, float]] = None,
        symbols: Sequence[str] = CATALOG_SYMBOLS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._price_service = price_service
        self._symbols: Tuple[str, ...] = tuple(symbols)
        self._ledger = BalanceLedger(initial_balances)

        self._status = SwapFormStatus.LOADING
        self._assets: Tuple[Asset, ...] = ()
        self._form = FormState()
        self._errors: List[ValidationError] = []
        self._confirmation: Optional[SwapConfirmation] = None
        self._notice: Optional[str] = None
        self._derived = compute_derived(self._form, self._ledger.balances())

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def status(self) -> SwapFormStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._status == SwapFormStatus.LOADING

    @property
    def form(self) -> FormState:
        return self._form

    @property
    def available_assets(self) -> Tuple[Asset, ...]:
        return self._assets

    @property
    def derived(self) -> DerivedState:
        return self._derived

    @property
    def errors(self) -> Tuple[ValidationError, ...]:
        return tuple(self._errors)

    @property
    def confirmation(self) -> Optional[SwapConfirmation]:
        return self._confirmation

    @property
    def notice(self) -> Optional[str]:
        """Why the last submit was refused when no field error explains it."""
        return self._notice

    @property
    def ledger(self) -> BalanceLedger:
        return self._ledger

    @property
    def can_submit(self) -> bool:
        if self.is_loading:
            return False
        return not validate(self._form, self._derived.sufficient_balance)

    def error_for(self, swap_field: SwapField) -> Optional[str]:
        for error in self._errors:
            if error.field == swap_field:
                return error.message
        return None

    def find_asset(self, symbol: str) -> Optional[Asset]:
        wanted = symbol.strip().upper()
        return next((asset for asset in self._assets if asset.symbol == wanted), None)

    def view(self) -> SwapFormView:
        return SwapFormView(
            status=self._status,
            form=self._form,
            available_assets=self._assets,
            derived=self._derived,
            errors=tuple(self._errors),
            balances=self._ledger.balances(),
            confirmation=self._confirmation,
            can_submit=self.can_submit,
            notice=self._notice,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _transition_to(self, target: SwapFormStatus, reason: Optional[str] = None) -> None:
        if target not in self.TRANSITIONS[self._status]:
            raise InvalidTransitionError(self._status, target, reason)
        self._logger.debug(f"Swap form {self._status.value} -> {target.value}")
        self._status = target

    async def load_catalog(self) -> SwapFormView:
        """Fetch prices, build the catalog, pick the default pair and become interactive."""
        if self._status != SwapFormStatus.LOADING:
            raise InvalidTransitionError(self._status, SwapFormStatus.READY, "catalog already loaded")

        try:
            prices = await self._price_service.fetch_prices(self._symbols)
        except Exception:
            self._logger.exception("Error loading token prices; continuing without prices")
            prices = {}

        assets = build_catalog(prices, self._symbols)
        source, destination = pick_defaults(assets)

        self._assets = tuple(assets)
        self._form = FormState(source_asset=source, destination_asset=destination, source_amount="")
        self._transition_to(SwapFormStatus.READY)
        self._refresh()

        self._logger.info(
            f"Loaded {len(assets)} assets ({len(prices)} priced), "
            f"default pair {source.symbol if source else None}/{destination.symbol if destination else None}"
        )
        return self.view()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def _accepts(self, intent: str) -> bool:
        if self.is_loading:
            self._logger.debug(f"Ignoring {intent} while loading")
            return False
        self._notice = None
        return True

    def _refresh(self) -> None:
        self._derived = compute_derived(self._form, self._ledger.balances())

    def _clear_errors(self, *fields: SwapField) -> None:
        self._errors = [error for error in self._errors if error.field not in fields]

    def select_source_asset(self, asset: Optional[Asset]) -> None:
        if not self._accepts("select_source_asset"):
            return
        # The old amount was denominated in the previous asset.
        self._form = replace(self._form, source_asset=asset, source_amount="")
        self._clear_errors(SwapField.SOURCE_ASSET, SwapField.SOURCE_AMOUNT)
        self._refresh()

    def select_destination_asset(self, asset: Optional[Asset]) -> None:
        if not self._accepts("select_destination_asset"):
            return
        self._form = replace(self._form, destination_asset=asset)
        self._clear_errors(SwapField.DESTINATION_ASSET)
        self._refresh()

    def edit_source_amount(self, text: str) -> bool:
        """Apply a keystroke to the amount field. Returns False if it was rejected."""
        if not self._accepts("edit_source_amount"):
            return False
        if text and not AMOUNT_INPUT_PATTERN.fullmatch(text):
            return False

        self._form = replace(self._form, source_amount=text)
        self._clear_errors(SwapField.SOURCE_AMOUNT)
        self._refresh()
        return True

    def flip_direction(self) -> None:
        """Swap the pair; the amount just received becomes the new input."""
        if not self._accepts("flip_direction"):
            return
        self._form = FormState(
            source_asset=self._form.destination_asset,
            destination_asset=self._form.source_asset,
            source_amount=self._derived.formatted_destination_amount,
        )
        self._errors = []
        self._refresh()

    def set_max_source_amount(self) -> None:
        """Fill in the balance as displayed. Balances of 1 or more are rounded to 4 decimals,
        so the filled amount can exceed the balance and report it as insufficient."""
        if not self._accepts("set_max_source_amount"):
            return
        if self._form.source_asset is None:
            return
        self._form = replace(self._form, source_amount=format_asset_amount(self._derived.source_balance))
        self._clear_errors(SwapField.SOURCE_AMOUNT)
        self._refresh()

    def validate(self) -> List[ValidationError]:
        """Run a full validation pass and publish its result."""
        if not self._accepts("validate"):
            return []
        self._errors = validate(self._form, self._derived.sufficient_balance)
        return list(self._errors)

    def submit(self) -> Optional[SwapConfirmation]:
        """Validate and, if the form is clean, apply the swap to the ledger."""
        if not self._accepts("submit"):
            return None

        self._refresh()
        if self.validate():
            return None

        source = self._form.source_asset
        destination = self._form.destination_asset
        source_quantity = self._derived.source_amount
        destination_quantity = self._derived.destination_amount
        if source is None or destination is None or source_quantity <= 0 or destination_quantity <= 0:
            self._logger.warning(
                f"Swap not applied: quantities {source_quantity} -> {destination_quantity} are not both positive"
            )
            self._notice = MSG_NO_RATE
            return None

        receipt = self._ledger.transfer(
            source.symbol,
            destination.symbol,
            source_quantity,
            destination_quantity,
        )
        self._confirmation = SwapConfirmation(
            source_amount=format_asset_amount(source_quantity),
            source_symbol=source.symbol,
            destination_amount=format_asset_amount(destination_quantity),
            destination_symbol=destination.symbol,
        )
        self._form = replace(self._form, source_amount="")
        self._refresh()

        self._logger.info(
            f"Swapped {receipt.debited} {receipt.source_symbol} for {receipt.credited} {receipt.destination_symbol}"
        )
        return self._confirmation

    def dismiss_confirmation(self) -> None:
        self._confirmation = None
