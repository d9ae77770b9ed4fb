"""Derived values of a swap form: rate, receive amount, fiat values, balance check.

Nothing here is stored. ``compute_derived`` is called after every mutation of
the form or the ledger and returns a fresh immutable snapshot.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional

from .formatting import format_asset_amount, format_fiat_value, format_rate_label
from .models import Asset, DerivedState, FormState


def exchange_rate(source_price: float, destination_price: float) -> float:
    """Destination units per source unit. 0 means "no rate"."""
    if destination_price == 0:
        return 0.0
    return source_price / destination_price


def to_amount(source_amount: float, rate: float) -> float:
    return source_amount * rate


def parse_amount(text: str) -> float:
    """Numeric value of the amount field; anything unparseable counts as 0."""
    try:
        amount = float(text)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def pair_rate(source: Optional[Asset], destination: Optional[Asset]) -> Optional[float]:
    if source is None or destination is None:
        return None
    if not (source.has_price and destination.has_price):
        return None
    return exchange_rate(source.price, destination.price)


def fiat_value(amount: float, asset: Optional[Asset]) -> Optional[float]:
    if asset is None or asset.price is None or amount <= 0:
        return None
    return amount * asset.price


def has_sufficient_balance(source: Optional[Asset], amount: float, balance: float) -> bool:
    # An incomplete form is never judged insufficient.
    if source is None or amount <= 0:
        return True
    return amount <= balance


def compute_derived(form: FormState, balances: Mapping[str, float]) -> DerivedState:
    source, destination = form.source_asset, form.destination_asset

    source_balance = balances.get(source.symbol, 0.0) if source else 0.0
    destination_balance = balances.get(destination.symbol, 0.0) if destination else 0.0

    amount = parse_amount(form.source_amount)
    rate = pair_rate(source, destination)

    destination_amount = 0.0
    if rate and amount > 0:
        destination_amount = to_amount(amount, rate)

    source_fiat = fiat_value(amount, source)
    destination_fiat = fiat_value(destination_amount, destination)

    return DerivedState(
        source_amount=amount,
        exchange_rate=rate,
        formatted_exchange_rate=(
            format_rate_label(rate, source.symbol, destination.symbol)
            if rate is not None and source and destination
            else None
        ),
        destination_amount=destination_amount,
        formatted_destination_amount=format_asset_amount(destination_amount) if destination_amount > 0 else "",
        source_fiat_value=source_fiat,
        destination_fiat_value=destination_fiat,
        formatted_source_fiat_value=format_fiat_value(source_fiat),
        formatted_destination_fiat_value=format_fiat_value(destination_fiat),
        source_balance=source_balance,
        destination_balance=destination_balance,
        sufficient_balance=has_sufficient_balance(source, amount, source_balance),
    )
