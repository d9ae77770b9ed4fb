"""Field-level validation of a swap form."""

from __future__ import annotations

import math
from typing import List

from .models import FormState, SwapField, ValidationError

MSG_SELECT_SOURCE = "Please select source token"
MSG_SELECT_DESTINATION = "Please select destination token"
MSG_SAME_ASSET = "Source and destination tokens must be different"
MSG_ENTER_AMOUNT = "Please enter amount"
MSG_INSUFFICIENT_BALANCE = "Insufficient balance"
MSG_AMOUNT_NOT_POSITIVE = "Amount must be greater than 0"


def _is_positive_number(text: str) -> bool:
    try:
        amount = float(text)
    except ValueError:
        return False
    return math.isfinite(amount) and amount > 0


def validate(form: FormState, sufficient_balance: bool) -> List[ValidationError]:
    """Return every problem blocking submission, in a fixed order.

    An empty list means the form can be submitted. Amount problems are
    mutually exclusive: an empty amount wins over an insufficient balance,
    which wins over a non-positive amount.
    """
    errors: List[ValidationError] = []

    if form.source_asset is None:
        errors.append(ValidationError(SwapField.SOURCE_ASSET, MSG_SELECT_SOURCE))

    if form.destination_asset is None:
        errors.append(ValidationError(SwapField.DESTINATION_ASSET, MSG_SELECT_DESTINATION))

    if (
        form.source_asset is not None
        and form.destination_asset is not None
        and form.source_asset.symbol == form.destination_asset.symbol
    ):
        errors.append(ValidationError(SwapField.DESTINATION_ASSET, MSG_SAME_ASSET))

    if not form.source_amount or form.source_amount == "0":
        errors.append(ValidationError(SwapField.SOURCE_AMOUNT, MSG_ENTER_AMOUNT))
    elif not sufficient_balance:
        errors.append(ValidationError(SwapField.SOURCE_AMOUNT, MSG_INSUFFICIENT_BALANCE))
    elif not _is_positive_number(form.source_amount):
        errors.append(ValidationError(SwapField.SOURCE_AMOUNT, MSG_AMOUNT_NOT_POSITIVE))

    return errors
