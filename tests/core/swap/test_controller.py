"""
Tests for the Swap Form Controller

Covers the loading lifecycle, every intent, and the end-to-end swap scenarios.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from swapdesk.core.swap import (
    InvalidTransitionError,
    SwapField,
    SwapFormController,
    SwapFormStatus,
)
from swapdesk.core.swap.constants import INITIAL_BALANCES
from swapdesk.core.swap.controller import MSG_NO_RATE


PRICES = {"BTC": 50000.0, "USDT": 1.0, "ETH": 2500.0}
BALANCES = {"BTC": 5.0, "USDT": 1000.0, "ETH": 10.0}


# =============================================================================
# Fixtures
# =============================================================================

def price_service(prices=None, error=None) -> MagicMock:
    service = MagicMock()
    if error is not None:
        service.fetch_prices = AsyncMock(side_effect=error)
    else:
        service.fetch_prices = AsyncMock(return_value=dict(PRICES if prices is None else prices))
    return service


async def ready_controller(prices=None, balances=None) -> SwapFormController:
    controller = SwapFormController(
        price_service(prices),
        initial_balances=BALANCES if balances is None else balances,
    )
    await controller.load_catalog()
    return controller


# =============================================================================
# Lifecycle Tests
# =============================================================================

class TestLifecycle:

    def test_initial_state_is_loading(self):
        controller = SwapFormController(price_service())
        assert controller.status == SwapFormStatus.LOADING
        assert controller.is_loading is True
        assert controller.available_assets == ()
        assert controller.can_submit is False

    def test_intents_are_ignored_while_loading(self):
        controller = SwapFormController(price_service())

        assert controller.edit_source_amount("1") is False
        controller.flip_direction()
        controller.set_max_source_amount()
        assert controller.submit() is None
        assert controller.validate() == []

        assert controller.form.source_amount == ""
        assert controller.errors == ()

    @pytest.mark.asyncio
    async def test_load_catalog_picks_default_pair(self):
        controller = await ready_controller()

        assert controller.status == SwapFormStatus.READY
        assert controller.form.source_asset.symbol == "BTC"
        assert controller.form.destination_asset.symbol == "USDT"
        assert controller.form.source_amount == ""
        assert controller.find_asset("btc").price == 50000.0
        assert controller.find_asset("SWTH").price is None

    @pytest.mark.asyncio
    async def test_load_catalog_twice_raises(self):
        controller = await ready_controller()
        with pytest.raises(InvalidTransitionError):
            await controller.load_catalog()

    @pytest.mark.asyncio
    async def test_price_failure_still_loads(self):
        controller = SwapFormController(price_service(error=RuntimeError("boom")))
        view = await controller.load_catalog()

        assert view.is_loading is False
        assert all(asset.price is None for asset in view.available_assets)
        assert view.form.source_asset.symbol == "BTC"

    @pytest.mark.asyncio
    async def test_default_seed_ledger(self):
        controller = SwapFormController(price_service())
        await controller.load_catalog()
        assert controller.ledger.balance("BTC") == INITIAL_BALANCES["BTC"]


# =============================================================================
# Intent Tests
# =============================================================================

class TestIntents:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", ".", "0.", "12.5", ".25", "007"])
    async def test_amount_accepts_decimal_syntax(self, text):
        controller = await ready_controller()
        assert controller.edit_source_amount(text) is True
        assert controller.form.source_amount == text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["1.2.3", "abc", "-1", "1e5", "1,5", " 1"])
    async def test_amount_rejects_invalid_keystrokes(self, text):
        controller = await ready_controller()
        controller.edit_source_amount("4")

        assert controller.edit_source_amount(text) is False
        assert controller.form.source_amount == "4"

    @pytest.mark.asyncio
    async def test_select_source_clears_amount_and_source_errors(self):
        controller = await ready_controller()
        controller.select_destination_asset(None)
        controller.validate()
        assert controller.error_for(SwapField.SOURCE_AMOUNT) == "Please enter amount"

        controller.edit_source_amount("1")
        controller.validate()
        controller.select_source_asset(controller.find_asset("ETH"))

        assert controller.form.source_asset.symbol == "ETH"
        assert controller.form.source_amount == ""
        assert controller.error_for(SwapField.SOURCE_AMOUNT) is None
        assert controller.error_for(SwapField.DESTINATION_ASSET) == "Please select destination token"

    @pytest.mark.asyncio
    async def test_select_destination_keeps_amount(self):
        controller = await ready_controller()
        controller.edit_source_amount("1")
        controller.select_destination_asset(controller.find_asset("ETH"))

        assert controller.form.source_amount == "1"
        assert controller.derived.exchange_rate == 20
        assert controller.derived.destination_amount == 20

    @pytest.mark.asyncio
    async def test_edit_clears_amount_error(self):
        controller = await ready_controller()
        controller.validate()
        assert controller.error_for(SwapField.SOURCE_AMOUNT) is not None

        controller.edit_source_amount("1")
        assert controller.error_for(SwapField.SOURCE_AMOUNT) is None

    @pytest.mark.asyncio
    async def test_set_max_uses_ledger_balance(self):
        controller = await ready_controller(balances={"BTC": 1.23456789, "USDT": 0})
        controller.set_max_source_amount()
        assert controller.form.source_amount == "1.2346"

    @pytest.mark.asyncio
    async def test_set_max_rounds_up_above_balance(self):
        controller = await ready_controller(balances={"BTC": 1.99999, "USDT": 0})
        controller.set_max_source_amount()

        assert controller.form.source_amount == "2"
        assert controller.derived.sufficient_balance is False

    @pytest.mark.asyncio
    async def test_set_max_without_source_is_noop(self):
        controller = await ready_controller()
        controller.select_source_asset(None)
        controller.set_max_source_amount()
        assert controller.form.source_amount == ""

    @pytest.mark.asyncio
    async def test_dismiss_confirmation(self):
        controller = await ready_controller()
        controller.edit_source_amount("1")
        assert controller.submit() is not None
        balances = controller.ledger.balances()

        controller.dismiss_confirmation()

        assert controller.confirmation is None
        assert controller.ledger.balances() == balances


# =============================================================================
# Swap Scenarios
# =============================================================================

class TestScenarios:

    @pytest.mark.asyncio
    async def test_rate_and_receive_amount(self):
        controller = await ready_controller()
        controller.select_source_asset(controller.find_asset("BTC"))
        controller.select_destination_asset(controller.find_asset("USDT"))
        controller.edit_source_amount("2")

        derived = controller.derived
        assert derived.exchange_rate == 50000
        assert derived.destination_amount == 100000
        assert derived.formatted_exchange_rate == "1 BTC = 50000 USDT"
        assert derived.formatted_destination_amount == "100000"
        assert derived.formatted_source_fiat_value == "$100,000.00"

    @pytest.mark.asyncio
    async def test_insufficient_balance_blocks_submit(self):
        controller = await ready_controller()
        controller.edit_source_amount("10")

        assert controller.derived.sufficient_balance is False
        assert controller.can_submit is False
        assert controller.submit() is None
        assert controller.error_for(SwapField.SOURCE_AMOUNT) == "Insufficient balance"
        assert controller.ledger.balances() == BALANCES

    @pytest.mark.asyncio
    async def test_same_asset_blocks_submit(self):
        controller = await ready_controller()
        controller.select_destination_asset(controller.find_asset("BTC"))
        controller.edit_source_amount("1")

        assert controller.can_submit is False
        assert controller.submit() is None
        assert controller.error_for(SwapField.DESTINATION_ASSET) == "Source and destination tokens must be different"

    @pytest.mark.asyncio
    async def test_flip_uses_received_amount(self):
        controller = await ready_controller()
        controller.edit_source_amount("1")
        controller.validate()
        controller.flip_direction()

        assert controller.form.source_asset.symbol == "USDT"
        assert controller.form.destination_asset.symbol == "BTC"
        assert controller.form.source_amount == "50000"
        assert controller.errors == ()

    @pytest.mark.asyncio
    async def test_flip_without_rate_clears_amount(self):
        controller = await ready_controller(prices={})
        controller.edit_source_amount("1")
        controller.flip_direction()
        assert controller.form.source_amount == ""

    @pytest.mark.asyncio
    async def test_no_prices_keeps_form_interactive(self):
        controller = await ready_controller(prices={})
        controller.edit_source_amount("1")

        derived = controller.derived
        assert derived.exchange_rate is None
        assert derived.source_fiat_value is None
        assert derived.destination_fiat_value is None
        assert controller.validate() == []
        assert controller.can_submit is True

        # Nothing is received without a rate, so the ledger is left alone.
        assert controller.submit() is None
        assert controller.ledger.balances() == BALANCES
        assert controller.notice == MSG_NO_RATE
        assert controller.view().notice == MSG_NO_RATE
        assert controller.errors == ()

        controller.edit_source_amount("2")
        assert controller.notice is None

    @pytest.mark.asyncio
    async def test_submit_applies_transfer(self):
        controller = await ready_controller()
        controller.edit_source_amount("2")

        confirmation = controller.submit()

        assert confirmation is not None
        assert confirmation.to_dict() == {
            "sourceAmount": "2",
            "sourceSymbol": "BTC",
            "destinationAmount": "100000",
            "destinationSymbol": "USDT",
        }
        assert controller.ledger.balance("BTC") == 3.0
        assert controller.ledger.balance("USDT") == 101000.0
        assert controller.form.source_amount == ""
        assert controller.form.source_asset.symbol == "BTC"
        assert controller.form.destination_asset.symbol == "USDT"
        assert controller.derived.source_balance == 3.0

    @pytest.mark.asyncio
    async def test_sessions_do_not_share_ledgers(self):
        first = await ready_controller()
        second = await ready_controller()

        first.edit_source_amount("1")
        first.submit()

        assert first.ledger.balance("BTC") == 4.0
        assert second.ledger.balance("BTC") == 5.0
        assert BALANCES["BTC"] == 5.0


# =============================================================================
# Projection Tests
# =============================================================================

class TestView:

    @pytest.mark.asyncio
    async def test_view_to_dict(self):
        controller = await ready_controller()
        controller.edit_source_amount("10")
        controller.validate()

        payload = controller.view().to_dict()

        assert payload["status"] == "ready"
        assert payload["isLoading"] is False
        assert payload["formData"]["sourceAsset"]["symbol"] == "BTC"
        assert payload["formData"]["sourceAmount"] == "10"
        assert payload["fieldErrors"] == {"source-amount": "Insufficient balance"}
        assert payload["canSubmit"] is False
        assert payload["confirmation"] is None
        assert payload["computed"]["formattedExchangeRate"] == "1 BTC = 50000 USDT"
        assert len(payload["availableAssets"]) == 15

    @pytest.mark.asyncio
    async def test_view_error_lookup(self):
        controller = await ready_controller()
        controller.select_source_asset(None)
        controller.validate()

        view = controller.view()
        assert view.error_for(SwapField.SOURCE_ASSET) == "Please select source token"
        assert view.error_for(SwapField.DESTINATION_ASSET) is None
