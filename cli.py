#!/usr/bin/env python3
"""Simple CLI for trying the swap form engine locally"""

import argparse
import asyncio
from typing import Optional

from swapdesk.core.swap import SwapFormController, SwapFormView, format_balance_display
from swapdesk.core.swap.constants import CATALOG_SYMBOLS
from swapdesk.logging_config import setup_logging
from swapdesk.services.prices import price_service


def print_prices(view: SwapFormView):
    """Pretty print the loaded catalog"""
    print("\n💱 Asset Catalog")
    print("=" * 50)
    for i, asset in enumerate(view.available_assets, 1):
        price_str = f"${asset.price:,.4f}" if asset.price is not None else "No price"
        balance = view.balances.get(asset.symbol, 0.0)
        print(f"{i:2d}. {asset.symbol:<6} {asset.name:<14} {price_str:>16}  bal {format_balance_display(balance)}")


def print_view(view: SwapFormView):
    form = view.form
    derived = view.derived
    source = form.source_asset.symbol if form.source_asset else "-"
    destination = form.destination_asset.symbol if form.destination_asset else "-"

    print("\n🔄 Swap")
    print("=" * 50)
    print(f"From: {form.source_amount or '0'} {source}  ({derived.formatted_source_fiat_value or 'n/a'})")
    print(f"To:   {derived.formatted_destination_amount or '0'} {destination}  ({derived.formatted_destination_fiat_value or 'n/a'})")
    print(f"Rate: {derived.formatted_exchange_rate or 'unavailable'}")
    for error in view.errors:
        print(f"❌ {error.field.value}: {error.message}")
    if view.notice:
        print(f"⚠️  {view.notice}")
    if view.confirmation:
        c = view.confirmation
        print(f"✅ Swapped {c.source_amount} {c.source_symbol} for {c.destination_amount} {c.destination_symbol}")


async def cli_prices():
    controller = SwapFormController(price_service)
    print_prices(await controller.load_catalog())


async def cli_swap(source: str, destination: str, amount: str, dry_run: bool = False):
    controller = SwapFormController(price_service)
    await controller.load_catalog()

    for label, symbol in (("source", source), ("destination", destination)):
        if controller.find_asset(symbol) is None:
            print(f"❌ Unknown {label} asset: {symbol}")
            return

    controller.select_source_asset(controller.find_asset(source))
    controller.select_destination_asset(controller.find_asset(destination))
    if amount.lower() == "max":
        controller.set_max_source_amount()
    elif not controller.edit_source_amount(amount):
        print(f"❌ Invalid amount: {amount}")
        return

    if dry_run:
        controller.validate()
    else:
        controller.submit()

    view = controller.view()
    print_view(view)
    if view.confirmation:
        for symbol in (view.confirmation.source_symbol, view.confirmation.destination_symbol):
            print(f"   {format_balance_display(view.balances.get(symbol, 0.0), symbol)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SwapDesk CLI")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("prices", help="Load the catalog and show prices and balances")

    swap_parser = subparsers.add_parser("swap", help="Run one swap against the seed ledger")
    swap_parser.add_argument("source", type=str.upper, help=f"Source symbol ({', '.join(CATALOG_SYMBOLS)})")
    swap_parser.add_argument("destination", type=str.upper, help="Destination symbol")
    swap_parser.add_argument("amount", help="Amount of the source asset, or 'max'")
    swap_parser.add_argument("--dry-run", action="store_true", help="Quote and validate without applying the swap")

    return parser


async def main(argv: Optional[list] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return

    if args.command == "prices":
        await cli_prices()

    elif args.command == "swap":
        await cli_swap(args.source, args.destination, args.amount, dry_run=args.dry_run)

    else:
        print(f"❌ Unknown command: {args.command}")
        parser.print_help()


if __name__ == "__main__":
    asyncio.run(main())
