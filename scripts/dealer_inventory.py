#!/usr/bin/env python3
"""Manual dealer portal session against a live directory.

Reads ``DEALERPORTAL_URL`` / ``DEALERPORTAL_API_KEY`` (and the other
``DEALERPORTAL_*`` variables) and keeps the dealer session in a JSON
file, so consecutive runs behave like a browser tab that was reopened.

Examples::

    python scripts/dealer_inventory.py login 7801015009087
    python scripts/dealer_inventory.py list
    python scripts/dealer_inventory.py toggle 17
    python scripts/dealer_inventory.py logout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dealerportal import (
    DealerDashboard,
    DirectoryClient,
    JsonFileStore,
    LoggingNotifier,
    LookupFailedError,
    PathNavigator,
    PortalConfig,
    SessionManager,
)
from dealerportal.models import Car

_DEFAULT_STORE = Path.home() / ".dealerportal" / "session.json"


def _format_car(car: Car) -> str:
    extra = car.model_extra or {}
    label = " ".join(str(extra[key]) for key in ("make", "model", "year") if extra.get(key))
    status = "SOLD" if car.is_sold else "available"
    return f"  {car.id:>8}  {status:<9}  {label}"


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dealer portal session and inventory tool")
    parser.add_argument("--store", type=Path, help=f"Session file (default: {_DEFAULT_STORE})")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    login = sub.add_parser("login", help="Log in with the dealer ID number")
    login.add_argument("id_number")
    sub.add_parser("list", help="List the logged-in dealer's cars")
    toggle = sub.add_parser("toggle", help="Flip a car between sold and available")
    toggle.add_argument("car_id")
    sub.add_parser("logout", help="Forget the stored dealer session")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    config = PortalConfig.from_env()
    store_path = args.store or (Path(config.store_path) if config.store_path else _DEFAULT_STORE)
    store = JsonFileStore(store_path)
    navigator = PathNavigator()

    async with DirectoryClient(config) as directory:
        if args.command == "login":
            manager = SessionManager(store, directory, navigator, login_path=config.login_path)
            try:
                session = await manager.login(args.id_number)
            except LookupFailedError as exc:
                print(str(exc), file=sys.stderr)
                return 1
            print(f"Logged in as {session.dealer_name} (dealer {session.dealer_id})")
            return 0

        async with DealerDashboard(
            directory,
            store,
            navigator,
            LoggingNotifier(),
            login_path=config.login_path,
        ) as view:
            if args.command == "logout":
                view.logout()
                print("Logged out")
                return 0

            await view.mount()
            if navigator.current_path == config.login_path:
                print("Not logged in (run 'login' first)", file=sys.stderr)
                return 2

            inventory = view.inventory
            if args.command == "toggle":
                car = next((c for c in inventory.cars if c.id == args.car_id), None)
                if car is None:
                    print(f"Car {args.car_id} not found in inventory", file=sys.stderr)
                    return 1
                if not await inventory.toggle_status(car):
                    return 1

            if args.json_mode:
                print(json.dumps([c.model_dump(mode="json") for c in inventory.cars], indent=2, ensure_ascii=False))
            else:
                print(f"{view.session.dealer_name}: {len(inventory.cars)} cars")
                for car in inventory.cars:
                    print(_format_car(car))
            return 0 if inventory.last_error is None else 1


def main() -> int:
    args = _parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
