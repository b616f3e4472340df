"""
Command line entry point.

    boatsetter-connector login
    boatsetter-connector boats
    boatsetter-connector block-day BOAT_ID 2025-02-28
    boatsetter-connector block-range BOAT_ID 2025-02-27 2025-03-01
    boatsetter-connector block-hours BOAT_ID 2025-03-16 08:00-10:00 12:00-14:00
    boatsetter-connector adjust-price BOAT_ID 2025-03-15 -20
    boatsetter-connector activate BOAT_ID

Credentials and run options come from the environment (see config.py).
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Tuple

from .config import ConnectorConfig, setup_logging
from .connector import BoatsetterConnector
from .exceptions import InvalidInputError
from .models import BoatAvailability
from .services import BoatService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_CREDENTIALS = 2


def _time_range(value: str) -> Tuple[str, str]:
    start, sep, end = value.partition("-")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected HH:MM-HH:MM, got {value!r}")
    return start.strip(), end.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boatsetter-connector",
        description="Manage Boatsetter listings and calendar availability",
    )
    parser.add_argument("--headless", action=argparse.BooleanOptionalAction, default=None,
                        help="hide or show the browser window (overrides HEADLESS)")
    parser.add_argument("--verbose", "-v", action="store_true", default=None,
                        help="debug logging (overrides VERBOSE)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("login", help="check that the configured credentials work")
    sub.add_parser("boats", help="list boats on the owner dashboard")

    block_day = sub.add_parser("block-day", help="mark a whole day unavailable")
    block_day.add_argument("boat_id")
    block_day.add_argument("date")

    block_range = sub.add_parser("block-range", help="mark every day of a range unavailable")
    block_range.add_argument("boat_id")
    block_range.add_argument("start_date")
    block_range.add_argument("end_date")

    block_hours = sub.add_parser("block-hours", help="block time ranges on one day")
    block_hours.add_argument("boat_id")
    block_hours.add_argument("date")
    block_hours.add_argument("ranges", nargs="+", type=_time_range, metavar="HH:MM-HH:MM")

    adjust = sub.add_parser("adjust-price", help="adjust a day's price by a percentage")
    adjust.add_argument("boat_id")
    adjust.add_argument("date")
    adjust.add_argument("percentage", type=int)

    for name in ("activate", "deactivate"):
        status = sub.add_parser(name, help=f"{name} a boat listing")
        status.add_argument("boat_id")

    return parser


async def _execute(service: BoatService, args: argparse.Namespace) -> bool:
    command = args.command

    if command == "login":
        return True

    if command == "boats":
        boats = await service.get_boats()
        for boat in boats:
            print(f"{boat.id}\t{boat.status or '-'}\t{boat.views} views\t{boat.title}")
        return bool(boats)

    if command == "block-day":
        return await service.block_day(args.boat_id, args.date)

    if command == "block-range":
        return await service.set_range_availability(
            args.boat_id, args.start_date, args.end_date, BoatAvailability(is_available=False)
        )

    if command == "block-hours":
        return await service.block_multiple_time_ranges(args.boat_id, args.date, args.ranges)

    if command == "adjust-price":
        return await service.adjust_day_price(args.boat_id, args.date, args.percentage)

    if command == "activate":
        return await service.activate_boat(args.boat_id)

    if command == "deactivate":
        return await service.deactivate_boat(args.boat_id)

    raise ValueError(f"Unknown command: {command}")


async def run(args: argparse.Namespace, config: ConnectorConfig) -> int:
    credentials = config.credentials
    if credentials is None:
        logger.error("Credentials not found. Set BOATSETTER_EMAIL and BOATSETTER_PASSWORD (or use a .env file)")
        return EXIT_NO_CREDENTIALS

    try:
        async with BoatsetterConnector(config) as connector:
            result = await connector.login(credentials)
            if not result.success:
                logger.error(f"Login failed: {result.message}")
                return EXIT_FAILED

            ok = await _execute(BoatService(connector), args)
    except InvalidInputError as e:
        logger.error(str(e))
        return EXIT_FAILED
    except Exception as e:
        logger.error(f"{args.command}: browser session failed: {e}")
        return EXIT_FAILED

    if ok:
        logger.info(f"{args.command}: done")
        return EXIT_OK

    logger.error(f"{args.command}: failed")
    return EXIT_FAILED


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ConnectorConfig.from_env()
    except InvalidInputError as e:
        parser.error(str(e))
    if args.headless is not None:
        config.headless = args.headless
    if args.verbose is not None:
        config.verbose = args.verbose

    setup_logging(config.verbose)
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
