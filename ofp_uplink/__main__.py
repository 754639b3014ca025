"""Command line entry point.

Downloads the latest SimBrief OFP of a user, uplinks it into an
in-memory flight plan and prints the resulting legs:

    python -m ofp_uplink <username> [--user-id ID] [--procedures]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .adapters.flight_plan import InMemoryFlightPlan
from .config import get_config
from .container import get_container
from .ports.flight_plan import FlightPlanPort
from .services import UplinkService


def _build_parser(default_procedures: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ofp_uplink",
        description="Uplink the latest SimBrief OFP into a flight plan.",
    )
    parser.add_argument("username", help="SimBrief username")
    parser.add_argument("--user-id", dest="user_id", default=None, help="SimBrief numeric user id")
    parser.add_argument(
        "--procedures",
        action="store_true",
        default=default_procedures,
        help="Attach departure and arrival procedures instead of flying their fixes direct",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = get_config()
    logging.basicConfig(level=config.observability.level, format=config.observability.format)

    args = _build_parser(config.uplink.uplink_procedures).parse_args(argv)

    container = get_container()
    service: UplinkService = container.resolve(UplinkService)
    route, error = service.uplink_for_user_safe(args.username, args.user_id, args.procedures)

    if error is not None:
        print(error, file=sys.stderr)
        return 1

    assert route is not None
    print(f"{route.callsign}: {route.origin.ident} -> {route.destination.ident} ({route.alternate or 'no alternate'})")

    flight_plan: InMemoryFlightPlan = container.resolve(FlightPlanPort)
    for index, element in enumerate(flight_plan.all_elements):
        if element.is_discontinuity:
            print(f"{index:3d}  ---- DISCONTINUITY ----")
        else:
            via = element.via or "DCT"
            print(f"{index:3d}  {element.fix.ident:<12} {via}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
