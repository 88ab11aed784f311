"""Command line interface for map discovery."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter

from gymfinder.core.config import get_settings
from gymfinder.logging import setup_logging
from gymfinder.schemas.gym import Coordinate, ReconciledGym
from gymfinder.services.map_controller import GymMapController
from gymfinder.services.session import fetch_profile, load_session

_GYM_LIST = TypeAdapter(list[ReconciledGym])


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Gym finder map utilities")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs here")
    subparsers = parser.add_subparsers(dest="command", required=True)

    discover = subparsers.add_parser(
        "discover", help="Print verified + shadow gyms around a point as JSON"
    )
    discover.add_argument("--lat", type=float, default=settings.default_center_lat)
    discover.add_argument("--lng", type=float, default=settings.default_center_lng)
    discover.add_argument(
        "--radius-m",
        type=int,
        default=settings.discovery_radius_m,
        help="Search radius in meters",
    )

    subparsers.add_parser("whoami", help="Show the profile of the stored session")
    return parser


async def _discover(args: argparse.Namespace) -> int:
    controller = GymMapController.from_settings()
    await controller.load(Coordinate(lat=args.lat, lng=args.lng), args.radius_m)
    sys.stdout.write(_GYM_LIST.dump_json(controller.gyms, by_alias=True, indent=2).decode())
    sys.stdout.write("\n")
    return 0


async def _whoami(_: argparse.Namespace) -> int:
    settings = get_settings()
    session = load_session(settings.session_file)
    if session is None:
        print("not signed in")
        return 1
    profile = await fetch_profile(session, settings)
    if profile is None:
        print("session present but profile unavailable")
        return 1
    print(json.dumps(profile.model_dump(), ensure_ascii=False))
    return 0


_COMMANDS = {"discover": _discover, "whoami": _whoami}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file)
    return asyncio.run(_COMMANDS[args.command](args))
