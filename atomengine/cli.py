from __future__ import annotations

import argparse
import importlib
import logging
import sys

from atomengine.content import ContentTables
from atomengine.formatting import format_number, format_state_report
from atomengine.leveling import level_progress
from atomengine.runtime import GameRuntime
from atomengine.state import GameState


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="atomengine",
        description="atomengine: Atom Clicker progression CLI",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    info = sub.add_parser("info", help="Show derived values for a state")
    info.add_argument("content_module", help="Python module with define_content()")
    info.add_argument(
        "--building",
        action="append",
        default=[],
        type=parse_building,
        metavar="ID=COUNT[:LEVEL]",
        help="Owned building, may be repeated",
    )
    info.add_argument(
        "--upgrade", action="append", default=[], help="Owned upgrade id"
    )
    info.add_argument(
        "--skill", action="append", default=[], help="Owned skill upgrade id"
    )
    info.add_argument("--xp", type=float, default=0.0, help="Total XP")
    info.add_argument("--clicks", type=int, default=0, help="Total clicks")

    levels = sub.add_parser("levels", help="Show the level reached by an XP total")
    levels.add_argument("xp", type=float, help="Total XP")

    ach = sub.add_parser("achievements", help="List the achievement catalog")
    ach.add_argument("content_module", help="Python module with define_content()")

    return parser


def load_content(module_path: str) -> ContentTables:
    """Import module and call define_content()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_content"):
        print(f"Error: module {module_path!r} has no define_content() function")
        sys.exit(1)
    return mod.define_content()


def parse_building(text: str) -> tuple[str, int, int]:
    """Parse ``id=count[:level]``."""
    bid, _, rest = text.partition("=")
    count_str, _, level_str = rest.partition(":")
    try:
        if not bid:
            raise ValueError(text)
        return bid, int(count_str), int(level_str or 0)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid building {text!r}, expected ID=COUNT[:LEVEL]"
        ) from None


def build_state(args: argparse.Namespace) -> GameState:
    state = GameState()
    for bid, count, level in args.building:
        bs = state.ensure_building(bid)
        bs.count = count
        bs.level = level
    state.upgrades = list(args.upgrade)
    state.skill_upgrades = list(args.skill)
    state.total_xp = args.xp
    state.total_clicks = args.clicks
    return state


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "levels":
        lp = level_progress(args.xp)
        print(f"Level: {lp.level}")
        print(f"XP into level: {lp.xp_into_level:.0f}")
        print(f"XP for next level: {lp.xp_for_next_level}")
        print(f"Progress: {lp.progress:.1f}%")

    elif args.command == "info":
        content = load_content(args.content_module)
        runtime = GameRuntime(content, build_state(args))
        print(format_state_report(runtime))

    elif args.command == "achievements":
        content = load_content(args.content_module)
        runtime = GameRuntime(content)
        for ach in runtime.achievement_catalog.values():
            print(f"{ach.id:.<32s} {ach.name}: {ach.description}")
        print(f"\n{format_number(len(runtime.achievement_catalog))} achievements")
