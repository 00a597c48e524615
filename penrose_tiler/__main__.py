import argparse
import logging
import sys
from typing import Optional, Sequence

from penrose_tiler import (
    EngineConfig,
    PenroseTiler,
    PrototileType,
    check_tiling,
    read_history,
    write_history,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    # basicConfig is a no-op once the engine package has installed a handler.
    logging.getLogger().setLevel(log_level)


def _print_tiles(tiler: PenroseTiler) -> None:
    for tile in tiler.tiles:
        corners = " ".join(f"({x:.3f}, {y:.3f})" for x, y in tile.world_points())
        print(f"#{tile.handle} {tile.tile_type.label}: {corners}")


def _report(tiler: PenroseTiler) -> None:
    warnings = check_tiling(tiler)
    print(f"Tiles: {len(tiler)}")
    print(f"Frontier: {len(tiler.frontier())}")
    print("Warnings:")
    if warnings:
        for warning in warnings:
            print(f"  - {warning}")
    else:
        print("  (none)")


def _cmd_grow(args: argparse.Namespace) -> None:
    config = EngineConfig(random_seed=args.seed, check_validity=not args.no_validity)
    tiler = PenroseTiler(config)
    if args.root:
        tiler.place_root(PrototileType.from_name(args.root))
    else:
        tiler.place_random_root()

    placed = tiler.grow(args.steps)
    logger.info("Placed %d tile(s) in %d step(s)", placed, args.steps)
    _report(tiler)
    if args.output:
        path = write_history(args.output, tiler.export_history())
        print(f"History written to {path}")


def _cmd_replay(args: argparse.Namespace) -> None:
    records = read_history(args.path)
    tiler = PenroseTiler()
    tiler.import_history(records)
    count = tiler.replay_all()
    logger.info("Replayed %d of %d record(s)", count, len(records))
    if args.tiles:
        _print_tiles(tiler)
    _report(tiler)
    if args.output:
        path = write_history(args.output, tiler.export_history())
        print(f"History written to {path}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Grow and replay Penrose rhombus tilings")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    grow = sub.add_parser("grow", help="Grow a random tiling")
    grow.add_argument("--steps", type=int, default=50, help="Number of placement steps (default: 50)")
    grow.add_argument("--seed", type=int, default=None, help="Random seed")
    grow.add_argument("--root", choices=["fat", "skinny"], help="Root tile type (default: random)")
    grow.add_argument("--no-validity", action="store_true", help="Disable dead-end retraction")
    grow.add_argument("--output", help="Write the placement history to this path")
    grow.set_defaults(func=_cmd_grow)

    replay = sub.add_parser("replay", help="Replay a saved placement history")
    replay.add_argument("path", help="History file to replay")
    replay.add_argument("--tiles", action="store_true", help="Print each tile's world polygon")
    replay.add_argument("--output", help="Write the replayed history to this path")
    replay.set_defaults(func=_cmd_replay)

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main(sys.argv[1:])
