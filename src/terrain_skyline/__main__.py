"""Command-line entrypoint for terrain_skyline."""

from __future__ import annotations

import argparse
import json
from collections.abc import Sequence
from dataclasses import replace

import numpy as np

from terrain_skyline.config import TerrainConfig, config_from_env, logging_config_from_env
from terrain_skyline.errors import ConfigurationError
from terrain_skyline.log import configure_logging
from terrain_skyline.orchestrate.frames import FrameDriver


def _apply_cli_flags(cfg: TerrainConfig, args: argparse.Namespace) -> TerrainConfig:
    """Layer explicit CLI flags over the environment-derived config."""
    changes = {}
    for name in ("width", "height", "seed", "eye_height", "angle_steps"):
        value = getattr(args, name)
        if value is not None:
            changes[name] = value
    if args.no_overrides:
        changes["overrides"] = ()
    return replace(cfg, **changes) if changes else cfg


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="terrain_skyline",
        description="Synthesize a noise heightmap and extract viewpoint silhouettes.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--width", type=int, default=None)
    common.add_argument("--height", type=int, default=None)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--eye-height", dest="eye_height", type=float, default=None)
    common.add_argument("--angle-steps", dest="angle_steps", type=int, default=None)
    common.add_argument(
        "--no-overrides",
        action="store_true",
        help="Skip the configured pit/peak rectangles.",
    )

    subparsers = parser.add_subparsers(dest="command")
    profile = subparsers.add_parser(
        "profile",
        parents=[common],
        help="Print one silhouette profile as JSON.",
    )
    profile.add_argument("--x", type=int, default=None)
    profile.add_argument("--y", type=int, default=None)

    frames = subparsers.add_parser(
        "frames",
        parents=[common],
        help="Sweep the viewpoint diagonally and report per-frame extraction time.",
    )
    frames.add_argument("--count", type=int, default=10)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(logging_config_from_env())
    try:
        cfg = _apply_cli_flags(config_from_env(), args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    driver = FrameDriver.from_config(cfg, np.random.default_rng(cfg.seed))

    if args.command == "profile":
        current = driver.viewpoint
        driver.move_to(
            current.x if args.x is None else args.x,
            current.y if args.y is None else args.y,
        )
        result = driver.tick()
        print(json.dumps(result.profile.to_dict()))
        return 0

    if args.command == "frames":
        if args.count <= 0:
            parser.error("--count must be positive")
        for i in range(args.count):
            t = (i + 0.5) / args.count
            driver.move_to(t * cfg.width, t * cfg.height)
            result = driver.tick()
            best = max(result.profile.slopes())
            vp = result.profile.viewpoint
            print(
                f"frame={result.frame} x={vp[0]} y={vp[1]} "
                f"max_slope={best:.4f} elapsed_ms={result.elapsed_ms:.3f}"
            )
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
