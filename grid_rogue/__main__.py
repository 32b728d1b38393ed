"""Command line entry point: ``python -m grid_rogue``.

Play happens on stdin/stdout through :class:`LineInput` and
:class:`TextRenderer`; log records go to a file so they never mix with the
game screen.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from grid_rogue.config import GameConfig
from grid_rogue.input import LineInput
from grid_rogue.persistence import SaveStore
from grid_rogue.renderer.text import TextRenderer
from grid_rogue.session.context import GameContext
from grid_rogue.session.controller import main_menu
from grid_rogue.types import AIOrder


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid_rogue", description="Terminal roguelike with save/load."
    )
    parser.add_argument("--seed", type=int, default=None, help="Dungeon and AI seed.")
    parser.add_argument(
        "--save-path", default=GameConfig.save_path, help="Save file location."
    )
    parser.add_argument(
        "--ai-order",
        choices=[order.value for order in AIOrder],
        default=AIOrder.SEQUENCE.value,
        help="Order in which monsters act.",
    )
    parser.add_argument(
        "--color", action="store_true", help="Draw with ANSI colour codes."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", default="grid_rogue.log")
    return parser


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return replace(
        GameConfig(),
        seed=args.seed,
        save_path=args.save_path,
        ai_order=AIOrder(args.ai_order),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        filename=args.log_file,
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = config_from_args(args)
    ctx = GameContext(
        config=config,
        renderer=TextRenderer(sys.stdout, config, color=args.color),
        input=LineInput(sys.stdin),
        store=SaveStore(config.save_path),
    )
    main_menu(ctx)
    return 0


if __name__ == "__main__":
    sys.exit(main())
