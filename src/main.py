"""Entry point kept minimal by delegating to Engine.

Parses a few command line overrides, configures logging and hands the
window over to the engine's frame loop.
"""

from __future__ import annotations

import argparse
import functools
import logging

import config
from logging_config import setup_logging

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Procedural watercolor fantasy nature scene.")
    parser.add_argument("--seed", type=int, default=config.SEED, help="seed for a reproducible scene")
    parser.add_argument("--paper", default=None, help="paper texture for the watercolor effect")
    parser.add_argument("--no-postprocess", action="store_true", help="render without the watercolor effect")
    parser.add_argument("--fullscreen", action="store_true", default=config.FULLSCREEN)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    # Imported after logging is configured so import-time messages are formatted
    from core.engine import Engine
    from textures.resoucepath import PAPER_TEXTURE_PATH
    from world.context import SceneContext
    from world.worldscene import WorldScene

    log.info("Starting scene (seed=%s)", args.seed)
    factory = functools.partial(
        WorldScene,
        SceneContext.seeded(args.seed),
        postprocess=config.POSTPROCESS_ENABLED and not args.no_postprocess,
        paper_path=args.paper or PAPER_TEXTURE_PATH,
    )
    Engine(factory, fullscreen=args.fullscreen).run()


if __name__ == "__main__":
    main()
