#!/usr/bin/env python3
"""
bf6-stats - command line entry point

Looks up a Battlefield 6 player on the gametools stats API and writes their
stats card as a PNG.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from bf6_stats.config import Config
from bf6_stats.logging_config import configure_logging
from bf6_stats.service import StatsCardService, user_message


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bf6-stats",
        description="Render a Battlefield 6 player stats card",
        epilog="Example: bf6-stats playerName xbox -o card.png",
    )
    parser.add_argument("player", nargs="?", help="EA ID of the player")
    parser.add_argument("platform", nargs="?", help="pc / ps / xbox (aliases such as psn or steam work too)")
    parser.add_argument(
        "-o", "--output",
        default="card.png",
        help="Path for the output PNG (default: card.png)",
    )
    return parser


async def main(player: Optional[str], platform: Optional[str], output: str, config: Config) -> int:
    """Render one card and write it to ``output``. Returns the exit code."""
    async with StatsCardService(config) as service:
        try:
            image = await service.render_player_card(player, platform)
        except Exception as e:
            logger.warning(f"Stats card request failed: {e!r}")
            print(user_message(e), file=sys.stderr)
            return 1

    Path(output).write_bytes(image)
    logger.info(f"Saved stats card to {output} ({len(image)} bytes)")
    return 0


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    config = Config.from_env()
    configure_logging(config)

    sys.exit(asyncio.run(main(args.player, args.platform, args.output, config)))


if __name__ == "__main__":
    run()
