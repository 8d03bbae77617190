from __future__ import annotations

from typing import Any

from loguru import logger
from mcp.server.fastmcp import FastMCP

from .config import settings
from .dice import roll_from_text
from .errors import DiceError
from .log import setup_logging


HELP_TEXT = """Roll some dice. Tokens are separated by spaces.

Valid tokens are:
- `1`, `-3` - constant bonus or penalty
- `d20` - one 20-sided die
- `4d6` - four 6-sided dice
- `2d20:adv` - two 20-sided dice, keep the highest
- `4d6:dis3` - four 6-sided dice, keep the 3 lowest

Counts, sides and kept dice must be between 1 and 255, and a group cannot
keep more dice than it rolls. Constants must be nonzero and fit in -32768..32767.
"""


mcp = FastMCP(settings.server_name)


@mcp.tool()
def roll_dice(text: str) -> dict[str, Any]:
    """Roll dice from space-separated tokens such as `2d20:adv 4d6:dis3 -3`.

    Input: text (string)
    Output: structured JSON with per-token breakdown, total and a rendered table

    Raises a hard error (exception) on invalid input.
    """

    logger.info(f"roll_dice | text={text!r}")
    try:
        result = roll_from_text(text, rng=settings.make_rng())
    except DiceError as e:
        logger.info(f"roll_dice rejected | error={' / '.join(str(e).splitlines())}")
        # Fail-fast: the message carries the whole parse error chain.
        raise ValueError(str(e)) from None

    logger.info(f"roll_dice ok | total={result['total']}")
    return result


@mcp.tool()
def dice_help() -> str:
    """Show the dice grammar and examples."""

    return HELP_TEXT


def run() -> None:
    setup_logging(
        level=settings.log_level,
        log_path=settings.log_path,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    logger.info(f"Starting {settings.server_name}")
    # Default transport is stdio, which works well for MCP client integration.
    mcp.run()


if __name__ == "__main__":
    run()
