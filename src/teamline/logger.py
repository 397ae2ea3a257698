"""Layout logging for Teamline.

Beyond warnings, a timeline build reports at two extra levels: adjustments it
made to the input (fallback dates, clamped ends, snapped weekends, row counts
per group) and individual row placements. ``-v`` on the command line picks how
much of that is shown.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

ADJUSTMENT_LEVEL = 25  # Above INFO, below WARNING
PLACEMENT_LEVEL = 15  # Above DEBUG, below INFO

logging.addLevelName(ADJUSTMENT_LEVEL, "ADJUST")
logging.addLevelName(PLACEMENT_LEVEL, "PLACE")

# Index is the -v count; anything beyond the end shows everything
VERBOSITY_LEVELS = (logging.WARNING, ADJUSTMENT_LEVEL, PLACEMENT_LEVEL, logging.DEBUG)

LOGGER_NAME = "teamline"


class TeamlineLogger(logging.Logger):
    """Logger with one method per layout reporting level."""

    def adjustment(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Report a change made to the input so it could be laid out."""
        if self.isEnabledFor(ADJUSTMENT_LEVEL):
            self._log(ADJUSTMENT_LEVEL, msg, args, **kwargs)

    def placement(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Report where a single bar went."""
        if self.isEnabledFor(PLACEMENT_LEVEL):
            self._log(PLACEMENT_LEVEL, msg, args, **kwargs)


def get_logger() -> TeamlineLogger:
    """Return the shared teamline logger."""
    logging.setLoggerClass(TeamlineLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, TeamlineLogger)
    return logger


def level_for(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level."""
    if verbosity <= 0:
        return VERBOSITY_LEVELS[0]
    return VERBOSITY_LEVELS[min(verbosity, len(VERBOSITY_LEVELS) - 1)]


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send teamline messages at ``verbosity`` to ``stream`` (stderr by default).

    Calling it again replaces the previous handler.
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(level_for(verbosity))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and let records propagate again (used by tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True


def placements_enabled() -> bool:
    return get_logger().isEnabledFor(PLACEMENT_LEVEL)


def debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)
