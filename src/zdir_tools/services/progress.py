"""Progress reporting hooks for the extraction pipeline.

Callbacks receive ``(phase, message, percent)``; phases are ``headers``
and ``extract``.
"""

import logging
from collections.abc import Callable

ProgressCallback = Callable[[str, str, int], None]


def noop_progress(_phase: str, _msg: str, _pct: int) -> None:
    pass


def logging_progress(logger: logging.Logger, level: int = logging.DEBUG) -> ProgressCallback:
    """Build a callback that writes each progress step to *logger*."""

    def _report(phase: str, msg: str, pct: int) -> None:
        logger.log(level, "[%-7s %3d%%] %s", phase, pct, msg)

    return _report
