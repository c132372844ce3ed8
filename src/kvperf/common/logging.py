# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich logging setup for the operator-facing console."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER_NAME = "kvperf"


def setup_rich_logging(level: str | int = "INFO", console: Console | None = None) -> None:
    """Attach a RichHandler to the kvperf logger.

    Calling this more than once replaces the previous handler rather than
    stacking another one.

    Args:
        level: Logging level name or number
        console: Console to render to (defaults to stderr)
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
