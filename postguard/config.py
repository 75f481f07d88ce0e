"""
Configuration read from the environment.

  POSTGUARD_LEXICON=/path/to/lexicon.yaml   # replace the built-in word lists
  POSTGUARD_LOG_LEVEL=DEBUG                 # CLI log level (default WARNING)

The library itself never installs log handlers; ``configure_logging`` is
called by the CLI only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LEXICON_PATH_ENV = "POSTGUARD_LEXICON"
LOG_LEVEL_ENV = "POSTGUARD_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    lexicon_path: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            lexicon_path=os.getenv(LEXICON_PATH_ENV, "").strip() or None,
            log_level=os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING",
        )


def configure_logging(level: str | int = "WARNING") -> None:
    """Route ``postguard`` logs through a rich console handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("postguard")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
