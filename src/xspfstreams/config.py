"""Runtime configuration and logging setup."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler


@dataclass
class Settings:
    """Settings for the command-line tool."""
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Variables from a ``.env`` file are loaded first if one exists.
        """
        load_dotenv()
        return cls(log_level=os.getenv("XSPF_STREAMS_LOG_LEVEL", "WARNING").upper())


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr through a Rich handler.

    Args:
        level: Logging level name, unknown names fall back to WARNING
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(
        level=numeric_level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
