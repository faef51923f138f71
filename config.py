# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Centralized configuration for environment variables."""

import logging
import os

LOG_LEVEL_ENV = "SCOREKEEPER_LOG_LEVEL"
GAME_FILE_ENV = "SCOREKEEPER_GAME_FILE"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_GAME_FILE = "data/sample_game.json"


def get_log_level() -> int:
    """Return the configured logging level, falling back to WARNING."""
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_game_file() -> str:
    """Return the path of the game file to load when none is given."""
    return os.environ.get(GAME_FILE_ENV, "") or DEFAULT_GAME_FILE
