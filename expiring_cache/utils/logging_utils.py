"""
Logging setup for processes hosting the cache
"""

import logging
from typing import Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None
) -> None:
    """
    Configure process-wide logging

    Args:
        level: Logging level as a number or a name such as "DEBUG"
        format_string: Custom format string (optional)

    Raises:
        ValueError: If level is not a known level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        # Unknown names come back as the string "Level <name>"
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format=format_string or DEFAULT_FORMAT,
        force=True  # Override any existing configuration
    )

    # redis-py logs every reconnect at DEBUG
    logging.getLogger("redis").setLevel(max(level, logging.INFO))
    logging.getLogger("expiring_cache").setLevel(level)
