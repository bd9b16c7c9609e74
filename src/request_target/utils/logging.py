from __future__ import annotations

import logging
import os
import sys
from typing import Optional

ENV_LOG_LEVEL = "REQUEST_TARGET_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(level: Optional[str] = None) -> int:
    """Map a level name to a logging constant; unknown names fall back to INFO."""
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> None:
    """Configure stdlib logging once, on stderr.

    stdout is left to command output (reports, classifications).
    """
    logging.basicConfig(level=resolve_level(level), format=_DEFAULT_FORMAT, stream=sys.stderr)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
