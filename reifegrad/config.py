"""
Runtime configuration for the command line front end.

Values come from the environment.  The scoring core never reads them: it
receives its scheme explicitly on every call.  Unusable values fall back to
the default with a warning.
"""

import logging
import os

logger = logging.getLogger(__name__)


def int_setting(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, not an integer; using %d", name, raw, default)
        return default


def log_level_setting(name: str, default: str = "WARNING") -> str:
    level = os.environ.get(name, default).strip().upper()
    # getLevelName maps known names to their number and anything else to a string
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring %s=%r, not a log level; using %s", name, level, default)
        return default
    return level


# Scheme used for discrete ``--metric`` input when ``--scheme`` is not given.
DEFAULT_SCHEME = os.environ.get("REIFEGRAD_SCHEME", "cvss31")

# Level name passed to ``logging.basicConfig``.
LOG_LEVEL = log_level_setting("REIFEGRAD_LOG_LEVEL")

# Characters of extracted document text kept in intake results.
TEXT_PREVIEW_LENGTH = int_setting("REIFEGRAD_TEXT_PREVIEW", 1000)
