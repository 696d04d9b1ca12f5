"""Configuration loaded from environment variables.

Every getter reads the environment at call time and falls back to a
documented default when the variable is missing or malformed.
"""

import logging
import math
import os

logger = logging.getLogger(__name__)

DEFAULT_PAIR_OPTIONS = (2, 4, 6, 8)
DEFAULT_PAIRS = 2
DEFAULT_MISMATCH_DELAY = 1.0
DEFAULT_SESSION_MAX_AGE = 3600
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_environment() -> str:
    """Environment variable: CONCENTRATION_ENV (default: development)."""
    return os.getenv("CONCENTRATION_ENV", "development")


def get_pair_options() -> tuple[int, ...]:
    """Pair counts offered to players.

    Environment variable: CONCENTRATION_PAIR_OPTIONS (comma-separated)
    Default: 2,4,6,8
    """
    raw = os.getenv("CONCENTRATION_PAIR_OPTIONS")
    if not raw:
        return DEFAULT_PAIR_OPTIONS
    try:
        options = tuple(sorted({int(part) for part in raw.split(",") if part.strip()}))
    except ValueError:
        logger.warning("Ignoring malformed CONCENTRATION_PAIR_OPTIONS=%r", raw)
        return DEFAULT_PAIR_OPTIONS
    if not options or options[0] < 1:
        logger.warning("Ignoring non-positive CONCENTRATION_PAIR_OPTIONS=%r", raw)
        return DEFAULT_PAIR_OPTIONS
    return options


def get_default_pairs() -> int:
    """Environment variable: CONCENTRATION_DEFAULT_PAIRS (default: 2)."""
    value = _get_number("CONCENTRATION_DEFAULT_PAIRS", DEFAULT_PAIRS, int)
    if value not in get_pair_options():
        logger.warning("Default pair count %d is not an offered option", value)
    return value


def get_mismatch_delay() -> float:
    """Seconds a mismatched pair stays visible.

    Environment variable: CONCENTRATION_MISMATCH_DELAY
    Default: 1.0
    """
    return _get_number("CONCENTRATION_MISMATCH_DELAY", DEFAULT_MISMATCH_DELAY, float)


def get_session_max_age() -> int:
    """Environment variable: CONCENTRATION_SESSION_MAX_AGE (default: 3600)."""
    return _get_number("CONCENTRATION_SESSION_MAX_AGE", DEFAULT_SESSION_MAX_AGE, int)


def get_allowed_origins() -> list[str]:
    """Environment variable: ALLOWED_ORIGINS (comma-separated, default: *)."""
    raw = os.getenv("ALLOWED_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_log_level() -> str:
    """Environment variable: CONCENTRATION_LOG_LEVEL (default: INFO)."""
    return os.getenv("CONCENTRATION_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and the HTTP server."""
    logging.basicConfig(level=level or get_log_level(), format=LOG_FORMAT)


def _get_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r", name, raw)
        return default
    if not math.isfinite(value) or value < 0 or (cast is int and value == 0):
        logger.warning("Ignoring out-of-range %s=%r", name, raw)
        return default
    return value
