"""
Single place to:
- Read settings from env (a local .env is loaded first if present)
- Set up logging for the whole app

Why: keeps the engine free of environment lookups and makes settings testable.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

# dev convenience; in prod the platform injects env vars
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    timing_enabled: bool = True
    history_limit: int = 10
    log_level: str = "INFO"


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise RuntimeError(f"{name} must be one of {_TRUE + _FALSE}, got {raw!r}.")


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a whole number, got {raw!r}.") from None
    if value < 1:
        raise RuntimeError(f"{name} must be at least 1, got {value}.")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or any mapping, for tests)."""
    if env is None:
        env = os.environ

    log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL is not a logging level: {log_level!r}.")

    return Settings(
        timing_enabled=_flag(env, "NUMBRAINER_TIMING", True),
        history_limit=_positive_int(env, "NUMBRAINER_HISTORY_LIMIT", 10),
        log_level=log_level,
    )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """One console handler on the package logger; safe to call more than once."""
    logger = logging.getLogger("numbrainer")
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)
    return logger
