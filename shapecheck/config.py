# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Environment-driven settings.

``SHAPECHECK_RANDOM_SEED``
    Integer seed for the process-wide random source used by the ``random``
    and ``firstThenRandom`` traversal modes. Unset means unseeded.

``SHAPECHECK_WARN_UNKNOWN``
    When truthy, unrecognised directive keywords are logged at WARNING
    instead of DEBUG. They never fail a validation either way.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

RANDOM_SEED_ENV = "SHAPECHECK_RANDOM_SEED"
WARN_UNKNOWN_ENV = "SHAPECHECK_WARN_UNKNOWN"


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() not in ("", "0", "false", "no")


def parse_seed(raw: str) -> Optional[int]:
    """Parse a seed value; blank means unseeded.

    Raises:
        ConfigurationError: If *raw* is not an integer
    """

    text = (raw or "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise ConfigurationError(f"{RANDOM_SEED_ENV} must be an integer, got {text!r}") from None


@dataclass(frozen=True)
class Settings:
    random_seed: Optional[int] = None
    warn_unknown: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment.

        An invalid seed is logged and ignored so validation keeps working
        with an unseeded random source.
        """
        try:
            seed = parse_seed(os.getenv(RANDOM_SEED_ENV, ""))
        except ConfigurationError as exc:
            logger.warning("%s; falling back to an unseeded random source", exc)
            seed = None
        settings = cls(random_seed=seed, warn_unknown=_flag(WARN_UNKNOWN_ENV))
        logger.debug("Loaded settings from environment: %s", settings)
        return settings


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings, reading the environment on first use."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Forget cached settings so the next access re-reads the environment."""

    global _SETTINGS
    _SETTINGS = None


__all__ = [
    "RANDOM_SEED_ENV",
    "WARN_UNKNOWN_ENV",
    "Settings",
    "parse_seed",
    "get_settings",
    "reset_settings",
]
