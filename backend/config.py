"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No document building
- No rendering constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import DEFAULT_ENV, DEFAULT_FIELD_PREFIX, DEFAULT_LOG_LEVEL, LOG_LEVELS


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and passed to the components that
    need it (currently observability.logger.EventLogger). Nothing reads
    field-prefix conventions from ambient global state.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str = DEFAULT_ENV
    log_level: str = DEFAULT_LOG_LEVEL

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = True

    # Prepended to every top-level event field name
    field_prefix: str = DEFAULT_FIELD_PREFIX

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if LOG_LEVEL is not a known level.
        """
        return AppConfig(
            env=os.environ.get("ENV", DEFAULT_ENV),
            log_level=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",
            field_prefix=os.environ.get("FIELD_PREFIX", DEFAULT_FIELD_PREFIX),
        )
