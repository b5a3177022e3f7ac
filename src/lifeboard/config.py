"""Runtime configuration for board limits, stability search and storage.

Values default to the documented board limits and can be overridden through
LIFEBOARD_* environment variables (see .env.example).
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional
import logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "LIFEBOARD_"


@dataclass
class LifeConfig:
    """Limits and defaults shared by the validator, service and entry points."""

    max_width: int = 100
    max_height: int = 100
    min_population: int = 1
    max_population: int = 1000
    default_max_attempts: int = 1000
    max_generations: int = 10000  # Upper bound for generation counts and attempt budgets per request
    storage_dir: Optional[Path] = None
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after construction."""
        if self.max_width < 1 or self.max_height < 1:
            raise ValueError("max_width and max_height must be positive")

        if self.min_population < 0 or self.max_population < self.min_population:
            raise ValueError("Population limits must satisfy 0 <= min_population <= max_population")

        if self.default_max_attempts < 0:
            raise ValueError("default_max_attempts cannot be negative")

        if self.max_generations < self.default_max_attempts:
            raise ValueError("max_generations cannot be below default_max_attempts")

        if self.storage_dir is not None:
            self.storage_dir = Path(self.storage_dir)

        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'LifeConfig':
        """Build configuration from LIFEBOARD_* environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            LifeConfig with every variable that is set applied over the defaults

        Raises:
            ValueError: If an integer variable cannot be parsed
        """
        environ = os.environ if environ is None else environ
        overrides = {}

        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            raw = environ.get(key)
            if raw is None or raw == "":
                continue

            if f.type is int:
                try:
                    overrides[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{key} must be an integer, got {raw!r}") from None
            else:
                overrides[f.name] = raw

        if overrides:
            logger.debug(f"Configuration overrides from environment: {sorted(overrides)}")

        return cls(**overrides)
