"""
Configuration module for the simulator.

Holds the tunable run parameters and loads them from a JSON file.
"""

import json
from pathlib import Path
from typing import Any, Literal

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import DEFAULT_MAX_ROUNDS
from .errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SimulationConfig(BaseModel):
    """Run parameters shared by single fights and statistics batches."""

    model_config = ConfigDict(extra="forbid")

    max_rounds: int | None = Field(
        default=None,
        description=(
            "Maximum number of rounds before a combat is called a draw; "
            "None leaves the limit to each command."
        ),
        ge=1,
    )
    seed: int | None = Field(
        default=None,
        description="Seed of the random source; None draws from the OS.",
    )
    runs: int = Field(
        default=10,
        description="Number of combats played by a statistics batch.",
        ge=1,
    )
    per_hit_estimate: int = Field(
        default=4,
        description="Assumed damage of one hit, used to estimate hits received.",
        ge=1,
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Name of the logging level.",
    )

    def round_limit(self, default: int = DEFAULT_MAX_ROUNDS) -> int:
        """Returns the configured round limit, or ``default`` when unset."""
        return self.max_rounds if self.max_rounds is not None else default

    def merged(self, **overrides: Any) -> "SimulationConfig":
        """
        Returns a copy with every non-None override applied and validated.

        Raises:
            ConfigError: If an override is not valid.

        """
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return SimulationConfig.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration override: {e}") from e


def load_config(path: Path | str | None) -> SimulationConfig:
    """
    Loads a SimulationConfig from a JSON file.

    A missing file is not an error: a warning is logged and the defaults are
    returned.

    Args:
        path (Path | str | None):
            Path of the JSON file, or None for the defaults.

    Returns:
        SimulationConfig: The loaded configuration.

    Raises:
        ConfigError: If the file exists but is not a valid configuration.

    """
    if path is None:
        return SimulationConfig()
    path = Path(path)
    if not path.exists():
        log_warning(
            f"Configuration file not found, using defaults: {path}",
            {"path": str(path), "context": "load_config"},
        )
        return SimulationConfig()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}") from e
    try:
        return SimulationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Configuration file {path} is invalid: {e}") from e
