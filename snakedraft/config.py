"""
Draft service configuration.

Controls draft size, catalog seeding, advisor timeouts and board-signal
thresholds. Settings marked with an env var can be overridden from the
environment.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


# Roster has five slots, so a draft can never run more than five rounds
MAX_ROUNDS = 5
MIN_TEAMS = 2
MAX_TEAMS = 16


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass
class DraftConfig:
    """Configuration for drafts run by this service."""

    # Draft shape
    num_teams: int = field(default_factory=lambda: _env_int("SNAKEDRAFT_NUM_TEAMS", 8))
    num_rounds: int = field(default_factory=lambda: _env_int("SNAKEDRAFT_NUM_ROUNDS", 5))

    # Catalog seeding
    catalog_source: str = field(
        default_factory=lambda: os.getenv("SNAKEDRAFT_CATALOG_SOURCE", "sleeper").lower()
    )
    catalog_size: int = 150
    sleeper_url: str = "https://api.sleeper.app/v1/players/nfl"
    http_timeout_seconds: float = 20.0

    # Advisor calls are abandoned for the fallback pick after this long
    advisor_timeout_seconds: float = field(
        default_factory=lambda: _env_float("SNAKEDRAFT_ADVISOR_TIMEOUT", 45.0)
    )

    # Board signal thresholds
    position_run_window: int = 8
    position_run_min_count: int = 3
    value_drop_threshold: int = 8
    scarcity_threshold: int = 5

    log_level: str = field(
        default_factory=lambda: os.getenv("SNAKEDRAFT_LOG_LEVEL", "INFO").upper()
    )

    @classmethod
    def from_env(cls) -> "DraftConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if not MIN_TEAMS <= self.num_teams <= MAX_TEAMS:
            errors.append(f"num_teams must be {MIN_TEAMS}-{MAX_TEAMS}")
        if not 1 <= self.num_rounds <= MAX_ROUNDS:
            errors.append(f"num_rounds must be 1-{MAX_ROUNDS}")
        if self.catalog_source not in ("sleeper", "static"):
            errors.append("SNAKEDRAFT_CATALOG_SOURCE must be 'sleeper' or 'static'")
        if self.catalog_size < self.num_teams * self.num_rounds:
            errors.append("catalog_size is smaller than the number of picks")
        if self.advisor_timeout_seconds <= 0:
            errors.append("advisor_timeout_seconds must be positive")
        return errors


# Singleton config instance
_config: Optional[DraftConfig] = None


def get_config() -> DraftConfig:
    """Get the global draft configuration."""
    global _config
    if _config is None:
        _config = DraftConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() rereads the env."""
    global _config
    _config = None
