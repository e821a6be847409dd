"""Default configuration parameters for the election coordinator."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ElectionSettings:
    """Election lifecycle parameters."""
    election_id: str = "election"
    default_duration_seconds: int = 86400            # One day
    max_duration_seconds: int = 31_536_000           # One year
    require_candidates: bool = True                  # Refuse to start with an empty roster


@dataclass(frozen=True)
class OracleSettings:
    """Eligibility oracle connection parameters."""
    base_url: Optional[str] = None
    timeout_seconds: int = 10
    user_agent: str = "election-app/1.0"
    headers: Optional[dict[str, str]] = None


@dataclass(frozen=True)
class LoggingSettings:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_caller: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    election: ElectionSettings
    oracle: OracleSettings
    logging: LoggingSettings


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        election=ElectionSettings(),
        oracle=OracleSettings(),
        logging=LoggingSettings(),
    )
