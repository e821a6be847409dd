"""Configuration validation utilities."""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from .defaults import ElectionSettings, LoggingSettings, OracleSettings

SECTIONS = {
    "election": ElectionSettings,
    "oracle": OracleSettings,
    "logging": LoggingSettings,
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidationError(ValueError):
    """Raised when a merged configuration cannot be turned into settings."""

    def __init__(self, errors: list[ValidationError]):
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid configuration: {details}")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_known_keys(config: dict[str, Any]) -> list[ValidationError]:
        """Reject sections and keys that no settings dataclass declares."""
        errors = []

        for section, value in config.items():
            settings_cls = SECTIONS.get(section)
            if settings_cls is None:
                errors.append(ValidationError(
                    field=str(section),
                    message=f"Unknown section; expected one of {', '.join(SECTIONS)}",
                    value=value
                ))
                continue

            if not isinstance(value, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=value
                ))
                continue

            for key in value:
                if key not in settings_cls.__dataclass_fields__:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown setting",
                        value=value[key]
                    ))

        return errors

    @staticmethod
    def validate_election_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate election parameters."""
        errors = []

        if "election_id" in params:
            value = params["election_id"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="election.election_id",
                    message="Must be a non-empty string",
                    value=value
                ))

        for name in ("default_duration_seconds", "max_duration_seconds"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=f"election.{name}",
                    message="Must be a positive integer",
                    value=params[name]
                ))

        default = params.get("default_duration_seconds")
        maximum = params.get("max_duration_seconds")
        if _is_positive_int(default) and _is_positive_int(maximum) and default > maximum:
            errors.append(ValidationError(
                field="election.default_duration_seconds",
                message="Must not exceed max_duration_seconds",
                value=default
            ))

        if "require_candidates" in params:
            value = params["require_candidates"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="election.require_candidates",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_oracle_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate oracle parameters."""
        errors = []

        base_url = params.get("base_url")
        if base_url is not None:
            parsed = urlparse(base_url) if isinstance(base_url, str) else None
            if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(ValidationError(
                    field="oracle.base_url",
                    message="Must be an http(s) URL",
                    value=base_url
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="oracle.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or not isinstance(
                    getattr(logging, value.upper(), None), int):
                errors.append(ValidationError(
                    field="logging.level",
                    message="Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
                    value=value
                ))

        for name in ("format_json", "include_caller"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=f"logging.{name}",
                    message="Must be a boolean",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_known_keys(config)

        if isinstance(config.get("election"), dict):
            errors.extend(ConfigValidator.validate_election_params(config["election"]))

        if isinstance(config.get("oracle"), dict):
            errors.extend(ConfigValidator.validate_oracle_params(config["oracle"]))

        if isinstance(config.get("logging"), dict):
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
