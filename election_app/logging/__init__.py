"""
Logging configuration and utilities for the election coordinator.
"""
from .config import (
    configure_logging,
    configure_logging_from_settings,
    get_audit_logger,
    get_logger,
)

__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "get_audit_logger",
]
