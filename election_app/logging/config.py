"""
Centralized logging configuration for the election coordinator.

This module provides standardized logging configuration using structlog
for all components. Lifecycle changes and vote decisions go through the
helpers below so the audit trail has one consistent shape.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

from ..config.defaults import LoggingSettings


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(
    settings: LoggingSettings,
    extra_processors: Optional[list] = None
) -> None:
    """Apply the logging section of a loaded configuration."""
    configure_logging(
        level=settings.level,
        format_json=settings.format_json,
        include_caller=settings.include_caller,
        extra_processors=extra_processors
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_audit_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for election audit records.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Lazy structlog logger carrying the election audit context; it is
        resolved against the active configuration on each bind
    """
    return structlog.get_logger(
        name,
        subsystem="election",
        audit_trail=True
    )


def log_phase_transition(
    logger: FilteringBoundLogger,
    election_id: str,
    from_phase: str,
    to_phase: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a voting phase transition with standardized format.

    Args:
        logger: Structlog logger instance
        election_id: ID of the election transitioning
        from_phase: Phase before the transition
        to_phase: Phase after the transition
        trigger: Operation that caused the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        election_id=election_id,
        from_phase=from_phase,
        to_phase=to_phase,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Phase transition")


def log_vote_decision(
    logger: FilteringBoundLogger,
    election_id: str,
    voter: str,
    candidate_index: Any,
    accepted: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an accepted or rejected vote with standardized format.

    Args:
        logger: Structlog logger instance
        election_id: ID of the election
        voter: Identity that attempted to vote
        candidate_index: Requested candidate index
        accepted: Whether the ballot was recorded
        reason: Error kind on rejection, "recorded" on success
        context: Additional context data
    """
    bound_logger = logger.bind(
        election_id=election_id,
        voter=voter,
        candidate_index=candidate_index,
        vote_result="ACCEPTED" if accepted else "REJECTED",
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if accepted:
        bound_logger.info("Vote accepted")
    else:
        bound_logger.warning("Vote rejected")
