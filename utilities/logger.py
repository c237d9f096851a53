"""
Logging system using structlog.
Provides structured logging with JSON or console output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.stdlib import LoggerFactory


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[Union[str, Path]] = None,
    debug: bool = False
) -> None:
    """
    Set up structured logging with configurable output formats.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_file: Optional log file path
        debug: Add call-site information to every event
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        logging.getLogger().addHandler(file_handler)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging system initialized",
        level=log_level,
        format=log_format,
        file=str(log_file) if log_file else None,
        debug=debug
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class AuditLogger:
    """
    Logger for account and review events with bound request context.
    """

    def __init__(self, name: str = "audit"):
        self.logger = structlog.get_logger(name)
        self.context = {}

    def bind_context(self, **kwargs) -> 'AuditLogger':
        """
        Bind context variables to the logger.

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def clear_context(self) -> 'AuditLogger':
        """Clear all context variables."""
        self.context.clear()
        return self

    def log_registration(self, username: str, success: bool = True, reason: Optional[str] = None) -> None:
        level = "info" if success else "warning"
        getattr(self.logger, level)(
            "Registration attempt",
            username=username,
            success=success,
            reason=reason,
            **self.context
        )

    def log_login(self, username: str, success: bool = True, reason: Optional[str] = None) -> None:
        level = "info" if success else "warning"
        getattr(self.logger, level)(
            "Login attempt",
            username=username,
            success=success,
            reason=reason,
            **self.context
        )

    def log_rejected(self, reason: str, path: Optional[str] = None) -> None:
        """Log a protected request rejected by the authorization check."""
        self.logger.warning(
            "Unauthorized request",
            reason=reason,
            path=path,
            **self.context
        )

    def log_review(self, action: str, isbn: str, username: str, success: bool = True) -> None:
        level = "info" if success else "warning"
        getattr(self.logger, level)(
            "Review operation",
            action=action,
            isbn=isbn,
            username=username,
            success=success,
            **self.context
        )
