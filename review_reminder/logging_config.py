"""
Structured Logging Configuration

This module sets up structured logging using structlog.
Logs are rendered for a human-readable console by default, and as JSON
when LOG_JSON_FORMAT is enabled for log aggregators.

Design Decisions:
- Use structlog for structured, contextual logging
- Route structlog through the standard logging library
- Never log sensitive data (tokens, webhook URLs)
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.types import EventDict, WrappedLogger

from review_reminder import __version__
from review_reminder.config import Settings, get_settings

SENSITIVE_KEYS = {
    "token", "access_token", "secret", "password", "authorization",
    "credential", "bearer", "webhook",
}

SENSITIVE_PREFIXES = ("ghp_", "ghs_", "gho_", "github_pat_", "xoxb-", "xoxp-")


def filter_sensitive_data(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Processor to filter out sensitive data from logs.
    
    Webhook URLs embed their own credentials, so any key mentioning a
    webhook is redacted along with tokens and secrets.
    """
    def redact_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively redact sensitive values in a dict."""
        result = {}
        for key, value in d.items():
            key_lower = key.lower()
            if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
                result[key] = "[REDACTED]"
            elif isinstance(value, dict):
                result[key] = redact_dict(value)
            elif isinstance(value, str) and value.startswith(SENSITIVE_PREFIXES):
                result[key] = "[REDACTED]"
            else:
                result[key] = value
        return result
    
    return redact_dict(event_dict)


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to every log entry."""
    event_dict["app"] = "pr-reviews-reminder"
    event_dict["version"] = __version__
    return event_dict


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structured logging for the reminder.
    
    This function should be called once at process startup.
    It configures both structlog and the standard logging library.
    """
    settings = settings or get_settings()
    
    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_app_context,
        filter_sensitive_data,
    ]
    
    if settings.log_json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    
    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.log_level))
    
    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.
    
    Usage:
        logger = get_logger(__name__)
        logger.info("Fetched pull requests", count=3, repo="owner/repo")
    """
    return structlog.get_logger(name)
