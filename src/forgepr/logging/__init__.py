"""Logging module for forgepr.

Usage:
    from forgepr.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
"""

from forgepr.logging.structured import (
    configure_logging,
    get_logger,
    log_create_attempt,
    log_pr_operation,
    redact_secrets,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_create_attempt",
    "log_pr_operation",
    "redact_secrets",
]
