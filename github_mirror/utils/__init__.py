"""Utility modules for shared functionality."""

from .logging import configure_logging
from .retry import retry_on_rate_limit

__all__ = [
    "configure_logging",
    "retry_on_rate_limit",
]
