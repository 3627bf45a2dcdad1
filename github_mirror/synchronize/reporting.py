"""Human-readable status reporting for a mirror run."""

from typing import Any, Protocol

import structlog


class SyncReporter(Protocol):
    """Receives the status lines produced while mirroring."""

    def info(self, message: str) -> None:
        """Report progress."""
        ...

    def success(self, message: str) -> None:
        """Report a completed operation."""
        ...

    def error(self, message: str) -> None:
        """Report a failed operation."""
        ...


class StructlogReporter:
    """Reporter that writes status lines through structlog."""

    def __init__(self, logger: Any = None) -> None:
        """Initialize the reporter, defaulting to the package logger."""
        self.logger = logger if logger is not None else structlog.get_logger("github_mirror")

    def info(self, message: str) -> None:
        """Log a progress line at info level."""
        self.logger.info(message)

    def success(self, message: str) -> None:
        """Log a completed operation at info level, tagged as a success."""
        self.logger.info(message, status="success")

    def error(self, message: str) -> None:
        """Log a failed operation at error level."""
        self.logger.error(message)
