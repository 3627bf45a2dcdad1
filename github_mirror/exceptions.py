"""Exceptions shared across the mirror workflow."""


class MirrorValidationError(Exception):
    """Raised when the run is misconfigured, before any network or filesystem activity."""

    pass


class RemoteError(Exception):
    """Raised when a GitHub listing endpoint returns an error or an unexpected body."""

    def __init__(self, message: str, endpoint: str, page: int | None = None, status_code: int | None = None) -> None:
        """Initializes the exception with the endpoint and page that failed."""
        super().__init__(message)
        self.endpoint = endpoint
        self.page = page
        self.status_code = status_code


class GitOperationError(Exception):
    """Describes a failed git clone, pull or fetch.

    Git failures are never raised out of a mirror run. They are carried on the
    operation result and reported against the item being synchronized.
    """

    def __init__(self, operation: str, cwd: str, returncode: int, stderr: str = "") -> None:
        """Initializes the exception with the failed command's context."""
        message = f"git {operation} failed in {cwd} with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)
        self.operation = operation
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr
