"""Contains exceptions raised when reconciling application configuration."""

from github_mirror.exceptions import MirrorValidationError


class RequiredConfigurationElementError(MirrorValidationError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(f"Missing required configuration element: {name} (command line option {cli_name}, environment variable {env_name})")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class UnknownSyncKindError(MirrorValidationError):
    """Raised when the kind selector is not one of the supported kinds."""

    def __init__(self, kind: str, allowed: list[str]) -> None:
        """Initializes the exception with the rejected kind and the allowed kinds."""
        super().__init__(f"Unknown type {kind}: Allowed types are {', '.join(allowed)}")
        self.kind = kind
        self.allowed = allowed
