"""Domain exceptions for the launcher.

Every error is terminal for the launching process. They are caught at the
CLI boundary and turned into a diagnostic on stderr with exit status 1.
"""


class LauncherError(Exception):
    """Base exception for all launcher errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class UsageError(LauncherError):
    """Raised when the command line is malformed."""

    pass


class MissingExecutableError(LauncherError):
    """Raised when no runtime executable can be located."""

    pass


class MissingConfigurationError(LauncherError):
    """Raised when a required environment input is unset or unusable."""

    pass


class AlreadyRunningError(LauncherError):
    """Raised when the conflict probe finds the management port already bound."""

    pass


class LaunchFailure(LauncherError):
    """Raised when the exec/spawn of the daemon itself fails."""

    pass
