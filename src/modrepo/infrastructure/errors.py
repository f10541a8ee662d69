"""Exceptions raised by modrepo commands and clients."""


class ModrepoError(Exception):
    """Base class for all modrepo errors."""

    pass


class InvalidArgumentError(ModrepoError, ValueError):
    """Exception raised when a command argument is rejected.

    Attributes:
        parameter: Name of the offending parameter
    """

    def __init__(self, parameter: str, message: str):
        super().__init__(message)
        self.parameter = parameter


class CommandFailedError(ModrepoError):
    """Exception raised when a command cannot be applied to the server."""

    pass


class NotSupportedError(CommandFailedError):
    """Exception raised when a command is not available for the server topology."""

    pass


class ManagementClientError(ModrepoError):
    """Exception raised by a management client that rejected or failed to send a command.

    Commands never wrap these; they reach the caller as raised by the client.
    """

    pass
