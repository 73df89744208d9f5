"""Errors raised by the Transmission CLI. The entry point turns them into exit codes."""


class TmcError(Exception):
    """Base class for every error the CLI reports to the user."""


class ConfigError(TmcError):
    """Bad url, port or config file, failed password prompt, or client construction failure."""


class InvalidJobIdError(TmcError):
    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid job id {token!r}: {reason}")


class CollaboratorError(TmcError):
    """A Transmission RPC call failed."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class CommandError(TmcError):
    """A command failed on a specific argument."""

    def __init__(self, operation: str, argument: str, cause: Exception):
        self.operation = operation
        self.argument = argument
        self.cause = cause
        super().__init__(f"{operation} failed for {argument!r}: {cause}")
