"""
Nodebatch exception hierarchy.

Every error carries the process exit code the CLI reports for it, so the
command layer can map failures to statuses without inspecting messages.
"""


class NodebatchError(Exception):
    """Base class for all nodebatch errors."""

    exit_code = 1


class UsageError(NodebatchError):
    """Malformed invocation (too few positional arguments)."""

    exit_code = 1


class CredentialError(NodebatchError):
    """The temporary credential file could not be prepared."""

    exit_code = 2


class CrumbError(NodebatchError):
    """The anti-forgery crumb could not be obtained from the server."""

    exit_code = 3


class UnrecognizedCommandError(NodebatchError):
    """Verb outside the fixed set of node commands."""

    exit_code = 4

    def __init__(self, command: str):
        super().__init__(f"Unrecognized command '{command}'")
        self.command = command


class SubmissionError(NodebatchError):
    """The script could not be delivered to the script console."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code
