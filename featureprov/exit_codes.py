"""
Exit codes for featureprov commands.

0-2 follow the usual shell conventions; the rest sit in the 64-113 range
left free for applications.
"""

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2              # click reports bad arguments with this code

FETCH_ERROR = 65             # Root repository could not be fetched or parsed
PARTIAL_SUCCESS = 71         # Resolved, but some entries were skipped with errors
INTERRUPTED = 130            # Ctrl+C


class CommandError(Exception):
    """Raised by a command to finish with a specific exit code."""

    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class PartialSuccessError(CommandError):
    """Directives were produced, but some entries failed with errors."""

    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        super().__init__(message, PARTIAL_SUCCESS)
        self.succeeded = succeeded
        self.failed = failed


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Map an exception that ended a command to its exit code.

    Args:
        exc: The exception raised by the command

    Returns:
        The command's own code for a CommandError, FETCH_ERROR for a root
        repository failure, INTERRUPTED for Ctrl+C, GENERAL_ERROR otherwise
    """
    from .errors import FetchOrParseError

    if isinstance(exc, CommandError):
        return exc.exit_code
    if isinstance(exc, FetchOrParseError):
        return FETCH_ERROR
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED
    return GENERAL_ERROR
