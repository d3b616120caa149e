"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes of the telex-editor commands.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, unreadable input)
    - CONVERSION_ERROR (2): Some content could not be converted
    - AUTH_ERROR (3): Access token missing or rejected
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - NOT_FOUND (5): Requested page does not exist

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONVERSION_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5
