"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Conversion completed successfully
    - GENERAL_ERROR (1): Unexpected failure or invalid usage
    - INPUT_ERROR (2): Input, output or options file could not be used
    - CONVERSION_ERROR (3): A conversion failure (custom block fault,
      missing HTML parser)

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INPUT_ERROR = 2
    CONVERSION_ERROR = 3
