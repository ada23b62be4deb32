# topmark:header:start
#
#   project      : StampMark
#   file         : exit_codes.py
#   file_relpath : src/stampmark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the StampMark CLI.

Values follow the BSD `sysexits` convention where one exists. ``WOULD_CHANGE=2``
signals a dry run that found documents to stamp; Click also uses 2 for its own
usage errors, so tests check ``result.exception`` to tell them apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the StampMark CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure. Prefer a more specific code if available.
        WOULD_CHANGE: Dry-run: documents would change if ``--apply`` were set.
        USAGE_ERROR: Invalid flags or arguments (``EX_USAGE``).
        ENCODING_ERROR: A document is not valid UTF-8 (``EX_DATAERR``).
        FILE_NOT_FOUND: An input path does not exist (``EX_NOINPUT``).
        IO_ERROR: Reading or writing a document failed (``EX_IOERR``).
        PERMISSION_DENIED: Insufficient permissions (``EX_NOPERM``).
        CONFIG_ERROR: Missing or malformed configuration (``EX_CONFIG``).
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255


def exit_code_for_error(error: BaseException) -> ExitCode:
    """Map a per-document error to the most specific exit code."""
    if isinstance(error, UnicodeError):
        return ExitCode.ENCODING_ERROR
    if isinstance(error, (FileNotFoundError, IsADirectoryError)):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(error, PermissionError):
        return ExitCode.PERMISSION_DENIED
    if isinstance(error, OSError):
        return ExitCode.IO_ERROR
    return ExitCode.UNEXPECTED_ERROR
