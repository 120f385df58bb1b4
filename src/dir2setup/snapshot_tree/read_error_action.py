"""Read error action enum for handling unreadable files during a snapshot."""

from enum import Enum


class ReadErrorAction(str, Enum):
    """Action to take when a file cannot be read as UTF-8 text.

    Values:
        WARN: Log a warning naming the file and the error, then leave it out (default behavior)
        IGNORE: Leave the file out silently
        RAISE: Raise an UnreadableFileError and abort the snapshot
    """

    WARN = "warn"
    IGNORE = "ignore"
    RAISE = "raise"
