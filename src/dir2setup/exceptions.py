class UnreadableFileError(Exception):
    """
    Exception raised when a file in the snapshot cannot be read as UTF-8 text.

    This exception is only raised when the configured read error action is RAISE.
    With the default WARN action the file is logged and left out of the snapshot.

    Attributes:
        file_path (str): Path to the file that could not be read.
        reason (str): Description of the underlying error.

    Example:
        >>> error = UnreadableFileError("/srv/app/logo.png", "invalid start byte")
        >>> str(error)
        'Cannot read /srv/app/logo.png as text: invalid start byte'
    """

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Cannot read {file_path} as text: {reason}")


class ScriptWriteError(Exception):
    """
    Exception raised when the generated setup script cannot be written.

    Example:
        >>> error = ScriptWriteError("setup-project.py", "Permission denied")
        >>> str(error)
        'Failed to write setup-project.py: Permission denied'
    """

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Failed to write {file_path}: {reason}")
