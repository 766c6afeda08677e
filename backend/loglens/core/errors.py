class LogLensError(Exception):
    """Base class for errors raised by LogLens."""


class FileReadError(LogLensError):
    """A source file could not be obtained as text."""

    def __init__(self, file_name: str, reason: str):
        super().__init__(f"Could not read {file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


class UnsupportedFileError(LogLensError):
    """A file was offered whose extension is not accepted."""

    def __init__(self, file_name: str, allowed: list[str]):
        super().__init__(
            f"Unsupported file type: {file_name} (accepted: {', '.join(allowed)})")
        self.file_name = file_name
        self.allowed = allowed
