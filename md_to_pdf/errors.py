"""Errors that end a run with exit status 1."""


class ConversionError(Exception):
    """Base class for failures reported to the user without a traceback."""


class UsageError(ConversionError):
    pass


class MissingFileError(ConversionError):
    def __init__(self, path, kind: str = "File") -> None:
        super().__init__(f"{kind} not found: {path}")
        self.path = path


class ExportError(ConversionError):
    """The layout engine failed; ``hint`` tells the user how to install it."""

    def __init__(self, message: str, hint: str = "") -> None:
        super().__init__(message)
        self.hint = hint
        self.workdir = None
