"""Custom exceptions for story loading and parsing."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when story files cannot be read."""


class StoryFileNotFoundError(DataLoadError):
    """Raised when a story file does not exist."""


class DataValidationError(DataError):
    """Raised when story content fails structural validation."""


class MalformedDirectiveError(DataValidationError):
    """Raised when a line starts like a directive but does not have its shape."""

    def __init__(self, line_number: int, reason: str, *, document: str | None = None) -> None:
        self.line_number = line_number
        self.reason = reason
        self.document = document
        location = f"{document}:{line_number}" if document else f"line {line_number}"
        super().__init__(f"Malformed directive at {location}: {reason}")
