"""Exceptions raised for invalid formatting parameters and input."""

from typing import Optional


class FormatError(ValueError):
    """Base class for formatting errors.

    Carries the offending value, when there is one, so the caller can
    report it.
    """

    def __init__(self, message: str, value: Optional[object] = None):
        super().__init__(message)
        self.value = value


class InvalidIndentation(FormatError):
    """Total indentation would be negative or wider than the text."""


class InvalidTextWidth(FormatError):
    """Text width is smaller than the total indentation."""


class InvalidTextHeight(FormatError):
    """Text height must be positive."""


class InvalidParSkip(FormatError):
    """Paragraph skip must not be negative."""
