"""
Exceptions raised by the game core.
"""
from typing import Optional


class MillionaireError(Exception):
    """Base exception for the game core."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __repr__(self):
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details})"


class DataUnavailable(MillionaireError):
    """Raised when the question pool cannot fill a game."""
    pass


class InvalidState(MillionaireError):
    """Raised when an operation does not apply to the game in its current state."""
    pass
