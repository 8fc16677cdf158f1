"""Exceptions raised by emitkit."""


class EmitKitError(Exception):
    """Base exception class for emitkit errors."""
    pass


class InvalidListenerError(EmitKitError, TypeError):
    """Exception raised when a listener is not callable."""

    def __init__(self, message: str = "The listener must be a function") -> None:
        super().__init__(message)
