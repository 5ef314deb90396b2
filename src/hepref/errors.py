"""Exceptions raised while resolving record references."""

from __future__ import annotations


class ResolutionError(RuntimeError):
    """Raised when a reference cannot be resolved to a local path."""


class RemoteError(ResolutionError):
    """The remote record service answered with something unusable."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        content_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.content_type = content_type


class UnpackError(ResolutionError):
    """The downloaded record archive could not be extracted."""

    def __init__(self, message: str, *, code: int) -> None:
        super().__init__(message)
        self.code = code


class UnsupportedOperation(ResolutionError):
    """The requested source type cannot be served this way."""


class InvalidReference(ValueError):
    """A reference string could not be parsed."""
