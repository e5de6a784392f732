"""Exceptions raised by the dingz integration."""

from __future__ import annotations


class DingzError(Exception):
    """Base class for dingz errors."""


class DingzCommunicationError(DingzError):
    """Raised when the device is unreachable or answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Store the human readable cause and the HTTP status when known."""

        super().__init__(message)
        self.status_code = status_code


class DingzReportError(DingzError, IndexError):
    """Raised when a device report cannot be mapped onto its channels."""
