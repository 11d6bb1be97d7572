"""Exceptions for the Broadcast Tools library."""

from __future__ import annotations


class BroadcastToolsError(Exception):
    """Base exception for Broadcast Tools errors."""


class ConfigurationError(BroadcastToolsError):
    """Raised when a configured device address is unusable."""


class DeviceConnectionError(BroadcastToolsError):
    """Raised when the device cannot be reached."""


class AuthenticationError(BroadcastToolsError):
    """Raised when the device rejects the login."""


class NoSessionError(AuthenticationError):
    """Raised when a login succeeds but no session cookie is returned."""


class AlreadyAuthenticatedError(BroadcastToolsError):
    """Raised when logging in to a device that already holds a session."""


class NotAuthenticatedError(BroadcastToolsError):
    """Raised when polling a device that has no session."""


class UnexpectedStatusError(BroadcastToolsError):
    """Raised when the monitor endpoint answers with a non-200 status."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


class MalformedPayloadError(BroadcastToolsError):
    """Raised when the monitor payload cannot be decoded or lacks its values."""


class FieldError(BroadcastToolsError):
    """Raised when a single field of the payload cannot be converted."""

    def __init__(self, message: str, key: str) -> None:
        super().__init__(message)
        self.key = key
