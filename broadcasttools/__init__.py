"""Python library for Broadcast Tools devices."""

from .broadcasttools import BroadcastTools
from .device import BroadcastToolsDevice
from .exceptions import (
    AlreadyAuthenticatedError,
    AuthenticationError,
    BroadcastToolsError,
    ConfigurationError,
    DeviceConnectionError,
    FieldError,
    MalformedPayloadError,
    NoSessionError,
    NotAuthenticatedError,
    UnexpectedStatusError,
)
from .fields import extract_fields, keyify
from .models import Accumulator, FieldExtraction, FieldRule, Metric, RuleKind

__all__ = [
    "Accumulator",
    "AlreadyAuthenticatedError",
    "AuthenticationError",
    "BroadcastTools",
    "BroadcastToolsDevice",
    "BroadcastToolsError",
    "ConfigurationError",
    "DeviceConnectionError",
    "FieldError",
    "FieldExtraction",
    "FieldRule",
    "Metric",
    "MalformedPayloadError",
    "NoSessionError",
    "NotAuthenticatedError",
    "RuleKind",
    "UnexpectedStatusError",
    "extract_fields",
    "keyify",
]
