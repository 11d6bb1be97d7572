"""Data models for Broadcast Tools library."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Union

# Scalar values found in the decoded monitor payload
RawValue = Union[bool, int, float, str, None]


class RuleKind(Enum):
    """Kinds of dynamically numbered keys reported by the device."""

    TEMPERATURE = "temperature"
    METER = "meter"
    VOLTAGE_CURRENT = "voltage_current"
    STATUS = "status"
    RELAY = "relay"


@dataclass(frozen=True)
class FieldRule:
    """Maps a label key shape to the key holding its value."""

    kind: RuleKind
    pattern: re.Pattern[str]
    companion_prefix: str

    def match_index(self, key: str) -> int | None:
        """Return the numeric index of a matching key, or None."""
        if match := self.pattern.fullmatch(key):
            return int(match.group(1))
        return None

    def companion_key(self, index: int) -> str:
        """Build the key holding the value for the given index."""
        return f"{self.companion_prefix}{index:02d}"


@dataclass
class FieldExtraction:
    """Result of converting one payload into metric fields."""

    fields: dict[str, RawValue] = field(default_factory=dict)
    errors: list[Exception] = field(default_factory=list)


@dataclass
class Metric:
    """One metric sample produced by polling a device."""

    name: str
    fields: dict[str, RawValue]
    device: str
    tags: dict[str, str] | None = None
    errors: list[Exception] = field(default_factory=list)


class Accumulator(Protocol):
    """Sink for gathered metrics, safe for use by concurrent polls."""

    def add_fields(
        self,
        measurement: str,
        fields: dict[str, RawValue],
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record one metric sample."""

    def add_error(self, err: Exception) -> None:
        """Record a non-fatal error."""
