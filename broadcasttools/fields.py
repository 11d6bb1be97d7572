"""Conversion of the monitor payload into metric fields."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from .const import TEMPERATURE_UNIT_SUFFIX
from .exceptions import FieldError
from .models import FieldExtraction, FieldRule, RawValue, RuleKind

_LOGGER = logging.getLogger(__name__)

# Label keys carry a fixed literal prefix followed by the channel index, so a
# key matches at most one rule.
FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(RuleKind.TEMPERATURE, re.compile(r"T1([0-9]+)"), "TempValue"),
    FieldRule(RuleKind.METER, re.compile(r"M1([0-9]+)"), "MeterValue"),
    FieldRule(RuleKind.VOLTAGE_CURRENT, re.compile(r"VCLabel([0-9]+)"), "VCValue"),
    FieldRule(RuleKind.STATUS, re.compile(r"S1([0-9]+)"), "StatusIndicator"),
    FieldRule(RuleKind.RELAY, re.compile(r"R2([0-9]+)"), "RelayIndicator"),
)


_INTEGER = re.compile(r"[+-]?[0-9]+")


def keyify(name: str) -> str:
    """Normalize a device label into a field name."""
    return name.lower().replace(" ", "_")


def parse_temperature(key: str, value: RawValue) -> int:
    """Parse a temperature reading such as ``"72 *F"``."""
    if not isinstance(value, str):
        raise FieldError(f"Temperature {key} is not a string: {value!r}", key)
    text = value.removesuffix(TEMPERATURE_UNIT_SUFFIX)
    if not _INTEGER.fullmatch(text):
        raise FieldError(f"Unparseable temperature {key}: {value!r}", key)
    return int(text)


def _passthrough(key: str, value: RawValue) -> RawValue:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise FieldError(f"Unsupported value type for {key}: {value!r}", key)


def _convert(rule: FieldRule, key: str, value: RawValue) -> RawValue:
    if rule.kind is RuleKind.TEMPERATURE:
        return parse_temperature(key, value)
    if rule.kind in (
        RuleKind.METER,
        RuleKind.VOLTAGE_CURRENT,
        RuleKind.STATUS,
        RuleKind.RELAY,
    ):
        return _passthrough(key, value)
    raise ValueError(f"Unknown rule kind: {rule.kind}")


def match_rule(key: str) -> tuple[FieldRule, int] | None:
    """Return the rule matching a payload key together with its index."""
    for rule in FIELD_RULES:
        index = rule.match_index(key)
        if index is not None:
            return rule, index
    return None


def extract_fields(
    values: Mapping[str, RawValue], device: str | None = None
) -> FieldExtraction:
    """Convert the ``values`` mapping of a monitor payload into fields.

    Every label key (``T1<NN>``, ``M1<NN>``, ...) names a field through its own
    value, while the reading itself lives under the companion key built from
    the rule prefix and the zero-padded index. Unknown keys and labels without
    a reading are skipped. Conversion failures are collected as
    :class:`FieldError` and the field is left out. When ``device`` is given,
    error messages are prefixed with it.
    """
    result = FieldExtraction()

    def _error(message: str, key: str) -> None:
        if device:
            message = f"{device}: {message}"
        result.errors.append(FieldError(message, key))

    for key, label in values.items():
        if (matched := match_rule(key)) is None:
            continue
        rule, index = matched

        if not isinstance(label, str):
            _error(f"Label {key} is not a string: {label!r}", key)
            continue

        companion = rule.companion_key(index)
        if companion not in values:
            _LOGGER.debug("No value %s for label %s", companion, key)
            continue

        try:
            result.fields[keyify(label)] = _convert(rule, companion, values[companion])
        except FieldError as err:
            _error(str(err), err.key)

    return result
