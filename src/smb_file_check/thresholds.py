"""Parsing of warning/critical threshold expressions like `10days` or `800KB`."""

import re
from dataclasses import dataclass

from smb_file_check.exceptions import InvalidThresholdFormat, ThresholdOrderingError
from smb_file_check.units import Property, Unit

THRESHOLD_RE = re.compile(r"^([0-9]+)([A-Za-z]+)?$")


@dataclass(frozen=True)
class Threshold:
    """A positive magnitude in a unit of the active property."""

    magnitude: int
    unit: Unit

    @property
    def base_value(self) -> int:
        """Magnitude in base units (seconds or bytes)."""
        return self.magnitude * self.unit.scale

    def __str__(self) -> str:
        return f"{self.magnitude}{self.unit.name}"


def parse_threshold(raw: str, prop: Property) -> Threshold:
    """Parse `<positive-integer>[unit]` for the given property.

    The unit suffix is case-insensitive. Without a suffix the property's
    default unit applies (DAYS for time properties, MB for size).

    Raises:
        InvalidThresholdFormat: if the numeric prefix is missing or not positive.
        UnknownUnit: if the suffix is not a unit of the property's measure kind.
    """
    match = THRESHOLD_RE.match(raw.strip())
    if not match:
        raise InvalidThresholdFormat(f"Invalid threshold value '{raw}'")

    magnitude = int(match.group(1))
    if magnitude <= 0:
        raise InvalidThresholdFormat(f"Threshold value must be positive: '{raw}'")

    suffix = match.group(2)
    unit = prop.unit(suffix.upper()) if suffix else prop.default_unit()
    return Threshold(magnitude=magnitude, unit=unit)


def check_ordering(warning: Threshold | None, critical: Threshold | None) -> None:
    """Require critical to resolve strictly above warning when both are set."""
    if warning is None or critical is None:
        return
    if critical.base_value <= warning.base_value:
        raise ThresholdOrderingError(
            "The warning value must be less than the critical value"
        )
