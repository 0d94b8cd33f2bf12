"""Catalog of checkable file properties and their units."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from smb_file_check.exceptions import UnknownUnit, UsageError
from smb_file_check.models import ObjectStat


class MeasureKind(str, Enum):
    """Groups of mutually convertible units."""

    TIME = "TIME"
    SIZE = "SIZE"


# Scale factors to the base unit of each kind (seconds, bytes)
UNIT_SCALES: dict[MeasureKind, dict[str, int]] = {
    MeasureKind.TIME: {
        "SECONDS": 1,
        "MINUTES": 60,
        "HOURS": 3600,
        "DAYS": 86400,
    },
    MeasureKind.SIZE: {
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
    },
}


@dataclass(frozen=True)
class Unit:
    """A named scale factor within a measure kind."""

    name: str
    kind: MeasureKind
    scale: int

    @property
    def perfdata_unit(self) -> str:
        """Unit annotation used in performance data."""
        if self.kind is MeasureKind.SIZE:
            return self.name
        return "s" if self.name == "SECONDS" else ""


def unit_scale(kind: MeasureKind, name: str) -> int:
    """Look up the scale factor of a unit, raising UnknownUnit if not registered."""
    try:
        return UNIT_SCALES[kind][name]
    except KeyError:
        raise UnknownUnit(f"Unknown {kind.value.lower()} unit '{name}'") from None


def get_unit(kind: MeasureKind, name: str) -> Unit:
    """Build the Unit for a name registered under `kind`."""
    return Unit(name=name, kind=kind, scale=unit_scale(kind, name))


@dataclass(frozen=True)
class PropertyInfo:
    """How a property is measured and displayed."""

    kind: MeasureKind
    default_unit: str
    label: str
    observe: Callable[[ObjectStat, float], float]


class Property(str, Enum):
    """File attribute under evaluation."""

    SIZE = "SIZE"
    MODIFIED = "MODIFIED"
    ACCESSED = "ACCESSED"

    @classmethod
    def parse(cls, name: str) -> "Property":
        """Resolve a case-insensitive property name."""
        try:
            return cls(name.upper())
        except ValueError:
            raise UsageError(f"Invalid file property '{name}'") from None

    @property
    def info(self) -> PropertyInfo:
        return _PROPERTY_INFO[self]

    @property
    def kind(self) -> MeasureKind:
        return self.info.kind

    @property
    def label(self) -> str:
        return self.info.label

    @property
    def is_time(self) -> bool:
        return self.info.kind is MeasureKind.TIME

    def default_unit(self) -> Unit:
        """Unit used when a threshold omits its suffix."""
        return get_unit(self.kind, self.info.default_unit)

    def unit(self, name: str) -> Unit:
        """Resolve a unit name legal for this property."""
        try:
            return get_unit(self.kind, name)
        except UnknownUnit:
            raise UnknownUnit(
                f"Invalid time/size measure '{name}' for property '{self.value}'"
            ) from None

    def observe(self, stat: ObjectStat, now: float) -> float:
        """Observed value in base units: bytes for SIZE, age in seconds otherwise."""
        return self.info.observe(stat, now)

    def timestamp(self, stat: ObjectStat) -> float | None:
        """Epoch of the attribute for time properties."""
        if self is Property.MODIFIED:
            return stat.modified_epoch
        if self is Property.ACCESSED:
            return stat.accessed_epoch
        return None


_PROPERTY_INFO = {
    Property.SIZE: PropertyInfo(
        kind=MeasureKind.SIZE,
        default_unit="MB",
        label="size",
        observe=lambda stat, now: stat.size_bytes,
    ),
    Property.MODIFIED: PropertyInfo(
        kind=MeasureKind.TIME,
        default_unit="DAYS",
        label="modified_age",
        observe=lambda stat, now: now - stat.modified_epoch,
    ),
    Property.ACCESSED: PropertyInfo(
        kind=MeasureKind.TIME,
        default_unit="DAYS",
        label="accessed_age",
        observe=lambda stat, now: now - stat.accessed_epoch,
    ),
}
