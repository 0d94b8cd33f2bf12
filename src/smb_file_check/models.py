"""Data models for file checks."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable


class Status(str, Enum):
    """Plugin status levels."""

    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        """Conventional monitoring plugin exit code."""
        return _EXIT_CODES[self]

    @property
    def severity(self) -> int:
        """Rank used to pick the worst of several statuses."""
        return _SEVERITY[self]


_EXIT_CODES = {
    Status.OK: 0,
    Status.WARNING: 1,
    Status.CRITICAL: 2,
    Status.UNKNOWN: 3,
}

# UNKNOWN never comes out of an evaluation, it is only raised by usage errors
_SEVERITY = {
    Status.OK: 0,
    Status.UNKNOWN: 1,
    Status.WARNING: 2,
    Status.CRITICAL: 3,
}


def worst_status(statuses: Iterable[Status]) -> Status:
    """Resolve a set of statuses to one verdict: CRITICAL > WARNING > OK."""
    worst = Status.OK
    for status in statuses:
        if status.severity > worst.severity:
            worst = status
    return worst


@dataclass(frozen=True)
class ObjectStat:
    """Snapshot of one remote object's attributes.

    Transports raise NotFoundError for missing objects, so `exists` is normally
    True. A snapshot with `exists=False` is treated as not found.
    """

    size_bytes: int
    accessed_epoch: float
    modified_epoch: float
    exists: bool = True
    is_directory: bool = False


@dataclass(frozen=True)
class Finding:
    """Outcome of evaluating one object."""

    object_key: str
    status: Status
    message: str


@dataclass(frozen=True)
class PerformanceRecord:
    """A normalized measurement for one object's active property."""

    label: str
    value: str
    warn: str = ""
    crit: str = ""
    unit: str = ""
    object_key: str | None = None

    @property
    def name(self) -> str:
        """Label as emitted, prefixed with the object key in directory mode."""
        if self.object_key:
            return f"{self.object_key} {self.label}"
        return self.label

    def format(self) -> str:
        """Render as `'label'=value[unit];warn;crit;;`, doubling any quote in the label."""
        quoted = self.name.replace("'", "''")
        return f"'{quoted}'={self.value}{self.unit};{self.warn};{self.crit};;"


def format_perfdata(records: Iterable[PerformanceRecord]) -> str:
    """Concatenate performance records with no separator."""
    return "".join(record.format() for record in records)


@dataclass
class CheckResult:
    """Final verdict of one probe invocation."""

    status: Status
    message: str
    records: list[PerformanceRecord] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)
    objects_checked: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def format_line(self) -> str:
        """Render the single plugin output line."""
        line = f"{self.status.value}: {self.message}"
        if self.records:
            line += "|" + format_perfdata(self.records)
        return line

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "exit_code": self.status.exit_code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "objects_checked": self.objects_checked,
            "findings": [
                {
                    "object": f.object_key,
                    "status": f.status.value,
                    "message": f.message,
                }
                for f in self.findings
            ],
            "perfdata": [
                {
                    "label": r.name,
                    "value": r.value,
                    "unit": r.unit,
                    "warn": r.warn,
                    "crit": r.crit,
                }
                for r in self.records
            ],
        }


@dataclass
class AggregateResult(CheckResult):
    """Verdict of a directory scan, with the tallies behind it."""

    threshold_critical: int = 0
    threshold_warning: int = 0
    pattern_critical: int = 0
    pattern_warning: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["tallies"] = {
            "threshold": {
                "critical": self.threshold_critical,
                "warning": self.threshold_warning,
            },
            "pattern": {
                "critical": self.pattern_critical,
                "warning": self.pattern_warning,
            },
        }
        return data
