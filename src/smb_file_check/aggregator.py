"""Directory scans: evaluate every matching object and fold the outcomes into one verdict."""

import logging
import re
from dataclasses import dataclass, field

from smb_file_check.content import ContentPatterns, scan
from smb_file_check.evaluator import evaluate_thresholds
from smb_file_check.exceptions import InvalidPattern, NoMatchError
from smb_file_check.models import (
    AggregateResult,
    Finding,
    ObjectStat,
    PerformanceRecord,
    Status,
)
from smb_file_check.perfdata import build_record
from smb_file_check.thresholds import Threshold
from smb_file_check.transports.base import BaseTransport
from smb_file_check.units import Property

logger = logging.getLogger(__name__)


def compile_name_pattern(pattern: str | None, case_sensitive: bool) -> re.Pattern[str] | None:
    """Compile the entry name filter. None matches every entry."""
    if not pattern:
        return None
    try:
        return re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)
    except re.error as e:
        raise InvalidPattern(f"Invalid name pattern '{pattern}': {e}") from e


@dataclass(frozen=True)
class PropertyThresholds:
    """Warning/critical thresholds for the active property."""

    prop: Property
    warning: Threshold | None = None
    critical: Threshold | None = None


@dataclass(frozen=True)
class CountThresholds:
    """Thresholds on the number of matched objects."""

    warning: int | None = None
    critical: int | None = None

    @property
    def configured(self) -> bool:
        return self.warning is not None or self.critical is not None


@dataclass
class ScanTally:
    """Accumulators owned by one directory scan."""

    matched: dict[str, ObjectStat] = field(default_factory=dict)
    threshold_critical: int = 0
    threshold_warning: int = 0
    pattern_critical: int = 0
    pattern_warning: int = 0
    findings: list[Finding] = field(default_factory=list)
    records: list[PerformanceRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.matched)

    def add_threshold_breach(self, key: str, status: Status, message: str) -> None:
        if status is Status.CRITICAL:
            self.threshold_critical += 1
        else:
            self.threshold_warning += 1
        self.findings.append(Finding(key, status, message))

    def add_pattern_match(self, key: str, status: Status, message: str) -> None:
        if status is Status.CRITICAL:
            self.pattern_critical += 1
        else:
            self.pattern_warning += 1
        self.findings.append(Finding(key, status, message))


def _majority(critical: int, warning: int) -> Status:
    # A tie resolves to WARNING, critical must be strictly more frequent
    return Status.CRITICAL if critical > warning else Status.WARNING


class DirectoryAggregator:
    """Evaluate all objects of a directory whose names match a pattern."""

    def __init__(
        self,
        transport: BaseTransport,
        thresholds: PropertyThresholds,
        patterns: ContentPatterns | None = None,
        counts: CountThresholds | None = None,
        name_pattern: re.Pattern[str] | None = None,
        collect_perf: bool = True,
        now: float = 0.0,
    ) -> None:
        self.transport = transport
        self.thresholds = thresholds
        self.patterns = patterns or ContentPatterns()
        self.counts = counts or CountThresholds()
        self.name_pattern = name_pattern
        self.collect_perf = collect_perf
        self.now = now

    def collect(self, directory: str, tally: ScanTally) -> None:
        """Register every matching, non-directory entry under its relative path."""
        for name in self.transport.list_directory(directory):
            if name in (".", ".."):
                continue
            if self.name_pattern is not None and not self.name_pattern.search(name):
                continue
            stat = self.transport.stat(self.transport.join(directory, name))
            if not stat.exists:
                logger.debug(f"Skipping vanished entry {name}")
                continue
            if stat.is_directory:
                logger.debug(f"Skipping sub-directory {name}")
                continue
            tally.matched[name] = stat
        logger.info(f"{tally.total} objects matched in {directory}")

    def evaluate_object(self, directory: str, key: str, stat: ObjectStat, tally: ScanTally) -> None:
        """Classify one object as a threshold breach, a pattern match or clean."""
        t = self.thresholds
        breach = evaluate_thresholds(t.prop, t.warning, t.critical, stat, self.now)
        if breach is not None:
            status, message = breach
            tally.add_threshold_breach(key, status, message)
        elif self.patterns.enabled:
            match = scan(self.transport, self.transport.join(directory, key), self.patterns)
            if match is not None:
                status, message = match
                tally.add_pattern_match(key, status, message)

        if self.collect_perf:
            tally.records.append(
                build_record(t.prop, t.warning, t.critical, stat, self.now, object_key=key)
            )

    def aggregate(self, directory: str) -> AggregateResult:
        """Scan `directory` and resolve one aggregate verdict.

        Raises:
            NoMatchError: if no entry matched the name pattern.
        """
        tally = ScanTally()
        self.collect(directory, tally)
        if not tally.matched:
            raise NoMatchError()

        for key, stat in tally.matched.items():
            self.evaluate_object(directory, key, stat, tally)

        status, message = self.resolve(tally)
        return AggregateResult(
            status=status,
            message=message,
            records=tally.records,
            findings=tally.findings,
            objects_checked=tally.total,
            threshold_critical=tally.threshold_critical,
            threshold_warning=tally.threshold_warning,
            pattern_critical=tally.pattern_critical,
            pattern_warning=tally.pattern_warning,
        )

    def resolve(self, tally: ScanTally) -> tuple[Status, str]:
        """Apply the first rule that fires: breaches, pattern matches, file count."""
        total = tally.total
        if tally.threshold_critical or tally.threshold_warning:
            return (
                _majority(tally.threshold_critical, tally.threshold_warning),
                f"{tally.threshold_critical} critical and {tally.threshold_warning} "
                f"warning threshold breaches, {total} files checked.",
            )

        if tally.pattern_critical or tally.pattern_warning:
            return (
                _majority(tally.pattern_critical, tally.pattern_warning),
                f"{tally.pattern_critical} critical and {tally.pattern_warning} "
                f"warning pattern matches, {total} files checked.",
            )

        if self.counts.configured:
            if self.counts.critical is not None and total >= self.counts.critical:
                return Status.CRITICAL, f"{total} files found (critical count {self.counts.critical})"
            if self.counts.warning is not None and total >= self.counts.warning:
                return Status.WARNING, f"{total} files found (warning count {self.counts.warning})"

        return Status.OK, f"{total} files checked."
