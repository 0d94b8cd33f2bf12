"""Core check logic: single-object and directory modes."""

import logging
import re
import time
from dataclasses import dataclass

from smb_file_check.aggregator import (
    CountThresholds,
    DirectoryAggregator,
    PropertyThresholds,
    compile_name_pattern,
)
from smb_file_check.content import ContentPatterns, scan
from smb_file_check.evaluator import evaluate_thresholds
from smb_file_check.exceptions import (
    NotFoundError,
    ProbeError,
    ThresholdOrderingError,
    UsageError,
)
from smb_file_check.models import CheckResult, Finding, ObjectStat, worst_status
from smb_file_check.perfdata import build_record
from smb_file_check.thresholds import check_ordering, parse_threshold
from smb_file_check.transports.base import BaseTransport
from smb_file_check.units import Property

logger = logging.getLogger(__name__)


@dataclass
class CheckOptions:
    """User supplied check settings, as given on the command line."""

    prop: Property = Property.MODIFIED
    warning: str | None = None
    critical: str | None = None
    warning_match: str | None = None
    critical_match: str | None = None
    case_sensitive: bool = False
    directory: bool = False
    name_match: str | None = None
    warning_count: int | None = None
    critical_count: int | None = None
    perfdata: bool = True

    def validate(self) -> "ResolvedCheck":
        """Parse and cross-check every option.

        Raises:
            UsageError: on any invalid threshold, pattern or count.
        """
        warning = parse_threshold(self.warning, self.prop) if self.warning else None
        critical = parse_threshold(self.critical, self.prop) if self.critical else None
        check_ordering(warning, critical)

        for count in (self.warning_count, self.critical_count):
            if count is not None and count < 0:
                raise UsageError(f"File count threshold must not be negative: {count}")
        if (
            self.warning_count is not None
            and self.critical_count is not None
            and self.critical_count <= self.warning_count
        ):
            raise ThresholdOrderingError(
                "The warning file count must be less than the critical file count"
            )

        return ResolvedCheck(
            thresholds=PropertyThresholds(self.prop, warning, critical),
            patterns=ContentPatterns(
                warning=self.warning_match,
                critical=self.critical_match,
                case_sensitive=self.case_sensitive,
            ),
            counts=CountThresholds(self.warning_count, self.critical_count),
            name_pattern=compile_name_pattern(self.name_match, self.case_sensitive),
            directory=self.directory,
            perfdata=self.perfdata,
        )


@dataclass(frozen=True)
class ResolvedCheck:
    """Validated check settings."""

    thresholds: PropertyThresholds
    patterns: ContentPatterns
    counts: CountThresholds
    name_pattern: re.Pattern[str] | None
    directory: bool
    perfdata: bool


class FileChecker:
    """Run one check against one transport.

    The reference time used for age computations is sampled once, when the
    checker is created, so every object of a run is compared to the same instant.
    """

    def __init__(
        self,
        transport: BaseTransport,
        options: CheckOptions,
        now: float | None = None,
    ) -> None:
        """Initialize the checker.

        Args:
            transport: Transport used for every remote access.
            options: Check settings. Validated here, before any remote access.
            now: Reference epoch; defaults to the current time.
        """
        self.transport = transport
        self.options = options
        self.check = options.validate()
        self.now = time.time() if now is None else now

    def stat(self, path: str) -> ObjectStat:
        stat = self.transport.stat(path)
        if not stat.exists:
            raise NotFoundError(f"{path}: No such file or directory")
        return stat

    def check_file(self, path: str) -> CheckResult:
        """Check a single object."""
        t = self.check.thresholds
        stat = self.stat(path)

        findings: list[Finding] = []
        breach = evaluate_thresholds(t.prop, t.warning, t.critical, stat, self.now)
        if breach is not None:
            findings.append(Finding(path, *breach))
        elif self.check.patterns.enabled and not stat.is_directory:
            match = scan(self.transport, path, self.check.patterns)
            if match is not None:
                findings.append(Finding(path, *match))

        records = []
        if self.check.perfdata:
            records.append(build_record(t.prop, t.warning, t.critical, stat, self.now))

        status = worst_status(f.status for f in findings)
        message = findings[0].message if findings else "file/directory found."
        return CheckResult(
            status=status,
            message=message,
            records=records,
            findings=findings,
            objects_checked=1,
        )

    def check_directory(self, path: str) -> CheckResult:
        """Check every matching object inside a directory."""
        self.stat(path)
        aggregator = DirectoryAggregator(
            self.transport,
            thresholds=self.check.thresholds,
            patterns=self.check.patterns,
            counts=self.check.counts,
            name_pattern=self.check.name_pattern,
            collect_perf=self.check.perfdata,
            now=self.now,
        )
        return aggregator.aggregate(path)

    def run(self, path: str) -> CheckResult:
        """Run the configured mode and turn any probe error into a verdict."""
        mode = "directory" if self.check.directory else "file"
        logger.info(f"Checking {mode} {path} ({self.check.thresholds.prop.value})")
        try:
            if self.check.directory:
                return self.check_directory(path)
            return self.check_file(path)
        except ProbeError as e:
            logger.debug(f"Check of {path} ended with {type(e).__name__}: {e}")
            return CheckResult(status=e.status, message=str(e))
        finally:
            self.transport.disconnect()

