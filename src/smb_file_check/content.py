"""Content scanning of remote objects against warning/critical patterns.

Objects are read in fixed 1024 byte chunks and each chunk is searched on its
own, so a match spanning two chunks is not detected.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from smb_file_check.exceptions import InvalidPattern
from smb_file_check.models import Status
from smb_file_check.transports.base import BaseTransport

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024


def compile_pattern(pattern: str | None, case_sensitive: bool) -> re.Pattern[bytes] | None:
    """Compile a user pattern for searching raw bytes."""
    if not pattern:
        return None
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern.encode("utf-8"), flags)
    except re.error as e:
        raise InvalidPattern(f"Invalid pattern '{pattern}': {e}") from e


@dataclass
class ContentPatterns:
    """Compiled warning/critical content patterns."""

    warning: str | None = None
    critical: str | None = None
    case_sensitive: bool = False

    def __post_init__(self) -> None:
        self._warning = compile_pattern(self.warning, self.case_sensitive)
        self._critical = compile_pattern(self.critical, self.case_sensitive)

    @property
    def enabled(self) -> bool:
        return self._warning is not None or self._critical is not None

    def match(self, chunk: bytes) -> tuple[Status, str] | None:
        """Test one chunk, critical pattern first."""
        if self._critical is not None and self._critical.search(chunk):
            return Status.CRITICAL, f"File matches pattern [[ {self.critical} ]]"
        if self._warning is not None and self._warning.search(chunk):
            return Status.WARNING, f"File matches pattern [[ {self.warning} ]]"
        return None


def scan_handle(
    transport: BaseTransport,
    handle: Any,
    patterns: ContentPatterns,
) -> tuple[Status, str] | None:
    """Read an open handle chunk by chunk until the first match or end of stream."""
    chunks = 0
    while True:
        chunk = transport.read_chunk(handle, CHUNK_SIZE)
        if not chunk:
            break
        chunks += 1
        result = patterns.match(chunk)
        if result is not None:
            logger.debug(f"Pattern matched in chunk {chunks}")
            return result
    logger.debug(f"No pattern matched in {chunks} chunks")
    return None


def scan(
    transport: BaseTransport,
    path: str,
    patterns: ContentPatterns,
) -> tuple[Status, str] | None:
    """Scan the object at `path`. Skipped entirely when no pattern is set."""
    if not patterns.enabled:
        return None

    handle = transport.open_file(path)
    try:
        return scan_handle(transport, handle, patterns)
    finally:
        transport.close_file(handle)
