"""Tests for content scanning."""

import pytest

from smb_file_check.content import CHUNK_SIZE, ContentPatterns, scan
from smb_file_check.exceptions import InvalidPattern
from smb_file_check.models import Status


class TestContentPatterns:
    """Tests for pattern compilation and matching."""
    
    def test_disabled_without_patterns(self):
        assert not ContentPatterns().enabled
        assert ContentPatterns(warning="x").enabled
        assert ContentPatterns(critical="x").enabled
    
    def test_case_insensitive_by_default(self):
        patterns = ContentPatterns(critical="error")
        assert patterns.match(b"An ERROR occurred") == (
            Status.CRITICAL,
            "File matches pattern [[ error ]]",
        )
    
    def test_case_sensitive(self):
        patterns = ContentPatterns(critical="error", case_sensitive=True)
        assert patterns.match(b"An ERROR occurred") is None
        assert patterns.match(b"An error occurred") is not None
    
    def test_case_flag_applies_to_both_patterns(self):
        patterns = ContentPatterns(warning="warn", critical="fail", case_sensitive=True)
        assert patterns.match(b"WARN FAIL") is None
    
    def test_critical_tested_first(self):
        patterns = ContentPatterns(warning="disk", critical="full")
        status, _ = patterns.match(b"disk full")
        assert status is Status.CRITICAL
    
    def test_regex(self):
        patterns = ContentPatterns(warning=r"^retry \d+", case_sensitive=True)
        assert patterns.match(b"retry 3 of 5") == (
            Status.WARNING,
            r"File matches pattern [[ ^retry \d+ ]]",
        )
    
    def test_invalid_regex(self):
        with pytest.raises(InvalidPattern):
            ContentPatterns(critical="(unclosed")


class TestScan:
    """Tests for chunked scanning of a file."""
    
    def test_skipped_without_patterns(self, transport):
        transport.add_file("share/a.log", content=b"error")
        assert scan(transport, "share/a.log", ContentPatterns()) is None
        assert transport.opened == []
    
    def test_no_match_reads_to_end(self, transport):
        transport.add_file("share/a.log", content=b"x" * (CHUNK_SIZE * 2 + 10))
        assert scan(transport, "share/a.log", ContentPatterns(critical="error")) is None
        assert [len(c) for c in transport.reads] == [CHUNK_SIZE, CHUNK_SIZE, 10, 0]
        assert transport.closed == 1
    
    def test_match_in_later_chunk(self, transport):
        transport.add_file("share/a.log", content=b"x" * CHUNK_SIZE + b"ERROR")
        status, _ = scan(transport, "share/a.log", ContentPatterns(critical="error"))
        assert status is Status.CRITICAL
        assert len(transport.reads) == 2
    
    def test_critical_match_stops_scanning(self, transport):
        content = b"critical here" + b"x" * CHUNK_SIZE + b"warning there"
        transport.add_file("share/a.log", content=content)
        result = scan(
            transport, "share/a.log", ContentPatterns(warning="warning", critical="critical")
        )
        assert result[0] is Status.CRITICAL
        assert len(transport.reads) == 1
        assert transport.closed == 1
    
    def test_warning_in_earlier_chunk_is_reported_first(self, transport):
        content = b"warning here" + b"x" * CHUNK_SIZE + b"critical there"
        transport.add_file("share/a.log", content=content)
        result = scan(
            transport, "share/a.log", ContentPatterns(warning="warning", critical="critical")
        )
        assert result[0] is Status.WARNING
    
    def test_match_across_chunk_boundary_is_not_detected(self, transport):
        content = b"x" * (CHUNK_SIZE - 2) + b"ERROR"
        transport.add_file("share/a.log", content=content)
        assert scan(transport, "share/a.log", ContentPatterns(critical="ERROR")) is None
    
    def test_empty_file(self, transport):
        transport.add_file("share/empty.log", content=b"")
        assert scan(transport, "share/empty.log", ContentPatterns(warning="x")) is None
        assert transport.closed == 1
