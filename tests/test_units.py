"""Tests for the property and unit catalog."""

import pytest

from smb_file_check.exceptions import UnknownUnit, UsageError
from smb_file_check.models import ObjectStat
from smb_file_check.units import MeasureKind, Property, get_unit, unit_scale


class TestUnitScale:
    """Tests for unit lookups."""
    
    def test_time_units(self):
        assert unit_scale(MeasureKind.TIME, "SECONDS") == 1
        assert unit_scale(MeasureKind.TIME, "MINUTES") == 60
        assert unit_scale(MeasureKind.TIME, "HOURS") == 3600
        assert unit_scale(MeasureKind.TIME, "DAYS") == 86400
    
    def test_size_units(self):
        assert unit_scale(MeasureKind.SIZE, "KB") == 1024
        assert unit_scale(MeasureKind.SIZE, "MB") == 1048576
        assert unit_scale(MeasureKind.SIZE, "GB") == 1073741824
    
    def test_unit_of_other_kind_is_unknown(self):
        with pytest.raises(UnknownUnit):
            unit_scale(MeasureKind.TIME, "MB")
        with pytest.raises(UnknownUnit):
            unit_scale(MeasureKind.SIZE, "DAYS")
    
    def test_perfdata_unit(self):
        assert get_unit(MeasureKind.TIME, "SECONDS").perfdata_unit == "s"
        assert get_unit(MeasureKind.TIME, "MINUTES").perfdata_unit == ""
        assert get_unit(MeasureKind.TIME, "DAYS").perfdata_unit == ""
        assert get_unit(MeasureKind.SIZE, "KB").perfdata_unit == "KB"
        assert get_unit(MeasureKind.SIZE, "GB").perfdata_unit == "GB"


class TestProperty:
    """Tests for the Property enum."""
    
    def test_parse_case_insensitive(self):
        assert Property.parse("size") is Property.SIZE
        assert Property.parse("Modified") is Property.MODIFIED
        assert Property.parse("ACCESSED") is Property.ACCESSED
    
    def test_parse_invalid(self):
        with pytest.raises(UsageError):
            Property.parse("created")
    
    def test_default_units(self):
        assert Property.SIZE.default_unit().name == "MB"
        assert Property.MODIFIED.default_unit().name == "DAYS"
        assert Property.ACCESSED.default_unit().name == "DAYS"
    
    def test_measure_kinds(self):
        assert Property.SIZE.kind is MeasureKind.SIZE
        assert Property.MODIFIED.is_time
        assert not Property.SIZE.is_time
    
    def test_unit_error_names_suffix_and_property(self):
        with pytest.raises(UnknownUnit) as exc:
            Property.SIZE.unit("DAYS")
        assert "DAYS" in str(exc.value)
        assert "SIZE" in str(exc.value)
    
    def test_observe(self):
        stat = ObjectStat(size_bytes=500, accessed_epoch=900.0, modified_epoch=400.0)
        assert Property.SIZE.observe(stat, 1000.0) == 500
        assert Property.MODIFIED.observe(stat, 1000.0) == 600.0
        assert Property.ACCESSED.observe(stat, 1000.0) == 100.0
    
    def test_timestamp(self):
        stat = ObjectStat(size_bytes=500, accessed_epoch=900.0, modified_epoch=400.0)
        assert Property.MODIFIED.timestamp(stat) == 400.0
        assert Property.ACCESSED.timestamp(stat) == 900.0
        assert Property.SIZE.timestamp(stat) is None
