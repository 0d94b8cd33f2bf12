"""Performance data records for monitoring-system ingestion."""

from smb_file_check.models import ObjectStat, PerformanceRecord
from smb_file_check.thresholds import Threshold
from smb_file_check.units import Property, Unit


def display_unit(
    prop: Property,
    warning: Threshold | None,
    critical: Threshold | None,
) -> Unit:
    """Pick the unit shared by value, warn and crit.

    With both thresholds, the one with the larger resolved value wins and
    critical wins a tie. With one threshold its unit is used, with none the
    property's default unit.
    """
    if warning is not None and critical is not None:
        if warning.base_value > critical.base_value:
            return warning.unit
        return critical.unit
    if critical is not None:
        return critical.unit
    if warning is not None:
        return warning.unit
    return prop.default_unit()


def _scaled(base_value: float, unit: Unit) -> str:
    return f"{base_value / unit.scale:.2f}"


def build_record(
    prop: Property,
    warning: Threshold | None,
    critical: Threshold | None,
    stat: ObjectStat,
    now: float,
    object_key: str | None = None,
) -> PerformanceRecord:
    """Build the performance record for one object."""
    unit = display_unit(prop, warning, critical)
    return PerformanceRecord(
        label=prop.label,
        value=_scaled(prop.observe(stat, now), unit),
        warn=_scaled(warning.base_value, unit) if warning is not None else "",
        crit=_scaled(critical.base_value, unit) if critical is not None else "",
        unit=unit.perfdata_unit,
        object_key=object_key,
    )
