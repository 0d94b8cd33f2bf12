"""Threshold evaluation of a single object's stat attributes."""

import time

from smb_file_check.models import ObjectStat, Status
from smb_file_check.thresholds import Threshold
from smb_file_check.units import Property


def evaluate(prop: Property, threshold: Threshold, stat: ObjectStat, now: float) -> str | None:
    """Check one property against one threshold.

    Args:
        prop: Property under evaluation.
        threshold: Parsed threshold in a unit of the property's kind.
        stat: Attributes of the object.
        now: Reference instant, sampled once per run.

    Returns:
        A human readable explanation if the observed value strictly exceeds
        the threshold, otherwise None.
    """
    observed = prop.observe(stat, now)
    if observed <= threshold.base_value:
        return None

    unit = threshold.unit
    readable = observed / unit.scale
    if prop is Property.SIZE:
        return f"File size {readable:.2f}{unit.name}"

    return (
        f"File property '{prop.value}' is {readable:.2f} {unit.name} old. "
        f"Time for property is {time.ctime(prop.timestamp(stat))}"
    )


def evaluate_thresholds(
    prop: Property,
    warning: Threshold | None,
    critical: Threshold | None,
    stat: ObjectStat,
    now: float,
) -> tuple[Status, str] | None:
    """Evaluate critical first, then warning. Returns the first breach found."""
    if critical is not None:
        explanation = evaluate(prop, critical, stat, now)
        if explanation:
            return Status.CRITICAL, explanation
    if warning is not None:
        explanation = evaluate(prop, warning, stat, now)
        if explanation:
            return Status.WARNING, explanation
    return None
