"""
smb-file-check - Monitoring probe for files and directories on network shares.

Checks the existence, age, size and contents of one object, or summarizes
every matching object of a directory, and reports an OK/WARNING/CRITICAL
verdict with performance data in the conventional monitoring plugin format.
"""

__version__ = "0.3.0"

from smb_file_check.check import CheckOptions, FileChecker
from smb_file_check.config import Config, ConnectionConfig
from smb_file_check.models import AggregateResult, CheckResult, Status
from smb_file_check.units import Property

__all__ = [
    "AggregateResult",
    "CheckOptions",
    "CheckResult",
    "Config",
    "ConnectionConfig",
    "FileChecker",
    "Property",
    "Status",
]
