"""Error types raised by the probe."""

from smb_file_check.models import Status


class ProbeError(Exception):
    """Base class for every error that ends a check with a verdict."""
    
    status = Status.UNKNOWN


class UsageError(ProbeError):
    """Invalid command-line input, detected before any remote access."""
    
    status = Status.UNKNOWN


class InvalidThresholdFormat(UsageError):
    """Threshold string has no positive numeric prefix."""


class UnknownUnit(UsageError):
    """Unit suffix is not legal for the selected property."""


class ThresholdOrderingError(UsageError):
    """Critical threshold does not exceed the warning threshold."""


class InvalidPattern(UsageError):
    """A content or name pattern is not a valid regular expression."""


class TransportUnavailable(ProbeError):
    """Could not establish a session with the remote host."""
    
    status = Status.UNKNOWN


class NotFoundError(ProbeError):
    """The object to check does not exist."""
    
    status = Status.CRITICAL


class InfrastructureError(ProbeError):
    """A remote operation failed for a reason other than not-found."""
    
    status = Status.CRITICAL


class NoMatchError(ProbeError):
    """A directory scan matched no objects."""
    
    status = Status.CRITICAL
    
    def __init__(self, message: str = "No files found") -> None:
        super().__init__(message)
