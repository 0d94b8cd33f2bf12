"""Base transport interface."""

import errno
import posixpath
from abc import ABC, abstractmethod
from typing import Any

from smb_file_check.models import ObjectStat

# errno values that mean the object is missing, on every transport
NOT_FOUND_ERRNOS = (errno.ENOENT, errno.ENOTDIR)


class BaseTransport(ABC):
    """Abstract base class for remote file access.
    
    All operations are blocking. Implementations raise `NotFoundError` when an
    object does not exist, `InfrastructureError` for any other failed
    operation and `TransportUnavailable` when no session can be established.
    """
    
    @abstractmethod
    def stat(self, path: str) -> ObjectStat:
        """Get the attributes of an object.
        
        Args:
            path: Path of the object relative to the host.
            
        Returns:
            ObjectStat snapshot.
        """
        ...
    
    @abstractmethod
    def open_file(self, path: str) -> Any:
        """Open an object for reading and return a handle."""
        ...
    
    @abstractmethod
    def read_chunk(self, handle: Any, size: int) -> bytes:
        """Read at most `size` bytes. Returns b"" at end of stream."""
        ...
    
    @abstractmethod
    def close_file(self, handle: Any) -> None:
        """Close a handle returned by `open_file`."""
        ...
    
    @abstractmethod
    def list_directory(self, path: str) -> list[str]:
        """List entry names of a directory, without `.` and `..`."""
        ...
    
    def join(self, directory: str, name: str) -> str:
        """Build the path of a directory entry."""
        return posixpath.join(directory, name)
    
    def disconnect(self) -> None:
        """Release the session, if any."""
