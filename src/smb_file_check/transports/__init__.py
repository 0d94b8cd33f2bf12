"""File access transports for different protocols."""

from smb_file_check.config import ConnectionConfig
from smb_file_check.exceptions import UsageError
from smb_file_check.transports.base import BaseTransport
from smb_file_check.transports.local import LocalTransport
from smb_file_check.transports.sftp import SFTPTransport
from smb_file_check.transports.smb import SMBTransport

TRANSPORTS = ("smb", "sftp", "local")


def create_transport(kind: str, host: str, connection: ConnectionConfig) -> BaseTransport:
    """Create the transport named `kind` for `host`."""
    if kind == "smb":
        return SMBTransport(host, connection)
    if kind == "sftp":
        return SFTPTransport(host, connection)
    if kind == "local":
        return LocalTransport()
    raise UsageError(f"Unknown transport '{kind}'")


__all__ = [
    "BaseTransport",
    "LocalTransport",
    "SFTPTransport",
    "SMBTransport",
    "TRANSPORTS",
    "create_transport",
]
