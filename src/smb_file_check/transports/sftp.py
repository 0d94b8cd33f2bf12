"""SFTP transport over SSH, built on paramiko."""

import logging
import stat as stat_module
from pathlib import Path
from typing import Any

import paramiko

from smb_file_check.config import ConnectionConfig
from smb_file_check.exceptions import (
    InfrastructureError,
    NotFoundError,
    TransportUnavailable,
)
from smb_file_check.models import ObjectStat
from smb_file_check.transports.base import NOT_FOUND_ERRNOS, BaseTransport

logger = logging.getLogger(__name__)


class SFTPTransport(BaseTransport):
    """Access objects on a remote host through SFTP."""
    
    def __init__(self, host: str, connection: ConnectionConfig) -> None:
        self.host = host
        self.connection = connection
        self._client: paramiko.SSHClient | None = None
        self._sftp: paramiko.SFTPClient | None = None
    
    def _get_sftp(self) -> paramiko.SFTPClient:
        """Get or create the SFTP session."""
        if self._sftp is not None:
            return self._sftp
        
        conn = self.connection
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        
        connect_kwargs: dict[str, Any] = {
            "hostname": self.host,
            "port": conn.port or 22,
            "username": conn.username,
            "timeout": conn.timeout,
        }
        
        if conn.key_file:
            connect_kwargs["key_filename"] = str(Path(conn.key_file).expanduser())
        elif conn.password:
            connect_kwargs["password"] = conn.password
        else:
            # Try to use default SSH agent
            connect_kwargs["allow_agent"] = True
            connect_kwargs["look_for_keys"] = True
        
        logger.debug(f"Opening SFTP session to {self.host}:{connect_kwargs['port']}")
        try:
            client.connect(**connect_kwargs)
            self._sftp = client.open_sftp()
        except (paramiko.SSHException, OSError) as e:
            client.close()
            raise TransportUnavailable(f"Cannot connect to {self.host}: {e}") from e
        self._client = client
        return self._sftp
    
    def stat(self, path: str) -> ObjectStat:
        sftp = self._get_sftp()
        try:
            attrs = sftp.stat(path)
        except OSError as e:
            if e.errno in NOT_FOUND_ERRNOS:
                raise NotFoundError(f"{path}: {e.strerror or e}") from e
            raise InfrastructureError(f"{path}: {e}") from e
        except paramiko.SSHException as e:
            raise InfrastructureError(f"{path}: {e}") from e
        return ObjectStat(
            size_bytes=attrs.st_size or 0,
            accessed_epoch=attrs.st_atime or 0,
            modified_epoch=attrs.st_mtime or 0,
            is_directory=stat_module.S_ISDIR(attrs.st_mode or 0),
        )
    
    def open_file(self, path: str) -> paramiko.SFTPFile:
        sftp = self._get_sftp()
        try:
            return sftp.open(path, "rb")
        except (paramiko.SSHException, OSError) as e:
            raise InfrastructureError(f"Cannot open {path}: {e}") from e
    
    def read_chunk(self, handle: Any, size: int) -> bytes:
        try:
            return handle.read(size)
        except (paramiko.SSHException, OSError) as e:
            raise InfrastructureError(f"Read failed: {e}") from e
    
    def close_file(self, handle: Any) -> None:
        handle.close()
    
    def list_directory(self, path: str) -> list[str]:
        sftp = self._get_sftp()
        try:
            return sorted(sftp.listdir(path))
        except (paramiko.SSHException, OSError) as e:
            raise InfrastructureError(f"Cannot list {path}: {e}") from e
    
    def disconnect(self) -> None:
        """Close SFTP session and SSH connection."""
        if self._sftp:
            self._sftp.close()
            self._sftp = None
        if self._client:
            self._client.close()
            self._client = None
