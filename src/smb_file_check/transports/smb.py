"""SMB/CIFS transport built on smbprotocol."""

import logging
import stat as stat_module
from typing import Any

import smbclient
from smbprotocol.exceptions import SMBException

from smb_file_check.config import ConnectionConfig
from smb_file_check.exceptions import (
    InfrastructureError,
    NotFoundError,
    TransportUnavailable,
)
from smb_file_check.models import ObjectStat
from smb_file_check.transports.base import NOT_FOUND_ERRNOS, BaseTransport

logger = logging.getLogger(__name__)


class SMBTransport(BaseTransport):
    """Access objects on an SMB share.
    
    Paths are `share/dir/file`; back slashes and forward slashes are both
    accepted and turned into a UNC path on `host`.
    """
    
    def __init__(self, host: str, connection: ConnectionConfig) -> None:
        self.host = host
        self.connection = connection
        self._registered = False
    
    def _unc(self, path: str) -> str:
        parts = [p for p in path.replace("\\", "/").split("/") if p]
        return "\\\\" + "\\".join([self.host, *parts])
    
    def _ensure_session(self) -> None:
        """Register the SMB session on first use."""
        if self._registered:
            return
        
        conn = self.connection
        username = conn.username
        if username and conn.workgroup:
            username = f"{conn.workgroup}\\{username}"
        
        session_kwargs: dict[str, Any] = {
            "port": conn.port or 445,
            "connection_timeout": conn.timeout,
        }
        if conn.kerberos:
            session_kwargs["auth_protocol"] = "kerberos"
        else:
            session_kwargs["username"] = username
            session_kwargs["password"] = conn.password
        
        logger.debug(f"Registering SMB session with {self.host}:{session_kwargs['port']}")
        try:
            smbclient.register_session(self.host, **session_kwargs)
        except (SMBException, OSError, ValueError) as e:
            raise TransportUnavailable(f"Cannot connect to {self.host}: {e}") from e
        self._registered = True
    
    def _translate(self, e: Exception, what: str) -> Exception:
        if isinstance(e, OSError) and e.errno in NOT_FOUND_ERRNOS:
            return NotFoundError(f"{what}: {e.strerror or e}")
        return InfrastructureError(f"{what}: {e}")
    
    def stat(self, path: str) -> ObjectStat:
        self._ensure_session()
        unc = self._unc(path)
        try:
            st = smbclient.stat(unc)
        except (SMBException, OSError) as e:
            raise self._translate(e, unc) from e
        return ObjectStat(
            size_bytes=st.st_size,
            accessed_epoch=st.st_atime,
            modified_epoch=st.st_mtime,
            is_directory=stat_module.S_ISDIR(st.st_mode),
        )
    
    def open_file(self, path: str) -> Any:
        self._ensure_session()
        unc = self._unc(path)
        try:
            return smbclient.open_file(unc, mode="rb")
        except (SMBException, OSError) as e:
            raise InfrastructureError(f"Cannot open {unc}: {e}") from e
    
    def read_chunk(self, handle: Any, size: int) -> bytes:
        try:
            return handle.read(size)
        except (SMBException, OSError) as e:
            raise InfrastructureError(f"Read failed: {e}") from e
    
    def close_file(self, handle: Any) -> None:
        handle.close()
    
    def list_directory(self, path: str) -> list[str]:
        self._ensure_session()
        unc = self._unc(path)
        try:
            return sorted(smbclient.listdir(unc))
        except (SMBException, OSError) as e:
            raise InfrastructureError(f"Cannot list {unc}: {e}") from e
    
    def disconnect(self) -> None:
        if self._registered:
            try:
                smbclient.delete_session(self.host, port=self.connection.port or 445)
            except (SMBException, OSError) as e:
                logger.debug(f"Closing SMB session failed: {e}")
            self._registered = False
