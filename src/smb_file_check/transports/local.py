"""Local file system transport, for shares mounted on the monitoring host."""

import logging
import os
import stat as stat_module
from pathlib import Path
from typing import Any, BinaryIO

from smb_file_check.exceptions import InfrastructureError, NotFoundError
from smb_file_check.models import ObjectStat
from smb_file_check.transports.base import NOT_FOUND_ERRNOS, BaseTransport

logger = logging.getLogger(__name__)


class LocalTransport(BaseTransport):
    """Access objects through the local file system."""
    
    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else None
    
    def _resolve(self, path: str) -> Path:
        if self.root is None:
            return Path(path)
        return self.root / path.lstrip("/")
    
    def stat(self, path: str) -> ObjectStat:
        target = self._resolve(path)
        try:
            st = os.stat(target)
        except OSError as e:
            if e.errno in NOT_FOUND_ERRNOS:
                raise NotFoundError(f"{target}: {e.strerror}") from e
            raise InfrastructureError(f"{target}: {e.strerror}") from e
        return ObjectStat(
            size_bytes=st.st_size,
            accessed_epoch=st.st_atime,
            modified_epoch=st.st_mtime,
            is_directory=stat_module.S_ISDIR(st.st_mode),
        )
    
    def open_file(self, path: str) -> BinaryIO:
        target = self._resolve(path)
        try:
            return open(target, "rb")
        except OSError as e:
            raise InfrastructureError(f"Cannot open {target}: {e.strerror}") from e
    
    def read_chunk(self, handle: Any, size: int) -> bytes:
        try:
            return handle.read(size)
        except OSError as e:
            raise InfrastructureError(f"Read failed: {e.strerror}") from e
    
    def close_file(self, handle: Any) -> None:
        handle.close()
    
    def list_directory(self, path: str) -> list[str]:
        target = self._resolve(path)
        try:
            return sorted(os.listdir(target))
        except OSError as e:
            raise InfrastructureError(f"Cannot list {target}: {e.strerror}") from e
