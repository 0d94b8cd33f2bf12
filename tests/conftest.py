"""Shared fixtures: an in-memory transport."""

import io
import posixpath

import pytest

from smb_file_check.exceptions import InfrastructureError, NotFoundError
from smb_file_check.models import ObjectStat
from smb_file_check.transports.base import BaseTransport

NOW = 1_700_000_000.0
DAY = 86400


class FakeTransport(BaseTransport):
    """Transport serving files and directories from dicts."""
    
    def __init__(self) -> None:
        self.files: dict[str, tuple[ObjectStat, bytes]] = {}
        self.directories: set[str] = set()
        self.reads: list[bytes] = []
        self.opened: list[str] = []
        self.closed = 0
        self.disconnected = False
        self.list_error: str | None = None
    
    def add_file(
        self,
        path: str,
        size: int | None = None,
        age: float = 0,
        accessed_age: float | None = None,
        content: bytes = b"",
    ) -> None:
        stat = ObjectStat(
            size_bytes=len(content) if size is None else size,
            accessed_epoch=NOW - (age if accessed_age is None else accessed_age),
            modified_epoch=NOW - age,
        )
        self.files[path] = (stat, content)
        self.directories.add(posixpath.dirname(path))
    
    def add_directory(self, path: str) -> None:
        self.directories.add(path)
    
    def stat(self, path: str) -> ObjectStat:
        if path in self.files:
            return self.files[path][0]
        if path in self.directories:
            return ObjectStat(size_bytes=0, accessed_epoch=NOW, modified_epoch=NOW, is_directory=True)
        raise NotFoundError(f"{path}: No such file or directory")
    
    def open_file(self, path: str) -> io.BytesIO:
        self.opened.append(path)
        return io.BytesIO(self.files[path][1])
    
    def read_chunk(self, handle: io.BytesIO, size: int) -> bytes:
        chunk = handle.read(size)
        self.reads.append(chunk)
        return chunk
    
    def close_file(self, handle: io.BytesIO) -> None:
        self.closed += 1
        handle.close()
    
    def list_directory(self, path: str) -> list[str]:
        if self.list_error:
            raise InfrastructureError(self.list_error)
        prefix = path.rstrip("/") + "/"
        names = {
            p[len(prefix):].split("/")[0]
            for p in [*self.files, *self.directories]
            if p.startswith(prefix) and p != prefix
        }
        return sorted(names)
    
    def disconnect(self) -> None:
        self.disconnected = True


@pytest.fixture
def transport():
    return FakeTransport()
