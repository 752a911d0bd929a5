"""
Byte sources for the normalizer.

The normalizer may read its input more than once (the Windows-1252 strategies
re-read the upload from disk), so it is handed a source rather than a buffer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class SourceError(Exception):
    """The source could not be read."""

    code = "IMP-IO-001"

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class SourceTooLarge(SourceError):
    """The source exceeds the configured size limit."""

    code = "IMP-IO-002"

    def __init__(self, name: str, max_bytes: int, size: int | None) -> None:
        self.max_bytes = max_bytes
        self.size = size
        super().__init__(name, f"exceeds maximum size of {max_bytes} bytes")


class ByteSource(ABC):
    """Something the normalizer can read raw bytes from."""

    name: str

    @abstractmethod
    def read(self) -> bytes:
        """
        Read the full content.

        Raises:
            SourceError: If the content cannot be read
        """


class BytesSource(ByteSource):
    """An in-memory upload."""

    def __init__(self, data: bytes, name: str = "<bytes>", *, max_bytes: int | None = None) -> None:
        self.data = data
        self.name = name
        self.max_bytes = max_bytes

    def read(self) -> bytes:
        if self.max_bytes is not None and len(self.data) > self.max_bytes:
            raise SourceTooLarge(self.name, self.max_bytes, len(self.data))
        return self.data


class PathSource(ByteSource):
    """An upload stored on disk; every read goes back to the file."""

    def __init__(self, path: Path | str, *, max_bytes: int | None = None) -> None:
        self.path = Path(path)
        self.name = str(path)
        self.max_bytes = max_bytes

    def read(self) -> bytes:
        try:
            with self.path.open("rb") as f:
                if self.max_bytes is None:
                    return f.read()
                data = f.read(self.max_bytes + 1)
        except OSError as e:
            raise SourceError(self.name, e.strerror or str(e)) from e

        if len(data) > self.max_bytes:
            size: int | None
            try:
                size = self.path.stat().st_size
            except OSError:
                size = None
            raise SourceTooLarge(self.name, self.max_bytes, size)

        return data
