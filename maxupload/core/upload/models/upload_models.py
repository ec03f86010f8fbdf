"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union
import os


class UploadType(str, Enum):
    """Media kinds accepted by the platform upload endpoint."""
    IMAGE = 'image'
    VIDEO = 'video'
    FILE = 'file'
    AUDIO = 'audio'


# Opaque payload returned by the upload server
UploadResult = Dict[str, Any]


@dataclass(frozen=True)
class PathSource:
    """A file on disk, referenced by path."""
    path: Union[str, os.PathLike]


@dataclass(frozen=True)
class BufferSource:
    """Raw bytes held in memory."""
    data: bytes


@dataclass(frozen=True)
class StreamSource:
    """
    An already-open binary stream.
    
    Either an aiofiles handle or a plain file object opened in binary mode.
    Only ``read(size)`` is required; ``name`` and ``fileno()`` are used to
    determine the file name and size when available.
    """
    stream: Any


FileSource = Union[PathSource, BufferSource, StreamSource]


def as_source(value: Any) -> FileSource:
    """
    Coerce a raw value into a FileSource variant.
    
    Example:
        >>> as_source("video.mp4")
        PathSource(path='video.mp4')
        >>> as_source(b"\\x01\\x02")
        BufferSource(data=b'\\x01\\x02')
    """
    if isinstance(value, (PathSource, BufferSource, StreamSource)):
        return value
    if isinstance(value, (str, Path)):
        return PathSource(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BufferSource(bytes(value))
    if hasattr(value, 'read'):
        return StreamSource(value)
    raise TypeError(f"Unsupported file source: {type(value).__name__}")


@dataclass(frozen=True)
class UploadFile:
    """Base for normalized transferable units."""
    file_name: str


@dataclass(frozen=True)
class FileStream(UploadFile):
    """
    Stream-backed upload file.
    
    Attributes:
        stream: Readable binary stream (sync or async ``read``)
        content_length: Total size in bytes, fixed at normalization time
        owns_stream: True if the stream was opened during normalization
            and must be closed once consumed
    """
    stream: Any
    content_length: int
    owns_stream: bool = False


@dataclass(frozen=True)
class FileBuffer(UploadFile):
    """Buffer-backed upload file."""
    buffer: bytes
    
    @property
    def size(self) -> int:
        """Returns buffer size."""
        return len(self.buffer)


@dataclass(frozen=True)
class ContentRange:
    """
    Inclusive byte span of one chunk within the whole payload.
    
    Example:
        >>> ContentRange(0, 999, 1500).header
        'bytes 0-999/1500'
    """
    start: int
    end: int
    total: int
    
    @classmethod
    def after(cls, offset: int, length: int, total: int) -> 'ContentRange':
        """Build the range following ``offset`` (last byte index already sent)."""
        return cls(offset + 1, offset + length, total)
    
    @property
    def size(self) -> int:
        """Returns number of bytes covered."""
        return self.end - self.start + 1
    
    @property
    def header(self) -> str:
        """Returns the Content-Range header value."""
        return f"bytes {self.start}-{self.end}/{self.total}"
