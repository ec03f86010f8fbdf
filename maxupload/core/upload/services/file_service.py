"""
Source normalization service.

Turns a path, buffer or open stream into a transferable UploadFile.
"""
from pathlib import Path
from typing import Any, Optional
import inspect
import os
import stat
import uuid

import aiofiles
import aiofiles.os
import aiofiles.threadpool

from ..models import (
    FileSource,
    PathSource,
    BufferSource,
    StreamSource,
    UploadFile,
    FileStream,
    FileBuffer,
)
from ...exceptions import NotAFileError
from ...logging import get_logger


def generate_file_name() -> str:
    """Returns a unique name for sources that carry none."""
    return str(uuid.uuid4())


class SourceNormalizer:
    """
    Normalizes heterogeneous file sources.
    
    Responsibilities:
    - Verify a path is a regular file
    - Open a readable stream for paths
    - Resolve file name and byte length
    """
    
    def __init__(self):
        """Initialize normalizer."""
        self._logger = get_logger('maxupload.upload.file')
    
    async def normalize(self, source: FileSource) -> UploadFile:
        """
        Normalize a file source.
        
        Args:
            source: PathSource, BufferSource or StreamSource
            
        Returns:
            FileStream for path and stream sources, FileBuffer for buffers
            
        Raises:
            NotAFileError: If a path is not a regular file
            OSError: If size metadata cannot be read
            TypeError: If source is not a FileSource variant
        """
        if isinstance(source, PathSource):
            return await self._from_path(source.path)
        if isinstance(source, BufferSource):
            return self._from_buffer(source.data)
        if isinstance(source, StreamSource):
            return await self._from_stream(source.stream)
        raise TypeError(f"Unsupported file source: {type(source).__name__}")
    
    async def _from_path(self, path: Any) -> FileStream:
        st = await aiofiles.os.stat(path)
        file_name = os.path.basename(os.fspath(path))
        
        if not stat.S_ISREG(st.st_mode):
            raise NotAFileError(file_name)
        
        handle = await aiofiles.open(path, 'rb')
        self._logger.debug(f"Opened {file_name} for upload ({st.st_size} bytes)")
        
        return FileStream(
            file_name=file_name,
            stream=handle,
            content_length=st.st_size,
            owns_stream=True
        )
    
    def _from_buffer(self, data: bytes) -> FileBuffer:
        file_name = generate_file_name()
        self._logger.debug(f"Buffer source named {file_name} ({len(data)} bytes)")
        return FileBuffer(file_name=file_name, buffer=bytes(data))
    
    async def _from_stream(self, stream: Any) -> FileStream:
        path = self._stream_path(stream)
        st = None
        
        if path is not None:
            try:
                st = await aiofiles.os.stat(path)
                file_name = os.path.basename(path)
            except OSError:
                # Pseudo-names such as '<stdin>' are not paths
                if getattr(stream, 'fileno', None) is None:
                    raise
                self._logger.debug(f"Stream name {path!r} is not a file path, using its descriptor")
        
        if st is None:
            st = self._stat_handle(stream)
            file_name = generate_file_name()
        
        self._logger.debug(f"Stream source {file_name} ({st.st_size} bytes)")
        return FileStream(
            file_name=file_name,
            stream=self._make_async(stream),
            content_length=st.st_size
        )
    
    @staticmethod
    def _make_async(stream: Any) -> Any:
        """Wrap a synchronous io handle so reads run in aiofiles' executor."""
        if inspect.iscoroutinefunction(getattr(stream, 'read', None)):
            return stream
        try:
            return aiofiles.threadpool.wrap(stream)
        except TypeError:
            # Not an io type aiofiles knows; ChunkUploader reads it in an executor
            return stream
    
    @staticmethod
    def _stream_path(stream: Any) -> Optional[str]:
        """Returns the backing path of a stream, if it exposes one."""
        name = getattr(stream, 'name', None)
        if isinstance(name, (str, Path)):
            return os.fspath(name)
        return None
    
    @staticmethod
    def _stat_handle(stream: Any) -> os.stat_result:
        """Stat a stream through its file descriptor."""
        fileno = getattr(stream, 'fileno', None)
        if fileno is None:
            raise OSError("Cannot determine size of stream without a path or file descriptor")
        return os.fstat(fileno())
