"""Tests for source normalization."""
import inspect
import io
import os

import aiofiles
import pytest

from maxupload.core.exceptions import NotAFileError
from maxupload.core.upload.models import (
    PathSource,
    BufferSource,
    StreamSource,
    FileStream,
    FileBuffer,
)
from maxupload.core.upload.services import SourceNormalizer


class TestSourceNormalizer:
    """Test suite for SourceNormalizer."""
    
    @pytest.fixture
    def normalizer(self):
        """Create normalizer instance."""
        return SourceNormalizer()
    
    @pytest.mark.asyncio
    async def test_path_source(self, normalizer, temp_file):
        """Test path becomes an owned FileStream."""
        file = await normalizer.normalize(PathSource(str(temp_file)))
        try:
            assert isinstance(file, FileStream)
            assert file.file_name == "clip.mp4"
            assert file.content_length == 1500
            assert file.owns_stream is True
            assert await file.stream.read(4) == bytes(range(4))
        finally:
            await file.stream.close()
    
    @pytest.mark.asyncio
    async def test_pathlib_source(self, normalizer, temp_file):
        """Test pathlib.Path is accepted."""
        file = await normalizer.normalize(PathSource(temp_file))
        try:
            assert file.file_name == temp_file.name
        finally:
            await file.stream.close()
    
    @pytest.mark.asyncio
    async def test_directory_raises(self, normalizer, tmp_path):
        """Test directory path raises NotAFileError."""
        with pytest.raises(NotAFileError, match="Not a file"):
            await normalizer.normalize(PathSource(str(tmp_path)))
    
    @pytest.mark.asyncio
    async def test_missing_path_raises(self, normalizer, tmp_path):
        """Test missing path raises an OSError."""
        with pytest.raises(FileNotFoundError):
            await normalizer.normalize(PathSource(str(tmp_path / "missing.bin")))
    
    @pytest.mark.asyncio
    async def test_buffer_source(self, normalizer):
        """Test buffer becomes FileBuffer with a generated name."""
        file = await normalizer.normalize(BufferSource(b"\x01\x02\x03"))
        
        assert isinstance(file, FileBuffer)
        assert file.buffer == b"\x01\x02\x03"
        assert file.file_name
    
    @pytest.mark.asyncio
    async def test_buffer_names_are_unique(self, normalizer):
        """Test repeated buffers get distinct names."""
        names = {
            (await normalizer.normalize(BufferSource(b"x"))).file_name
            for _ in range(5)
        }
        
        assert len(names) == 5
    
    @pytest.mark.asyncio
    async def test_stream_with_path(self, normalizer, temp_file):
        """Test named stream uses its path for name and size."""
        with open(temp_file, 'rb') as handle:
            file = await normalizer.normalize(StreamSource(handle))
            
            assert isinstance(file, FileStream)
            assert await file.stream.read(4) == bytes(range(4))
            assert file.file_name == "clip.mp4"
            assert file.content_length == 1500
            assert file.owns_stream is False
    
    @pytest.mark.asyncio
    async def test_stream_without_path(self, normalizer, temp_file):
        """Test stream opened from a descriptor is sized via fstat."""
        fd = os.open(temp_file, os.O_RDONLY)
        with open(fd, 'rb') as handle:
            file = await normalizer.normalize(StreamSource(handle))
            
            assert file.content_length == 1500
            assert file.file_name != "clip.mp4"
            assert len(file.file_name) == 36
    
    @pytest.mark.asyncio
    async def test_stream_without_size_raises(self, normalizer):
        """Test stream with no path or descriptor raises OSError."""
        with pytest.raises(OSError):
            await normalizer.normalize(StreamSource(io.BytesIO(b"abc")))
    
    @pytest.mark.asyncio
    async def test_unknown_source(self, normalizer):
        """Test unknown source type raises TypeError."""
        with pytest.raises(TypeError):
            await normalizer.normalize("not-a-variant")
    
    @pytest.mark.asyncio
    async def test_sync_stream_is_wrapped(self, normalizer, temp_file):
        """Test plain file handles are read through an async wrapper."""
        with open(temp_file, 'rb') as handle:
            file = await normalizer.normalize(StreamSource(handle))
            
            assert file.stream is not handle
            assert inspect.iscoroutinefunction(file.stream.read)
            assert file.owns_stream is False
    
    @pytest.mark.asyncio
    async def test_async_stream_kept(self, normalizer, temp_file):
        """Test aiofiles handles are used as they are."""
        async with aiofiles.open(temp_file, 'rb') as handle:
            file = await normalizer.normalize(StreamSource(handle))
            
            assert file.stream is handle
            assert file.content_length == 1500
    
    @pytest.mark.asyncio
    async def test_pseudo_name_falls_back_to_descriptor(self, normalizer, temp_file):
        """Test a name like '<stdin>' is not treated as a path."""
        with open(temp_file, 'rb') as handle:
            file = await normalizer.normalize(StreamSource(NamedHandle(handle, '<stdin>')))
            
            assert file.content_length == 1500
            assert file.file_name != '<stdin>'
            assert len(file.file_name) == 36
    
    @pytest.mark.asyncio
    async def test_pseudo_name_without_descriptor_raises(self, normalizer):
        """Test unresolvable name without a descriptor raises OSError."""
        class Unsized:
            name = '<pipe>'
            
            def read(self, size=-1):
                return b''
        
        with pytest.raises(FileNotFoundError):
            await normalizer.normalize(StreamSource(Unsized()))


class NamedHandle:
    """Readable wrapper exposing a custom name and the real descriptor."""
    
    def __init__(self, handle, name):
        self._handle = handle
        self.name = name
    
    def read(self, size=-1):
        return self._handle.read(size)
    
    def fileno(self):
        return self._handle.fileno()
