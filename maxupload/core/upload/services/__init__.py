"""Upload services module."""
from .file_service import SourceNormalizer, generate_file_name
from .chunk_service import ChunkUploader
from .buffer_service import BufferUploader

__all__ = [
    'SourceNormalizer',
    'generate_file_name',
    'ChunkUploader',
    'BufferUploader',
]
