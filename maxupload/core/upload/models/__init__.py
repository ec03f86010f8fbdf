"""Upload data models."""
from .upload_models import (
    UploadType,
    UploadResult,
    PathSource,
    BufferSource,
    StreamSource,
    FileSource,
    as_source,
    UploadFile,
    FileStream,
    FileBuffer,
    ContentRange,
)

__all__ = [
    'UploadType',
    'UploadResult',
    'PathSource',
    'BufferSource',
    'StreamSource',
    'FileSource',
    'as_source',
    'UploadFile',
    'FileStream',
    'FileBuffer',
    'ContentRange',
]
