"""
Upload module for platform media uploads.

Normalizes file sources and sends them either as a sequence of
Content-Range chunks (streams) or as one multipart request (buffers).
"""
from .facade import UploadFacade
from .coordinator import UploadCoordinator
from .session import UploadSession
from .models import (
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
from .services import SourceNormalizer, ChunkUploader, BufferUploader
from .protocols import UploadUrlProvider, ReadableStream, CancellationToken

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadCoordinator',
    'UploadSession',
    
    # Services
    'SourceNormalizer',
    'ChunkUploader',
    'BufferUploader',
    
    # Models
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
    
    # Protocols
    'UploadUrlProvider',
    'ReadableStream',
    'CancellationToken',
]
