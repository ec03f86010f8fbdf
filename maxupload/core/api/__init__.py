"""Upload HTTP configuration."""
from .config import (
    UploadConfig,
    SSLConfig,
    DEFAULT_UPLOAD_TIMEOUT,
    DEFAULT_READ_CHUNK_SIZE,
)

__all__ = [
    'UploadConfig',
    'SSLConfig',
    'DEFAULT_UPLOAD_TIMEOUT',
    'DEFAULT_READ_CHUNK_SIZE',
]
