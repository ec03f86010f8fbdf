"""
maxupload - Async media uploads for the Max messaging platform API.

Usage:
    >>> from maxupload import UploadFacade
    >>> 
    >>> uploads = UploadFacade(api)
    >>> photo = await uploads.image("cat.jpg")
    >>> video = await uploads.video(open("clip.mp4", "rb"), timeout=60)
"""
import logging

from .core.api import UploadConfig, SSLConfig, DEFAULT_UPLOAD_TIMEOUT
from .core.exceptions import (
    MaxUploadException,
    NotAFileError,
    UploadError,
    TransferError,
    IncompleteUploadError,
)
from .core.upload import (
    UploadFacade,
    UploadCoordinator,
    UploadType,
    PathSource,
    BufferSource,
    StreamSource,
    FileStream,
    FileBuffer,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for maxupload modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'maxupload',
        'maxupload.upload',
        'maxupload.upload.coordinator',
        'maxupload.upload.session',
        'maxupload.upload.chunk',
        'maxupload.upload.buffer',
        'maxupload.upload.file',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'UploadFacade',
    'UploadCoordinator',
    'UploadType',
    'PathSource',
    'BufferSource',
    'StreamSource',
    'FileStream',
    'FileBuffer',
    'UploadConfig',
    'SSLConfig',
    'DEFAULT_UPLOAD_TIMEOUT',
    'MaxUploadException',
    'NotAFileError',
    'UploadError',
    'TransferError',
    'IncompleteUploadError',
    'setup_logging',
]
