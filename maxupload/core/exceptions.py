"""
Custom exceptions for media upload operations.

This module defines exception classes raised by the upload subsystem.
"""
from typing import Optional, Any


class MaxUploadException(Exception):
    """Base exception for all upload-related errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class NotAFileError(MaxUploadException):
    """Raised when a path source does not point to a regular file."""
    
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Failed to upload {path}. Not a file")


class UploadError(MaxUploadException):
    """
    Exception raised when the upload server rejects a transfer.
    
    Carries the HTTP status and the parsed error payload.
    """
    
    def __init__(self, status: int, body: Any = None) -> None:
        """
        Initialize the exception.
        
        Args:
            status: HTTP status code (>= 400)
            body: Parsed JSON error body, or raw text if it did not parse
        """
        self.status = status
        self.body = body
        super().__init__(f"Upload rejected with HTTP {status}: {body!r}", status)


class TransferError(MaxUploadException):
    """Exception raised for network, stream or parse faults during a transfer."""
    pass


class IncompleteUploadError(TransferError):
    """Raised when a stream ends before the server returned a result payload."""
    pass
