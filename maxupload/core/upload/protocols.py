"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection.
"""
from typing import Protocol, Any, Mapping, Optional


class UploadUrlProvider(Protocol):
    """
    Platform API client that hands out single-use upload URLs.
    
    ``get_upload_url`` may be a plain method or a coroutine function.
    """
    
    def get_upload_url(self, kind: str) -> Mapping[str, Any]:
        """
        Request an upload destination.
        
        Args:
            kind: Media kind ('image', 'video', 'file' or 'audio')
            
        Returns:
            Mapping containing the upload URL under ``'url'``
        """
        ...


class ReadableStream(Protocol):
    """Binary stream consumed by the chunk uploader."""
    
    def read(self, size: int = -1) -> Any:
        """Read up to ``size`` bytes (may return an awaitable)."""
        ...


class CancellationToken(Protocol):
    """Shared abort state for every request of a single upload."""
    
    @property
    def cancelled(self) -> bool: ...
    
    def raise_if_cancelled(self) -> None: ...
    
    async def guard(self, coro: Any, what: Optional[str] = None) -> Any: ...
