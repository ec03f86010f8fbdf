"""
Upload coordinator.

Negotiates an upload URL, opens the deadline boundary and dispatches the
normalized file to the matching transfer service.
"""
from typing import Any, Mapping, Optional
import inspect
import time

import aiohttp

from .models import UploadType, UploadFile, FileStream, FileBuffer, UploadResult
from .protocols import UploadUrlProvider
from .services import ChunkUploader, BufferUploader
from .session import UploadSession
from ..api.config import UploadConfig
from ..exceptions import TransferError
from ..logging import get_logger

logger = get_logger('maxupload.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates a single-file upload.
    
    Uses dependency injection for the platform client and HTTP session,
    making it testable (mock dependencies) and reusable across uploads.
    Each call to ``upload`` gets its own URL, deadline and cancellation state.
    """
    
    def __init__(
        self,
        api_client: UploadUrlProvider,
        config: Optional[UploadConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize upload coordinator.
        
        Args:
            api_client: Platform client exposing ``get_upload_url``
            config: Upload configuration
            session: Optional shared HTTP session; a private one is created
                per upload otherwise
        """
        self._api = api_client
        self._config = config or UploadConfig.default()
        self._session = session
    
    @property
    def config(self) -> UploadConfig:
        """Returns the upload configuration."""
        return self._config
    
    async def upload(
        self,
        kind: UploadType,
        file: UploadFile,
        timeout: Optional[float] = None
    ) -> UploadResult:
        """
        Upload a normalized file.
        
        Args:
            kind: Media kind the upload URL is requested for
            file: FileStream or FileBuffer
            timeout: Deadline in seconds (defaults to config.timeout)
            
        Returns:
            Payload returned by the upload server
            
        Raises:
            UploadError: If the server rejects the transfer
            TransferError: On network, stream or timeout failures
        """
        deadline = self._config.resolve_timeout(timeout)
        
        try:
            kind = UploadType(kind)
            upload_url = await self._get_upload_url(kind)
            logger.info(f"Starting {kind.value} upload: {file.file_name} (timeout {deadline}s)")
            upload_start = time.time()
            
            async with UploadSession(upload_url, deadline) as session:
                result = await self._transfer(file, session)
            
            logger.info(f"Upload of {file.file_name} finished in {time.time() - upload_start:.2f}s")
            return result
        finally:
            if isinstance(file, FileStream) and file.owns_stream:
                await self._close_stream(file)
    
    async def _transfer(self, file: UploadFile, upload_session: UploadSession) -> UploadResult:
        """Dispatch to the transfer service matching the file variant."""
        http = self._session
        owns_http = http is None
        if owns_http:
            http = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
        
        try:
            if isinstance(file, FileStream):
                uploader = ChunkUploader(
                    http,
                    upload_session.upload_url,
                    upload_session,
                    read_chunk_size=self._config.read_chunk_size
                )
                return await uploader.upload(file)
            if isinstance(file, FileBuffer):
                uploader = BufferUploader(
                    http,
                    upload_session.upload_url,
                    upload_session,
                    strict_status=self._config.strict_buffer_status
                )
                return await uploader.upload(file)
            raise TypeError(f"Unsupported upload file: {type(file).__name__}")
        finally:
            if owns_http:
                await http.close()
    
    async def _get_upload_url(self, kind: UploadType) -> str:
        """Get upload URL from the platform client."""
        # Support both sync and async clients
        if inspect.iscoroutinefunction(self._api.get_upload_url):
            result = await self._api.get_upload_url(kind.value)
        else:
            result = self._api.get_upload_url(kind.value)
            if inspect.isawaitable(result):
                result = await result
        
        url = result.get('url') if isinstance(result, Mapping) else getattr(result, 'url', None)
        if not url:
            raise TransferError(f"Could not obtain upload URL for {kind.value}")
        
        logger.debug(f"Upload URL received for {kind.value}")
        return url
    
    @staticmethod
    async def _close_stream(file: FileStream) -> None:
        close: Any = getattr(file.stream, 'close', None)
        if close is None:
            return
        closing = close()
        if inspect.isawaitable(closing):
            await closing
        logger.debug(f"Stream for {file.file_name} closed")
