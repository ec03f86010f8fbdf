"""
Upload facade.

Provides per-media-kind entry points for uploads.
Follows Facade Pattern - hides normalization, session and transfer details.
"""
from typing import Any, Optional
import logging

import aiohttp

from .coordinator import UploadCoordinator
from .models import UploadType, UploadResult, as_source
from .protocols import UploadUrlProvider
from .services import SourceNormalizer
from ..api.config import UploadConfig
from ..logging import set_level


class UploadFacade:
    """
    Simplified interface for media uploads.
    
    Example:
        >>> from maxupload import UploadFacade
        >>> uploads = UploadFacade(api)
        >>> video = await uploads.video("clip.mp4")
        >>> print(video["token"])
    """
    
    def __init__(
        self,
        api_client: UploadUrlProvider,
        config: Optional[UploadConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize upload facade.
        
        Args:
            api_client: Platform client exposing ``get_upload_url``
            config: Optional upload configuration
            session: Optional shared HTTP session
        """
        self._config = config or UploadConfig.default()
        self._logger = logging.getLogger('maxupload.upload')
        if not logging.getLogger().handlers:
            set_level(self._config.log_level)
        
        self._normalizer = SourceNormalizer()
        self._coordinator = UploadCoordinator(api_client, self._config, session)
    
    async def image(
        self,
        source: Any = None,
        *,
        url: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> UploadResult:
        """
        Upload an image, or pass a remote image URL through.
        
        Args:
            source: Path, bytes, open stream or FileSource variant
            url: Remote image URL; returned as ``{'url': url}`` without upload
            timeout: Deadline in seconds
            
        Returns:
            ``{'photos': {...}}`` from the server, or ``{'url': url}``
        """
        if (source is None) == (url is None):
            raise ValueError("Provide exactly one of source or url")
        if url is not None:
            return {'url': url}
        return await self._upload(UploadType.IMAGE, source, timeout)
    
    async def video(self, source: Any, *, timeout: Optional[float] = None) -> UploadResult:
        """Upload a video. Returns ``{'id': ..., 'token': ...}``."""
        return await self._upload(UploadType.VIDEO, source, timeout)
    
    async def file(self, source: Any, *, timeout: Optional[float] = None) -> UploadResult:
        """Upload a generic file. Returns ``{'id': ..., 'token': ...}``."""
        return await self._upload(UploadType.FILE, source, timeout)
    
    async def audio(self, source: Any, *, timeout: Optional[float] = None) -> UploadResult:
        """Upload an audio file. Returns ``{'id': ..., 'token': ...}``."""
        return await self._upload(UploadType.AUDIO, source, timeout)
    
    async def _upload(self, kind: UploadType, source: Any, timeout: Optional[float]) -> UploadResult:
        upload_file = await self._normalizer.normalize(as_source(source))
        return await self._coordinator.upload(kind, upload_file, timeout)
