"""
Buffer upload service.

Sends an in-memory file as a single multipart request.
"""
import asyncio
import time

import aiohttp

from ..models import FileBuffer, UploadResult
from ..protocols import CancellationToken
from ...exceptions import UploadError, TransferError
from ...logging import get_logger


class BufferUploader:
    """
    Uploads a FileBuffer in one multipart POST.
    
    The buffer goes into a single form field named ``data``. No range
    headers, no chunking.
    """
    
    FIELD_NAME = 'data'
    
    def __init__(
        self,
        session: aiohttp.ClientSession,
        upload_url: str,
        cancel_token: CancellationToken,
        strict_status: bool = False
    ):
        """
        Initialize buffer uploader.
        
        Args:
            session: HTTP session
            upload_url: Upload destination negotiated for this upload
            cancel_token: Shared cancellation state of the upload
            strict_status: Raise UploadError for status >= 400 instead of
                returning the parsed error body
        """
        self._session = session
        self._upload_url = upload_url
        self._cancel = cancel_token
        self._strict_status = strict_status
        self._logger = get_logger('maxupload.upload.buffer')
    
    def build_form(self, file: FileBuffer) -> aiohttp.FormData:
        """Package the buffer as multipart form data."""
        form = aiohttp.FormData()
        form.add_field(
            self.FIELD_NAME,
            file.buffer,
            filename=file.file_name,
            content_type='application/octet-stream'
        )
        return form
    
    async def upload(self, file: FileBuffer) -> UploadResult:
        """
        Upload the buffer.
        
        Args:
            file: Buffer-backed upload file
            
        Returns:
            Parsed JSON response body
            
        Raises:
            TransferError: On network, parse or abort failures
            UploadError: Only with ``strict_status`` and status >= 400
        """
        return await self._cancel.guard(self._post(file), what="buffer upload")
    
    async def _post(self, file: FileBuffer) -> UploadResult:
        size_kb = file.size / 1024
        upload_start = time.time()
        self._logger.debug(f"Uploading {file.file_name} as multipart ({size_kb:.1f} KB)")
        
        try:
            async with self._session.post(self._upload_url, data=self.build_form(file)) as response:
                status = response.status
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Buffer upload of {file.file_name} failed: {e}")
            raise TransferError(f"Buffer upload failed: {e}") from e
        except ValueError as e:
            self._logger.error(f"Unparseable response for {file.file_name} (HTTP {status})")
            raise TransferError(f"Invalid JSON response from upload server: {e}") from e
        
        if self._strict_status and status >= 400:
            raise UploadError(status, body)
        
        upload_time = time.time() - upload_start
        self._logger.debug(f"Buffer upload finished in {upload_time:.2f}s (HTTP {status})")
        return body
