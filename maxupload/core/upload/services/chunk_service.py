"""
Chunk upload service.

Streams a file to the upload server one chunk at a time.
"""
from typing import Any, Optional, Tuple
import asyncio
import inspect
import json
import time

import aiohttp

from ..models import FileStream, ContentRange, UploadResult
from ..protocols import CancellationToken
from ...api.config import DEFAULT_READ_CHUNK_SIZE
from ...exceptions import UploadError, TransferError, IncompleteUploadError
from ...logging import get_logger


async def read_body(response: aiohttp.ClientResponse) -> Tuple[Any, bool]:
    """
    Read a response body, preferring JSON.
    
    Returns:
        Tuple of (body, parsed) where ``parsed`` is True if the body was JSON
    """
    text = await response.text()
    try:
        return json.loads(text), True
    except ValueError:
        return text, False


class ChunkUploader:
    """
    Uploads a FileStream as a sequence of Content-Range requests.
    
    Chunks are read and sent strictly one after another: the next chunk is
    not read from the stream until the previous request has settled, so the
    server always receives contiguous, increasing byte ranges.
    
    Responsibilities:
    - Pull chunks from the stream
    - Track the byte offset and build Content-Range headers
    - Keep the first JSON payload returned by the server
    """
    
    def __init__(
        self,
        session: aiohttp.ClientSession,
        upload_url: str,
        cancel_token: CancellationToken,
        read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    ):
        """
        Initialize chunk uploader.
        
        Args:
            session: HTTP session used for every chunk
            upload_url: Upload destination negotiated for this upload
            cancel_token: Shared cancellation state of the upload
            read_chunk_size: Bytes requested from the stream per read
        """
        self._session = session
        self._upload_url = upload_url
        self._cancel = cancel_token
        self._read_chunk_size = read_chunk_size
        self._offset = -1
        self._result: Optional[UploadResult] = None
        self._logger = get_logger('maxupload.upload.chunk')
    
    @property
    def upload_url(self) -> str:
        """Returns the upload URL."""
        return self._upload_url
    
    @property
    def offset(self) -> int:
        """Index of the last byte sent, -1 before the first chunk."""
        return self._offset
    
    async def upload(self, file: FileStream) -> UploadResult:
        """
        Upload the whole stream.
        
        Args:
            file: Stream-backed upload file
            
        Returns:
            First JSON payload returned by the server
            
        Raises:
            UploadError: If a chunk is rejected with status >= 400
            TransferError: On stream, network or abort failures
            IncompleteUploadError: If the stream ended without a payload
        """
        chunk_index = 0
        upload_start = time.time()
        
        while True:
            self._cancel.raise_if_cancelled()
            chunk = await self._read_chunk(file)
            if not chunk:
                break
            
            content_range = ContentRange.after(self._offset, len(chunk), file.content_length)
            await self._cancel.guard(
                self._send_chunk(file.file_name, chunk_index, chunk, content_range),
                what=f"chunk {chunk_index}"
            )
            self._offset += len(chunk)
            chunk_index += 1
        
        if self._result is None:
            self._logger.error(
                f"Stream for {file.file_name} ended after {chunk_index} chunks without a result"
            )
            raise IncompleteUploadError(f"Failed to upload {file.file_name}")
        
        upload_time = time.time() - upload_start
        self._logger.debug(
            f"Uploaded {self._offset + 1} bytes in {chunk_index} chunks ({upload_time:.2f}s)"
        )
        return self._result
    
    async def _read_chunk(self, file: FileStream) -> bytes:
        """Pull the next chunk; synchronous reads run in the default executor."""
        read = file.stream.read
        try:
            if inspect.iscoroutinefunction(read):
                data = await read(self._read_chunk_size)
            else:
                loop = asyncio.get_running_loop()
                data = await loop.run_in_executor(None, read, self._read_chunk_size)
        except (OSError, ValueError) as e:
            self._logger.error(f"Failed to read {file.file_name} at byte {self._offset + 1}: {e}")
            raise TransferError(f"Failed to read {file.file_name}: {e}") from e
        return data
    
    async def _send_chunk(
        self,
        file_name: str,
        chunk_index: int,
        chunk: bytes,
        content_range: ContentRange
    ) -> None:
        """
        Send one chunk and process the response.
        
        Raises:
            UploadError: If server responds with status >= 400
            TransferError: If a network error occurs
        """
        headers = {
            'Content-Disposition': f'attachment; filename="{file_name}"',
            'Content-Range': content_range.header,
        }
        chunk_size_kb = len(chunk) / 1024
        
        upload_start = time.time()
        self._logger.debug(f"Uploading chunk {chunk_index} {content_range.header} ({chunk_size_kb:.1f} KB)")
        
        try:
            async with self._session.post(self._upload_url, data=chunk, headers=headers) as response:
                body, parsed = await read_body(response)
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            upload_time = time.time() - upload_start
            self._logger.error(f"Chunk {chunk_index} upload failed after {upload_time:.2f}s: {e}")
            raise TransferError(f"Chunk {chunk_index} upload failed: {e}") from e
        
        if status >= 400:
            self._logger.error(f"Server returned HTTP {status} for chunk {chunk_index}")
            raise UploadError(status, body)
        
        if self._result is None and parsed:
            self._result = body
            self._logger.debug(f"Upload result received from chunk {chunk_index}")
        
        upload_time = time.time() - upload_start
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(f"Chunk {chunk_index} uploaded in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)")
