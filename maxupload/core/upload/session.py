"""
Upload session.

Holds the negotiated upload URL together with the deadline timer and the
cancellation state shared by every request of one upload.
"""
import asyncio
from typing import Any, Awaitable, Optional, TypeVar

from ..exceptions import TransferError
from ..logging import get_logger

T = TypeVar('T')

logger = get_logger('maxupload.upload.session')


class UploadSession:
    """
    Deadline and cancellation boundary for a single upload.
    
    Once the deadline expires the session is cancelled: the request running
    under ``guard()`` is aborted and no further request is started.
    
    Example:
        >>> async with UploadSession(url, timeout=20.0) as session:
        ...     await session.guard(post_chunk())
    """
    
    def __init__(self, upload_url: str, timeout: float):
        """
        Initialize upload session.
        
        Args:
            upload_url: Single-use URL returned by the platform
            timeout: Deadline for the whole upload in seconds
        """
        self._upload_url = upload_url
        self._timeout = timeout
        self._cancelled = asyncio.Event()
        self._timer: Optional[asyncio.TimerHandle] = None
    
    @property
    def upload_url(self) -> str:
        """Returns the upload URL."""
        return self._upload_url
    
    @property
    def timeout(self) -> float:
        """Returns the deadline in seconds."""
        return self._timeout
    
    @property
    def cancelled(self) -> bool:
        """True once the deadline elapsed or cancel() was called."""
        return self._cancelled.is_set()
    
    @property
    def timer_active(self) -> bool:
        """True while the deadline timer is armed."""
        return self._timer is not None
    
    def start(self) -> 'UploadSession':
        """Arm the deadline timer."""
        if self._timer is None:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self._timeout, self._expire)
        return self
    
    def close(self) -> None:
        """Clear the deadline timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
    
    def cancel(self) -> None:
        """Raise the cancellation signal."""
        self._cancelled.set()
    
    def _expire(self) -> None:
        self._timer = None
        logger.warning(f"Upload deadline of {self._timeout}s exceeded, aborting")
        self.cancel()
    
    def raise_if_cancelled(self) -> None:
        """Raise TransferError if the session was cancelled."""
        if self.cancelled:
            raise TransferError(f"Upload aborted after {self._timeout}s timeout")
    
    async def guard(self, coro: Awaitable[T], what: Optional[str] = None) -> T:
        """
        Run ``coro`` unless the session gets cancelled first.
        
        Args:
            coro: Request coroutine
            what: Short description used in the abort message
            
        Returns:
            Result of ``coro``
            
        Raises:
            TransferError: If the session is or becomes cancelled
        """
        if self.cancelled:
            if asyncio.iscoroutine(coro):
                coro.close()
            self.raise_if_cancelled()
        
        task = asyncio.ensure_future(coro)
        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
        
        if task in done:
            return task.result()
        
        await asyncio.wait({task})
        cause = None if task.cancelled() else task.exception()
        target = f" during {what}" if what else ""
        raise TransferError(
            f"Upload aborted{target} after {self._timeout}s timeout"
        ) from cause
    
    async def __aenter__(self) -> 'UploadSession':
        return self.start()
    
    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
