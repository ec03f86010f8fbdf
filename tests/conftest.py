"""Pytest fixtures for maxupload tests."""
import asyncio
import io
import json
from typing import Any, List, Optional

import pytest
from unittest.mock import Mock


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""
    
    def __init__(self, status: int = 200, body: Any = None, text: Optional[str] = None):
        self.status = status
        if text is None:
            text = '' if body is None else json.dumps(body)
        self._text = text
    
    async def text(self) -> str:
        return self._text
    
    async def json(self, content_type: Optional[str] = 'application/json') -> Any:
        if not self._text.strip():
            return None
        return json.loads(self._text)


class FakeRequest:
    """Async context manager returned by FakeSession.post."""
    
    def __init__(self, response: Any, delay: float):
        self._response = response
        self._delay = delay
    
    async def __aenter__(self) -> FakeResponse:
        if self._delay:
            await asyncio.sleep(self._delay)
        if isinstance(self._response, Exception):
            raise self._response
        return self._response
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """
    Records POST requests and replays queued responses.
    
    The last queued response is reused once the queue runs out.
    """
    
    def __init__(self, responses: Optional[List[Any]] = None, delay: float = 0):
        self.responses = list(responses or [FakeResponse(200, {'token': 'tok'})])
        self.delay = delay
        self.requests: List[dict] = []
    
    def post(self, url, data=None, headers=None, **kwargs):
        self.requests.append({'url': url, 'data': data, 'headers': headers or {}})
        index = min(len(self.requests) - 1, len(self.responses) - 1)
        return FakeRequest(self.responses[index], self.delay)
    
    @property
    def ranges(self) -> List[str]:
        return [r['headers'].get('Content-Range') for r in self.requests]


class AsyncStream:
    """Async readable stream yielding predefined chunks."""
    
    def __init__(self, chunks: List[bytes], name: Any = None):
        self._chunks = list(chunks)
        self.name = name
        self.closed = False
        self.reads = 0
    
    async def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if not self._chunks:
            return b''
        return self._chunks.pop(0)
    
    async def close(self):
        self.closed = True


@pytest.fixture
def upload_url():
    """Returns a fake upload destination."""
    return 'https://upload.example.com/u/abc123'


@pytest.fixture
def api_client(upload_url):
    """Platform client returning a fixed upload URL."""
    client = Mock()
    client.get_upload_url = Mock(return_value={'url': upload_url})
    return client


@pytest.fixture
def temp_file(tmp_path):
    """Creates a 1500 byte file on disk."""
    path = tmp_path / 'clip.mp4'
    path.write_bytes(bytes(range(250)) * 6)
    return path


@pytest.fixture
def bytes_stream():
    """Returns a 1500 byte in-memory stream."""
    return io.BytesIO(b'a' * 1000 + b'b' * 500)


async def track_heartbeat(gaps: List[float], stop: asyncio.Event, interval: float = 0.01):
    """Record the delay between ticks of a concurrently running task."""
    loop = asyncio.get_running_loop()
    last = loop.time()
    while not stop.is_set():
        await asyncio.sleep(interval)
        now = loop.time()
        gaps.append(now - last)
        last = now
