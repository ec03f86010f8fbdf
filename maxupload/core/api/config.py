"""
Upload configuration module.

Provides configuration for the HTTP side of media uploads.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union
import ssl


DEFAULT_UPLOAD_TIMEOUT = 20.0  # seconds
DEFAULT_READ_CHUNK_SIZE = 64 * 1024


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.
    
    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True
    
    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration."""
        if not self.verify:
            return False  # aiohttp: disable verification
        
        context = ssl.create_default_context()
        
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        
        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )
        
        context.check_hostname = self.check_hostname
        
        return context


@dataclass
class UploadConfig:
    """
    Configuration for media uploads.
    
    Attributes:
        timeout: Deadline for a whole upload in seconds
        read_chunk_size: Bytes read from a stream per chunk request
        connect_timeout: TCP connect timeout in seconds
        user_agent: User-Agent header sent to the upload server
        strict_buffer_status: Raise UploadError for failing buffer uploads
            instead of returning the error body
        ssl: SSL settings
        extra_headers: Headers added to every request
        log_level: Level applied to package loggers when root is unconfigured
    """
    timeout: float = DEFAULT_UPLOAD_TIMEOUT
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    connect_timeout: float = 10.0
    user_agent: str = 'maxupload/1.0.0'
    strict_buffer_status: bool = False
    ssl: SSLConfig = field(default_factory=SSLConfig)
    extra_headers: Dict[str, str] = field(default_factory=dict)
    log_level: int = 30  # logging.WARNING
    
    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("Upload timeout must be positive")
        if self.read_chunk_size <= 0:
            raise ValueError("Read chunk size must be positive")
    
    @classmethod
    def default(cls) -> 'UploadConfig':
        """Create default configuration."""
        return cls()
    
    @classmethod
    def insecure(cls, **kwargs) -> 'UploadConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )
    
    def resolve_timeout(self, timeout: Optional[float] = None) -> float:
        """Return the per-call timeout, falling back to the configured one."""
        return timeout or self.timeout
    
    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': 10,
            'keepalive_timeout': 30,
            'ssl': self.ssl.create_ssl_context(),
        }
    
    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        import aiohttp
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }
        
        # The upload deadline is enforced by UploadSession, not by aiohttp.
        return {
            'headers': headers,
            'timeout': aiohttp.ClientTimeout(total=None, connect=self.connect_timeout),
        }
