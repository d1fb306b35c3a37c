"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import DEFAULT_HOST, DEFAULT_PORT, MAX_RETRY_ATTEMPTS, RECONNECT_DELAY_BASE


class ClientConfig:
    """Client configuration class."""
    
    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, secure: bool = False):
        self.host = host
        self.port = port
        self.secure = secure
        
        # Connection settings
        self.retry_attempts = MAX_RETRY_ATTEMPTS
        self.retry_delay_base = RECONNECT_DELAY_BASE
    
    @property
    def url(self) -> str:
        """WebSocket URL of the signaling server."""
        scheme = 'wss' if self.secure else 'ws'
        return f"{scheme}://{self.host}:{self.port}"
    
