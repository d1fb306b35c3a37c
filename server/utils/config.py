"""
Server configuration module.

This module handles server-side configuration settings.
"""

from common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, LOG_DIR, MAX_MESSAGE_SIZE, MAX_OUTBOUND_QUEUE,
    SESSION_CODE_LENGTH, MAX_CODE_ATTEMPTS
)


class ServerConfig:
    """Server configuration class."""
    
    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT, logs_dir: str = LOG_DIR):
        self.host = host
        self.port = port
        
        # Logging configuration
        self.logs_dir = logs_dir
        
        # Transport settings
        self.max_message_size = MAX_MESSAGE_SIZE
        self.max_outbound_queue = MAX_OUTBOUND_QUEUE
        
        # Session code settings
        self.code_length = SESSION_CODE_LENGTH
        self.max_code_attempts = MAX_CODE_ATTEMPTS
        
        # Send screenShareEnded to peers when the host's connection drops,
        # not only on an explicit stop.
        self.notify_peers_on_host_disconnect = True
