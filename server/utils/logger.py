"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path

from common.constants import LOG_DIR, SESSION_LOG_FILE


class ServerLogger:
    """Server logging class."""
    
    def __init__(self, logs_dir: str = LOG_DIR, log_level: int = logging.INFO):
        self.logger = logging.getLogger('signaling_server')
        self.logger.setLevel(log_level)
        
        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        
        # Create console handler
        self.console_handler = logging.StreamHandler()
        self.console_handler.setLevel(log_level)
        
        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.console_handler.setFormatter(formatter)
        
        # Add handler to logger
        self.logger.addHandler(self.console_handler)
        
        self.set_logs_dir(logs_dir)
    
    def set_logs_dir(self, logs_dir: str):
        """Point the session audit log at a directory (created lazily on first write)."""
        self.logs_dir = Path(logs_dir)
        self.session_log_path = self.logs_dir / SESSION_LOG_FILE
    
    def set_level(self, log_level: int):
        """Change the console log level."""
        self.logger.setLevel(log_level)
        self.console_handler.setLevel(log_level)
    
    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)
    
    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)
    
    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)
    
    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)
    
    def log_connection(self, addr, connection_id: str):
        """Log client connection."""
        self.info(f"New connection from {addr}, assigned id={connection_id}")
    
    def log_disconnect(self, connection_id: str):
        """Log client disconnect."""
        self.info(f"Connection {connection_id} disconnected")
    
    def log_session_start(self, host: str, code: str):
        """Log a new sharing session."""
        self.info(f"SCREEN SHARE STARTED: host={host} code={code}")
        self._write_to_file(f"{datetime.now().isoformat()} | START | host={host} | code={code}")
    
    def log_join(self, peer: str, host: str, code: str):
        """Log a successful join."""
        self.info(f"JOIN: peer={peer} joined host={host} via code={code}")
        self._write_to_file(f"{datetime.now().isoformat()} | JOIN | host={host} | peer={peer} | code={code}")
    
    def log_join_failure(self, peer: str, code):
        """Log a join attempt with an unknown code."""
        self.info(f"JOIN FAILED: peer={peer} used unknown code={code!r}")
    
    def log_relay(self, kind: str, source: str, target: str):
        """Log a relayed negotiation message."""
        self.debug(f"RELAY {kind}: {source} -> {target}")
    
    def log_forbidden_relay(self, kind: str, source: str, target):
        """Log a relay dropped by the authorization check."""
        self.warning(f"FORBIDDEN {kind} relay from {source} to {target!r}: not in the same session")
    
    def log_session_end(self, host: str, codes, peers_count: int, reason: str):
        """Log session teardown."""
        self.info(f"SCREEN SHARE ENDED ({reason}): host={host} codes={sorted(codes)} peers={peers_count}")
        self._write_to_file(f"{datetime.now().isoformat()} | END | host={host} | reason={reason} | codes={','.join(sorted(codes))} | peers={peers_count}")
    
    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")
    
    def _write_to_file(self, content: str):
        """Write content to the session audit log."""
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            with open(self.session_log_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except OSError as e:
            self.error(f"Failed to write to log file {self.session_log_path}: {e}")


# Global logger instance
logger = ServerLogger()
