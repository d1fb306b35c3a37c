"""
Client package for the screen-share signaling system.

This package contains all client-side functionality including:
- Signaling connection and message dispatch
- ICE candidate sequencing per remote connection
- Configuration and utilities
"""
