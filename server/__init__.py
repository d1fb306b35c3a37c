"""
Server package for the screen-share signaling system.

This package contains all server-side functionality including:
- Connection tracking
- Session code issuance and peer topology
- Offer/answer/ICE candidate relay
- Configuration and utilities
"""
