"""
Shared wire protocol for the screen-share signaling system.
"""
