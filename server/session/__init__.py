"""
Session module for server-side share bookkeeping.

Handles:
- Session code issuance and lookup
- Host to peer topology
"""
