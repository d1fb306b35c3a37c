"""
Signaling module for server-side negotiation coordination.

Handles:
- Offer/answer/ICE candidate relay
- Session lifecycle (start, join, stop, disconnect)
"""
