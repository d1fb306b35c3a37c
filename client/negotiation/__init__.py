"""
Negotiation module for client-side offer/answer sequencing.

Handles:
- Remote description tracking per remote connection
- Buffering of ICE candidates that arrive early
"""

from .pair_state import NegotiationPairState, NegotiationTracker
