"""
Error types shared by the signaling server and client.
"""


class SignalingError(Exception):
    """Base class for signaling failures that stay local to one connection."""


class ProtocolError(SignalingError):
    """Inbound frame is not a valid signaling message."""


class MalformedRelayRequest(ProtocolError):
    """Negotiation message lacks a usable target connection id."""


class CodeGenerationError(SignalingError):
    """No free session code was found within the retry budget.

    Retryable: the requester may simply ask again.
    """
