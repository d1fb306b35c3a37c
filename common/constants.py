"""
Shared constants for the screen-share signaling system.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 9000

# Limits
MAX_MESSAGE_SIZE = 1024 * 1024  # 1MB per signaling frame
MAX_OUTBOUND_QUEUE = 256  # pending messages per connection before drops

# Session Codes
SESSION_CODE_LENGTH = 5
MAX_CODE_ATTEMPTS = 32

# Client Reconnection
MAX_RETRY_ATTEMPTS = 3
RECONNECT_DELAY_BASE = 1.0  # seconds, doubled per attempt

# Logging
LOG_DIR = 'logs'
SESSION_LOG_FILE = 'signaling_sessions.log'

# Message Types
class MessageTypes:
    # Client to Server
    START_SCREEN_SHARE = 'startScreenShare'
    JOIN_SESSION = 'joinSession'
    NEW_OFFER = 'newOffer'
    NEW_ANSWER = 'newAnswer'
    NEW_ICE_CANDIDATE = 'newIceCandidate'
    SCREEN_SHARE_STOPPED = 'screenShareStopped'

    # Server to Client
    SESSION_CODE = 'sessionCode'
    JOIN_SUCCESS = 'joinSuccess'
    JOIN_FAILURE = 'joinFailure'
    GET_OFFER = 'getOffer'
    ON_OFFER = 'onOffer'
    ON_ANSWER = 'onAnswer'
    ON_ICE_CANDIDATE = 'onIceCandidate'
    SCREEN_SHARE_ENDED = 'screenShareEnded'
    PEER_LEFT = 'peerLeft'
    ERROR = 'error'
