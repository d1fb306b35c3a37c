"""
Protocol definitions for the screen-share signaling system.

This module defines the message structures and data formats used in communication
between client and server components. Every frame is a JSON object carrying a
``type`` field; negotiation payloads (offers, answers, ICE candidates) are opaque
values that are forwarded untouched.
"""

import json
from typing import Dict, Any, Optional
from dataclasses import dataclass

from common.constants import MessageTypes
from common.errors import ProtocolError


# Opaque negotiation blob produced and consumed by the endpoints' media stack.
NegotiationPayload = Any


@dataclass
class Session:
    """Active sharing session structure."""
    code: str
    host_connection: str


@dataclass
class RelayRequest:
    """Parsed offer/answer/candidate relay request."""
    kind: str
    target_connection: str
    payload: NegotiationPayload


def parse_message(raw) -> Dict[str, Any]:
    """Decode an inbound frame, ensuring it is an object with a string type."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Frame is not valid UTF-8: {e}") from e

    try:
        message = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Malformed JSON: {e}") from e

    if not isinstance(message, dict):
        raise ProtocolError("Message must be a JSON object")

    msg_type = message.get('type')
    if not isinstance(msg_type, str) or len(msg_type) == 0:
        raise ProtocolError("Message has no valid type")

    return message


def encode_message(message: Dict[str, Any]) -> str:
    """Encode an outbound message as a JSON text frame."""
    return json.dumps(message)


# Client to server

def create_start_screen_share_message() -> Dict[str, Any]:
    """Create a start screen share message."""
    return {
        "type": MessageTypes.START_SCREEN_SHARE
    }


def create_join_session_message(code: str) -> Dict[str, Any]:
    """Create a join session message."""
    return {
        "type": MessageTypes.JOIN_SESSION,
        "code": code
    }


def create_new_offer_message(offer: NegotiationPayload, socket_id: str) -> Dict[str, Any]:
    """Create an offer relay request addressed to socket_id."""
    return {
        "type": MessageTypes.NEW_OFFER,
        "offer": offer,
        "socketId": socket_id
    }


def create_new_answer_message(answer: NegotiationPayload, socket_id: str) -> Dict[str, Any]:
    """Create an answer relay request addressed to socket_id."""
    return {
        "type": MessageTypes.NEW_ANSWER,
        "answer": answer,
        "socketId": socket_id
    }


def create_new_ice_candidate_message(candidate: NegotiationPayload, socket_id: str) -> Dict[str, Any]:
    """Create an ICE candidate relay request addressed to socket_id."""
    return {
        "type": MessageTypes.NEW_ICE_CANDIDATE,
        "candidate": candidate,
        "socketId": socket_id
    }


def create_screen_share_stopped_message() -> Dict[str, Any]:
    """Create a screen share stopped message."""
    return {
        "type": MessageTypes.SCREEN_SHARE_STOPPED
    }


# Server to client

def create_session_code_message(code: str) -> Dict[str, Any]:
    """Create a session code message."""
    return {
        "type": MessageTypes.SESSION_CODE,
        "code": code
    }


def create_join_success_message() -> Dict[str, Any]:
    """Create a join success message."""
    return {
        "type": MessageTypes.JOIN_SUCCESS
    }


def create_join_failure_message() -> Dict[str, Any]:
    """Create a join failure message."""
    return {
        "type": MessageTypes.JOIN_FAILURE
    }


def create_get_offer_message(new_client: str) -> Dict[str, Any]:
    """Ask a host to start negotiating with a newly joined peer."""
    return {
        "type": MessageTypes.GET_OFFER,
        "newClient": new_client
    }


def create_relayed_message(message_type: str, field: str, payload: NegotiationPayload,
                           source_connection: str) -> Dict[str, Any]:
    """Create an onOffer/onAnswer/onIceCandidate delivery.

    ``socketId`` names the sender so the receiver knows whom to answer.
    """
    return {
        "type": message_type,
        field: payload,
        "socketId": source_connection
    }


def create_screen_share_ended_message() -> Dict[str, Any]:
    """Create a screen share ended message."""
    return {
        "type": MessageTypes.SCREEN_SHARE_ENDED
    }


def create_peer_left_message(socket_id: str) -> Dict[str, Any]:
    """Create a peer left message for a host."""
    return {
        "type": MessageTypes.PEER_LEFT,
        "socketId": socket_id
    }


def create_error_message(message: str, request_type: Optional[str] = None) -> Dict[str, Any]:
    """Create an error message."""
    error = {
        "type": MessageTypes.ERROR,
        "message": message
    }
    if request_type:
        error["request"] = request_type
    return error
