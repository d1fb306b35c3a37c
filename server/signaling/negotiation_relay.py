"""
Negotiation relay module.

Forwards opaque offer, answer and ICE candidate payloads between two named
connections. The relay never inspects payloads and never touches topology;
authorization is the caller's job.
"""

from dataclasses import dataclass
from typing import Dict

from common.constants import MessageTypes
from common.errors import MalformedRelayRequest
from common.protocol_definitions import NegotiationPayload, RelayRequest, create_relayed_message
from server.utils.logger import logger


@dataclass(frozen=True)
class RelayKind:
    """Wire names for one kind of negotiation message."""
    name: str
    inbound: str
    outbound: str
    field: str


OFFER = RelayKind('offer', MessageTypes.NEW_OFFER, MessageTypes.ON_OFFER, 'offer')
ANSWER = RelayKind('answer', MessageTypes.NEW_ANSWER, MessageTypes.ON_ANSWER, 'answer')
CANDIDATE = RelayKind('candidate', MessageTypes.NEW_ICE_CANDIDATE, MessageTypes.ON_ICE_CANDIDATE, 'candidate')

RELAY_KINDS: Dict[str, RelayKind] = {kind.name: kind for kind in (OFFER, ANSWER, CANDIDATE)}
KIND_BY_INBOUND_TYPE: Dict[str, RelayKind] = {kind.inbound: kind for kind in (OFFER, ANSWER, CANDIDATE)}


class NegotiationRelay:
    """Stateless forwarder of negotiation payloads."""

    def __init__(self, connections):
        self.connections = connections

    @staticmethod
    def is_relay_type(message_type: str) -> bool:
        return message_type in KIND_BY_INBOUND_TYPE

    @staticmethod
    def parse_request(message_type: str, message: dict) -> RelayRequest:
        """Extract kind, target and payload from a newOffer/newAnswer/newIceCandidate message."""
        kind = KIND_BY_INBOUND_TYPE.get(message_type)
        if kind is None:
            raise MalformedRelayRequest(f"'{message_type}' is not a negotiation message")

        target = message.get('socketId')
        if not isinstance(target, str) or not target:
            raise MalformedRelayRequest(f"Missing socketId for {message_type}")

        return RelayRequest(kind.name, target, message.get(kind.field))

    async def relay(self, kind: str, from_connection: str, to_connection: str,
                    payload: NegotiationPayload) -> bool:
        """Deliver payload to to_connection as on<Kind>, tagged with the sender's id.

        Returns whether the transport accepted the message.
        """
        relay_kind = RELAY_KINDS[kind]
        message = create_relayed_message(relay_kind.outbound, relay_kind.field, payload, from_connection)
        delivered = await self.connections.send(to_connection, message)
        if delivered:
            logger.log_relay(kind, from_connection, to_connection)
        return delivered
