"""
Lifecycle coordinator module.

Entry point for every inbound signaling message. Drives the per-host
Idle -> Sharing -> Ended lifecycle across the session registry and peer
topology, and hands negotiation messages to the relay once the sender and
target are known to share a session.
"""

from typing import Optional

from common.constants import MessageTypes
from common.errors import SignalingError
from common.protocol_definitions import (
    create_session_code_message, create_join_success_message, create_join_failure_message,
    create_get_offer_message, create_screen_share_ended_message, create_peer_left_message,
    create_error_message
)
from server.connections.connection_registry import ConnectionRegistry
from server.session.peer_topology import PeerTopology
from server.session.session_registry import SessionRegistry
from server.signaling.negotiation_relay import NegotiationRelay
from server.utils.logger import logger


class LifecycleCoordinator:
    """Server-side signaling coordination."""

    def __init__(self, connections: ConnectionRegistry, sessions: Optional[SessionRegistry] = None,
                 topology: Optional[PeerTopology] = None, notify_peers_on_host_disconnect: bool = True):
        self.connections = connections
        self.sessions = sessions or SessionRegistry()
        self.topology = topology or PeerTopology()
        self.relay = NegotiationRelay(connections)
        self.notify_peers_on_host_disconnect = notify_peers_on_host_disconnect

        self.connections.add_disconnect_listener(self.handle_disconnect)

    async def handle_message(self, connection_id: str, message: dict):
        """Dispatch one decoded message from connection_id."""
        msg_type = message.get('type')

        try:
            if msg_type == MessageTypes.START_SCREEN_SHARE:
                await self.start_screen_share(connection_id)
            elif msg_type == MessageTypes.JOIN_SESSION:
                await self.join_session(connection_id, message.get('code'))
            elif self.relay.is_relay_type(msg_type):
                await self.relay_negotiation(connection_id, msg_type, message)
            elif msg_type == MessageTypes.SCREEN_SHARE_STOPPED:
                await self.stop_screen_share(connection_id)
            else:
                logger.warning(f"Unknown message type '{msg_type}' from {connection_id}")
                await self.connections.send(connection_id, create_error_message(
                    f"Unknown message type '{msg_type}'", msg_type))
        except SignalingError as e:
            logger.warning(f"Rejected {msg_type} from {connection_id}: {e}")
            await self.connections.send(connection_id, create_error_message(str(e), msg_type))

    async def start_screen_share(self, host: str) -> str:
        """Open a session for host and tell it the code."""
        code = await self.sessions.create_session(host)
        await self.topology.init_host(host)

        logger.log_session_start(host, code)
        await self.connections.send(host, create_session_code_message(code))
        return code

    async def join_session(self, peer: str, code) -> bool:
        """Attach peer to the session behind code and ask the host for an offer."""
        session = await self.sessions.get_session(code) if isinstance(code, str) else None

        # The host may disconnect between the lookup and the insert.
        if session is None or not await self.topology.add_peer(session.host_connection, peer):
            logger.log_join_failure(peer, code)
            await self.connections.send(peer, create_join_failure_message())
            return False

        logger.log_join(peer, session.host_connection, session.code)
        await self.connections.send(peer, create_join_success_message())
        await self.connections.send(session.host_connection, create_get_offer_message(peer))
        return True

    async def relay_negotiation(self, source: str, msg_type: str, message: dict) -> bool:
        """Forward an offer, answer or ICE candidate to a member of source's session."""
        request = self.relay.parse_request(msg_type, message)

        if not await self.topology.are_linked(source, request.target_connection):
            logger.log_forbidden_relay(request.kind, source, request.target_connection)
            return False

        return await self.relay.relay(request.kind, source, request.target_connection, request.payload)

    async def stop_screen_share(self, host: str):
        """Explicit stop from the host."""
        if not await self.topology.is_host(host) and not await self.sessions.codes_for(host):
            logger.warning(f"Stop requested by {host} without an active share")
            return
        await self.end_session(host, 'stopped')

    async def end_session(self, host: str, reason: str, notify_peers: bool = True):
        """Tear down everything host owns.

        Codes go first so nobody can join mid-teardown. Every peer present when
        the peer set is dropped gets exactly one screenShareEnded.
        """
        codes = await self.sessions.remove_all_for(host)
        peers = await self.topology.remove_host(host)

        logger.log_session_end(host, codes, len(peers), reason)

        if notify_peers:
            for peer in peers:
                await self.connections.send(peer, create_screen_share_ended_message())

    async def handle_disconnect(self, connection_id: str):
        """Clean up after a connection dropped, as host and as peer."""
        if await self.topology.is_host(connection_id) or await self.sessions.codes_for(connection_id):
            await self.end_session(connection_id, 'disconnected',
                                   notify_peers=self.notify_peers_on_host_disconnect)

        for host in await self.topology.remove_peer_everywhere(connection_id):
            logger.info(f"Peer {connection_id} left host {host}")
            await self.connections.send(host, create_peer_left_message(connection_id))
