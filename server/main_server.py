#!/usr/bin/env python3
"""
Screen-Share Signaling Server - WebSocket transport

Accepts WebSocket connections, decodes JSON frames and feeds them to the
lifecycle coordinator. Closing a connection, cleanly or not, triggers the
coordinator's cleanup before the handler returns.
"""

import asyncio
from typing import Optional

from websockets.asyncio.server import serve
from websockets.exceptions import ConnectionClosed

from common.errors import ProtocolError
from common.protocol_definitions import parse_message, create_error_message
from server.connections.connection_registry import ConnectionRegistry
from server.session.session_registry import SessionRegistry
from server.signaling.lifecycle_coordinator import LifecycleCoordinator
from server.utils.config import ServerConfig
from server.utils.logger import logger


class SignalingServer:
    """Main server class that wires transport, registries and coordinator."""

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        logger.set_logs_dir(self.config.logs_dir)
        self.connections = ConnectionRegistry(self.config.max_outbound_queue)
        self.coordinator = LifecycleCoordinator(
            self.connections,
            sessions=SessionRegistry(self.config.code_length, self.config.max_code_attempts),
            notify_peers_on_host_disconnect=self.config.notify_peers_on_host_disconnect
        )
        self.server = None

    async def handle_client(self, websocket):
        """Handle individual client connection."""
        connection_id = await self.connections.register(websocket)
        logger.log_connection(websocket.remote_address, connection_id)

        try:
            async for data in websocket:
                await self.handle_frame(connection_id, data)
        except ConnectionClosed as e:
            logger.debug(f"Connection {connection_id} closed: {e}")
        except asyncio.CancelledError:
            logger.info(f"Connection cancelled for {connection_id}")
            raise
        finally:
            await self.connections.unregister(connection_id)

    async def handle_frame(self, connection_id: str, data):
        """Decode and dispatch one frame; failures only affect this connection."""
        # Validate message size BEFORE parsing
        if len(data) > self.config.max_message_size:
            logger.warning(f"Message too large from {connection_id}: {len(data)} bytes")
            await self.connections.send(connection_id, create_error_message("Message too large"))
            return

        try:
            message = parse_message(data)
        except ProtocolError as e:
            logger.error(f"Bad frame from {connection_id}: {e}")
            await self.connections.send(connection_id, create_error_message(str(e)))
            return

        logger.debug(f"Received from {connection_id}: {message['type']}")

        try:
            await self.coordinator.handle_message(connection_id, message)
        except Exception as e:
            logger.error(f"Error processing {message['type']} from {connection_id}: {e}")

    async def start(self):
        """Start listening. Returns once the socket is bound."""
        self.server = await serve(
            self.handle_client,
            self.config.host,
            self.config.port
        )

        addr = ', '.join(str(sock.getsockname()) for sock in self.server.sockets)
        logger.info(f"Signaling server listening on {addr}")
        return self.server

    def bound_port(self) -> int:
        """Actual port, useful when configured with port 0."""
        return next(iter(self.server.sockets)).getsockname()[1]

    async def serve_forever(self):
        """Start the server and run until cancelled."""
        await self.start()
        async with self.server:
            await self.server.serve_forever()

    async def stop(self):
        """Close the listening socket and all connections."""
        if self.server is not None:
            self.server.close()
            await self.server.wait_closed()
            self.server = None
