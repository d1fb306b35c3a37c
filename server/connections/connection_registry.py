"""
Connection registry module.

Tracks live transport connections by opaque id and notifies subscribers when
one goes away. Outbound messages go through a per-connection queue drained by
its own writer task, so a connection that stops reading never holds up the
handler that addressed it.
"""

import asyncio
import uuid
from typing import Awaitable, Callable, Dict, List, Optional

from websockets.exceptions import ConnectionClosed

from common.constants import MAX_OUTBOUND_QUEUE
from common.protocol_definitions import encode_message
from server.utils.logger import logger


DisconnectListener = Callable[[str], Awaitable[None]]


class ConnectionRegistry:
    """Live connections keyed by connection id."""

    def __init__(self, max_queued: int = MAX_OUTBOUND_QUEUE):
        self.connections: Dict[str, object] = {}  # connection id -> websocket
        self.outboxes: Dict[str, asyncio.Queue] = {}  # connection id -> pending messages
        self.writers: Dict[str, asyncio.Task] = {}  # connection id -> writer task
        self.max_queued = max_queued
        self.listeners: List[DisconnectListener] = []
        self.lock = asyncio.Lock()  # Protect shared state

    def add_disconnect_listener(self, callback: DisconnectListener):
        """Subscribe to disconnect notifications."""
        self.listeners.append(callback)

    async def register(self, websocket, connection_id: Optional[str] = None) -> str:
        """Track a new connection, start its writer and return its id."""
        connection_id = connection_id or uuid.uuid4().hex
        outbox = asyncio.Queue(maxsize=self.max_queued)
        async with self.lock:
            self.connections[connection_id] = websocket
            self.outboxes[connection_id] = outbox
            self.writers[connection_id] = asyncio.create_task(
                self._drain_outbox(connection_id, websocket, outbox))
        return connection_id

    async def unregister(self, connection_id: str):
        """Forget a connection and run every disconnect listener for it.

        Listeners complete before this returns, so no later message can be
        routed to state that still references the dead connection. Messages
        still queued for the connection are discarded.
        """
        async with self.lock:
            if self.connections.pop(connection_id, None) is None:
                return
            self.outboxes.pop(connection_id, None)
            writer = self.writers.pop(connection_id, None)

        if writer is not None:
            writer.cancel()
            try:
                await writer
            except asyncio.CancelledError:
                pass

        logger.log_disconnect(connection_id)

        for callback in self.listeners:
            try:
                await callback(connection_id)
            except Exception as e:
                logger.log_error(f"disconnect listener for {connection_id}", e)

    async def send(self, connection_id: str, message: dict) -> bool:
        """Queue a JSON message for a specific connection.

        Never waits on the socket. Returns False when the connection is unknown
        or its queue is full; the message is dropped in both cases.
        """
        async with self.lock:
            outbox = self.outboxes.get(connection_id)
        if outbox is None:
            logger.debug(f"Dropping {message.get('type')} for unknown connection {connection_id}")
            return False

        try:
            outbox.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(f"Outbound queue full for {connection_id}; dropping {message.get('type')}")
            return False
        return True

    async def flush(self, *connection_ids: str, timeout: Optional[float] = None):
        """Wait until queued messages have been handed to their sockets.

        Defaults to every connection; a connection that stops reading will
        keep this waiting, so name the ones you care about.
        """
        async with self.lock:
            ids = connection_ids or tuple(self.outboxes)
            outboxes = [self.outboxes[cid] for cid in ids if cid in self.outboxes]
        await asyncio.wait_for(asyncio.gather(*(outbox.join() for outbox in outboxes)), timeout)

    async def _drain_outbox(self, connection_id: str, websocket, outbox: asyncio.Queue):
        """Writer task: deliver one connection's messages in order."""
        while True:
            message = await outbox.get()
            try:
                await websocket.send(encode_message(message))
            except ConnectionClosed as e:
                logger.debug(f"Connection {connection_id} closed before {message.get('type')} was sent: {e}")
            except Exception as e:
                logger.error(f"Failed to send to {connection_id}: {e}")
            finally:
                outbox.task_done()

    def is_connected(self, connection_id: str) -> bool:
        """Check whether a connection id is live."""
        return connection_id in self.connections

    def count(self) -> int:
        """Get the number of live connections."""
        return len(self.connections)
