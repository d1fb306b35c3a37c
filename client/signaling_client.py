"""
Signaling client module.

Speaks the signaling protocol to the server on behalf of a host or viewer.
The local media stack stays outside: it registers handlers for the messages it
cares about and reports back when a remote description has been applied, at
which point any ICE candidates that arrived early are released to it.
"""

import asyncio
import inspect
from typing import Any, Callable, Dict, List, Optional

from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from client.negotiation import NegotiationTracker
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import MessageTypes
from common.errors import ProtocolError
from common.protocol_definitions import (
    parse_message, encode_message, create_start_screen_share_message, create_join_session_message,
    create_new_offer_message, create_new_answer_message, create_new_ice_candidate_message,
    create_screen_share_stopped_message
)


Handler = Callable[[dict], Any]


class SignalingClient:
    """Client-side signaling functionality."""

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.websocket = None
        self.running = False
        self.listen_task = None
        self.session_code = None
        self.negotiations = NegotiationTracker()
        self.handlers: Dict[str, List[Handler]] = {}
        self.waiters: Dict[str, List[asyncio.Future]] = {}

    def set_handler(self, msg_type: str, callback: Handler):
        """Register a callback (plain or async) for a server message type."""
        self.handlers.setdefault(msg_type, []).append(callback)

    async def connect(self, retry_count: Optional[int] = None, base_delay: Optional[float] = None) -> bool:
        """Establish connection to the server with retry logic and exponential backoff."""
        retry_count = self.config.retry_attempts if retry_count is None else retry_count
        base_delay = self.config.retry_delay_base if base_delay is None else base_delay
        attempt = 0

        while attempt < retry_count:
            try:
                self.websocket = await connect(self.config.url)
                logger.log_connection(self.config.url, True)
                self.running = True
                return True
            except (OSError, asyncio.TimeoutError, WebSocketException) as e:
                attempt += 1
                logger.log_connection(self.config.url, False)
                logger.log_error("connection", e)

                if attempt < retry_count:
                    delay = base_delay * (2 ** (attempt - 1))
                    logger.info(f"Retrying connection in {delay}s (attempt {attempt}/{retry_count})...")
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"Failed to connect after {retry_count} attempts")
        return False

    def start_listening(self) -> asyncio.Task:
        """Run the receive loop in the background."""
        self.listen_task = asyncio.create_task(self.listen_for_messages())
        return self.listen_task

    async def listen_for_messages(self):
        """Receive and dispatch server messages until the connection closes."""
        try:
            async for raw in self.websocket:
                try:
                    message = parse_message(raw)
                except ProtocolError as e:
                    logger.warning(f"Ignoring bad frame from server: {e}")
                    continue
                await self.dispatch(message)
        except ConnectionClosed as e:
            logger.info(f"Signaling connection closed: {e}")
        finally:
            self.running = False

    async def dispatch(self, message: dict):
        """Update negotiation state for a server message, then run its handlers."""
        msg_type = message['type']
        remote = message.get('socketId')

        if msg_type == MessageTypes.SESSION_CODE:
            self.session_code = message.get('code')
            logger.log_screen_share("started", f"code={self.session_code}")
        elif msg_type == MessageTypes.ON_OFFER:
            # A new offer restarts negotiation with that remote.
            self.negotiations.get(remote).reset()
            logger.log_negotiation('offer', remote, 'from')
        elif msg_type == MessageTypes.ON_ICE_CANDIDATE:
            if not self.negotiations.add_candidate(remote, message.get('candidate')):
                logger.debug(f"Buffered ICE candidate from {remote} until its description is applied")
                return
        elif msg_type == MessageTypes.PEER_LEFT:
            self.negotiations.clear(remote)
        elif msg_type == MessageTypes.SCREEN_SHARE_ENDED:
            self.negotiations.clear_all()
            logger.log_screen_share("ended")

        for future in self.waiters.pop(msg_type, []):
            if not future.done():
                future.set_result(message)

        for callback in self.handlers.get(msg_type, []):
            try:
                result = callback(message)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.log_error(f"{msg_type} handler", e)

    def expect(self, msg_type: str) -> asyncio.Future:
        """Future resolved by the next message of msg_type. Register before sending the request."""
        future = asyncio.get_running_loop().create_future()
        self.waiters.setdefault(msg_type, []).append(future)
        return future

    async def wait_for(self, msg_type: str, timeout: Optional[float] = None) -> dict:
        """Wait for the next message of msg_type (the receive loop must be running)."""
        return await asyncio.wait_for(self.expect(msg_type), timeout)

    def remote_description_applied(self, remote: str) -> List[Any]:
        """Report that remote's offer/answer is applied; returns candidates to add now, in order."""
        return self.negotiations.remote_description_applied(remote)

    async def send_message(self, message: dict) -> bool:
        """Send a message to the server."""
        if self.websocket is None:
            logger.warning(f"Not connected; dropping {message.get('type')}")
            return False
        try:
            await self.websocket.send(encode_message(message))
            return True
        except ConnectionClosed as e:
            logger.log_error(f"sending {message.get('type')}", e)
            self.running = False
            return False

    async def start_screen_share(self) -> bool:
        return await self.send_message(create_start_screen_share_message())

    async def join_session(self, code: str) -> bool:
        return await self.send_message(create_join_session_message(code))

    async def send_offer(self, target: str, offer) -> bool:
        logger.log_negotiation('offer', target, 'to')
        return await self.send_message(create_new_offer_message(offer, target))

    async def send_answer(self, target: str, answer) -> bool:
        logger.log_negotiation('answer', target, 'to')
        return await self.send_message(create_new_answer_message(answer, target))

    async def send_ice_candidate(self, target: str, candidate) -> bool:
        return await self.send_message(create_new_ice_candidate_message(candidate, target))

    async def stop_screen_share(self) -> bool:
        """Tell the server the share ended; viewers receive screenShareEnded."""
        sent = await self.send_message(create_screen_share_stopped_message())
        self.session_code = None
        self.negotiations.clear_all()
        return sent

    async def close(self):
        """Close the connection and stop the receive loop."""
        self.running = False
        if self.websocket is not None:
            await self.websocket.close()
        if self.listen_task is not None:
            await self.listen_task
            self.listen_task = None
