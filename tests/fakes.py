"""
Test doubles shared by the signaling tests.
"""

import asyncio
import json
import tempfile

from websockets.exceptions import ConnectionClosed

from server.utils.logger import logger


class FakeWebSocket:
    """Records every frame sent to it, decoded."""

    def __init__(self, closed: bool = False):
        self.sent = []
        self.closed = closed
        self.remote_address = ('127.0.0.1', 50000)

    async def send(self, data):
        if self.closed:
            raise ConnectionClosed(None, None)
        self.sent.append(json.loads(data))

    def types(self):
        return [message['type'] for message in self.sent]

    def of_type(self, msg_type):
        return [message for message in self.sent if message['type'] == msg_type]


def redirect_session_log(test_case):
    """Send the session audit log to a temp dir for the duration of a test."""
    logs_dir = tempfile.TemporaryDirectory()
    previous = logger.logs_dir
    logger.set_logs_dir(logs_dir.name)
    test_case.addCleanup(logs_dir.cleanup)
    test_case.addCleanup(logger.set_logs_dir, str(previous))
    return logs_dir.name


class StalledWebSocket(FakeWebSocket):
    """A client that stopped reading: send() never completes."""

    def __init__(self):
        super().__init__()
        self.unblocked = asyncio.Event()

    async def send(self, data):
        await self.unblocked.wait()
        await super().send(data)
