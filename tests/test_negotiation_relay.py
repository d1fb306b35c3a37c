#!/usr/bin/env python3
"""
Unit tests for server/signaling/negotiation_relay.py
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from common.constants import MessageTypes
from common.errors import MalformedRelayRequest
from common.protocol_definitions import (
    create_new_offer_message, create_new_answer_message, create_new_ice_candidate_message
)
from server.connections.connection_registry import ConnectionRegistry
from server.signaling.negotiation_relay import NegotiationRelay
from tests.fakes import FakeWebSocket


OFFER = {"type": "offer", "sdp": "v=0\r\no=- 1 2 IN IP4 127.0.0.1\r\n"}


class TestParseRequest(unittest.TestCase):
    """Test cases for relay request extraction."""

    def test_offer(self):
        request = NegotiationRelay.parse_request(MessageTypes.NEW_OFFER, create_new_offer_message(OFFER, "peer-b"))

        self.assertEqual(request.kind, "offer")
        self.assertEqual(request.target_connection, "peer-b")
        self.assertEqual(request.payload, OFFER)

    def test_answer_and_candidate(self):
        answer = NegotiationRelay.parse_request(MessageTypes.NEW_ANSWER, create_new_answer_message("ans", "host-a"))
        candidate = NegotiationRelay.parse_request(
            MessageTypes.NEW_ICE_CANDIDATE, create_new_ice_candidate_message({"candidate": "c1"}, "host-a"))

        self.assertEqual((answer.kind, answer.payload), ("answer", "ans"))
        self.assertEqual((candidate.kind, candidate.payload), ("candidate", {"candidate": "c1"}))

    def test_missing_target(self):
        with self.assertRaises(MalformedRelayRequest):
            NegotiationRelay.parse_request(MessageTypes.NEW_OFFER, {"type": MessageTypes.NEW_OFFER, "offer": OFFER})
        with self.assertRaises(MalformedRelayRequest):
            NegotiationRelay.parse_request(MessageTypes.NEW_OFFER, {"type": MessageTypes.NEW_OFFER, "socketId": 7})

    def test_not_a_relay_type(self):
        self.assertFalse(NegotiationRelay.is_relay_type(MessageTypes.JOIN_SESSION))
        with self.assertRaises(MalformedRelayRequest):
            NegotiationRelay.parse_request(MessageTypes.JOIN_SESSION, {"socketId": "x"})


class TestRelay(unittest.IsolatedAsyncioTestCase):
    """Test cases for payload forwarding."""

    async def asyncSetUp(self):
        self.connections = ConnectionRegistry()
        self.target = FakeWebSocket()
        await self.connections.register(self.target, connection_id="peer-b")
        self.relay = NegotiationRelay(self.connections)

    async def test_relay_tags_sender(self):
        """The target sees on<Kind> with the sender's id, payload untouched."""
        self.assertTrue(await self.relay.relay("offer", "host-a", "peer-b", OFFER))
        await self.connections.flush(timeout=5)

        self.assertEqual(self.target.sent, [
            {"type": MessageTypes.ON_OFFER, "offer": OFFER, "socketId": "host-a"}
        ])

    async def test_relay_kinds(self):
        await self.relay.relay("answer", "host-a", "peer-b", "ans")
        await self.relay.relay("candidate", "host-a", "peer-b", None)
        await self.connections.flush(timeout=5)

        self.assertEqual(self.target.types(), [MessageTypes.ON_ANSWER, MessageTypes.ON_ICE_CANDIDATE])
        self.assertEqual(self.target.sent[1]["candidate"], None)

    async def test_relay_to_unknown_connection(self):
        self.assertFalse(await self.relay.relay("offer", "host-a", "nobody", OFFER))
        self.assertEqual(self.target.sent, [])


if __name__ == '__main__':
    unittest.main()
