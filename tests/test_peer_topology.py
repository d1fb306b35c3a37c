#!/usr/bin/env python3
"""
Unit tests for server/session/peer_topology.py
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from server.session.peer_topology import PeerTopology


class TestPeerTopology(unittest.IsolatedAsyncioTestCase):
    """Test cases for host/peer membership."""

    async def asyncSetUp(self):
        self.topology = PeerTopology()

    async def test_add_peer_requires_host(self):
        """addPeer against a host that is not sharing fails without mutation."""
        self.assertFalse(await self.topology.add_peer("host-a", "peer-b"))
        self.assertEqual(await self.topology.peers_of("host-a"), set())
        self.assertFalse(await self.topology.is_host("host-a"))

    async def test_add_peer(self):
        await self.topology.init_host("host-a")

        self.assertTrue(await self.topology.add_peer("host-a", "peer-b"))
        self.assertIn("peer-b", await self.topology.peers_of("host-a"))

    async def test_init_host_resets_peers(self):
        await self.topology.init_host("host-a")
        await self.topology.add_peer("host-a", "peer-b")

        await self.topology.init_host("host-a")

        self.assertEqual(await self.topology.peers_of("host-a"), set())

    async def test_peers_of_returns_copy(self):
        await self.topology.init_host("host-a")
        peers = await self.topology.peers_of("host-a")
        peers.add("intruder")

        self.assertEqual(await self.topology.peers_of("host-a"), set())

    async def test_remove_peer_keeps_others(self):
        await self.topology.init_host("host-a")
        await self.topology.add_peer("host-a", "peer-b")
        await self.topology.add_peer("host-a", "peer-c")

        await self.topology.remove_peer("host-a", "peer-b")
        await self.topology.remove_peer("host-unknown", "peer-b")

        self.assertEqual(await self.topology.peers_of("host-a"), {"peer-c"})

    async def test_remove_host(self):
        await self.topology.init_host("host-a")
        await self.topology.add_peer("host-a", "peer-b")

        self.assertEqual(await self.topology.remove_host("host-a"), {"peer-b"})
        self.assertEqual(await self.topology.remove_host("host-a"), set())
        self.assertFalse(await self.topology.add_peer("host-a", "peer-c"))

    async def test_remove_peer_everywhere(self):
        """A departing peer leaves every host it joined."""
        for host in ("host-a", "host-b", "host-c"):
            await self.topology.init_host(host)
        await self.topology.add_peer("host-a", "peer-x")
        await self.topology.add_peer("host-b", "peer-x")
        await self.topology.add_peer("host-b", "peer-y")

        self.assertEqual(await self.topology.remove_peer_everywhere("peer-x"), {"host-a", "host-b"})
        self.assertEqual(await self.topology.remove_peer_everywhere("peer-x"), set())
        self.assertEqual(await self.topology.peers_of("host-a"), set())
        self.assertEqual(await self.topology.peers_of("host-b"), {"peer-y"})

    async def test_are_linked(self):
        """Only a host and one of its own peers are linked, in either direction."""
        await self.topology.init_host("host-a")
        await self.topology.init_host("host-b")
        await self.topology.add_peer("host-a", "peer-x")
        await self.topology.add_peer("host-b", "peer-y")

        self.assertTrue(await self.topology.are_linked("host-a", "peer-x"))
        self.assertTrue(await self.topology.are_linked("peer-x", "host-a"))
        self.assertFalse(await self.topology.are_linked("peer-x", "host-b"))
        self.assertFalse(await self.topology.are_linked("peer-x", "peer-y"))
        self.assertFalse(await self.topology.are_linked("host-a", "host-b"))


if __name__ == '__main__':
    unittest.main()
