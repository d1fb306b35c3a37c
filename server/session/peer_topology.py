"""
Peer topology module.

Tracks which peer connections joined each host's share.
"""

import asyncio
from typing import Dict, Set


class PeerTopology:
    """Host connection -> set of joined peer connections."""

    def __init__(self):
        self.peer_sets: Dict[str, Set[str]] = {}
        self.lock = asyncio.Lock()  # Protect shared state

    async def init_host(self, host: str):
        """Start an empty peer set for host, replacing any previous one."""
        async with self.lock:
            self.peer_sets[host] = set()

    async def add_peer(self, host: str, peer: str) -> bool:
        """Add peer to host's set. Fails without mutation if host is not sharing."""
        async with self.lock:
            peers = self.peer_sets.get(host)
            if peers is None:
                return False
            peers.add(peer)
            return True

    async def peers_of(self, host: str) -> Set[str]:
        """Snapshot of host's peers; empty if host is unknown."""
        async with self.lock:
            return set(self.peer_sets.get(host, ()))

    async def remove_host(self, host: str) -> Set[str]:
        """Drop host's peer set and return the peers it held."""
        async with self.lock:
            return self.peer_sets.pop(host, set())

    async def remove_peer(self, host: str, peer: str):
        async with self.lock:
            peers = self.peer_sets.get(host)
            if peers is not None:
                peers.discard(peer)

    async def remove_peer_everywhere(self, peer: str) -> Set[str]:
        """Remove peer from every host's set. Returns the hosts it left."""
        async with self.lock:
            hosts = set()
            for host, peers in self.peer_sets.items():
                if peer in peers:
                    peers.discard(peer)
                    hosts.add(host)
            return hosts

    async def are_linked(self, a: str, b: str) -> bool:
        """True when one connection hosts a share the other has joined."""
        async with self.lock:
            return b in self.peer_sets.get(a, ()) or a in self.peer_sets.get(b, ())

    async def is_host(self, host: str) -> bool:
        async with self.lock:
            return host in self.peer_sets
