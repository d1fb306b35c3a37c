"""
Negotiation pair state module.

ICE candidates for a remote connection can arrive before its offer or answer
has been applied to the local peer connection. Those candidates are held here
and released, in arrival order, once the remote description is in place.
"""

from collections import deque
from typing import Any, Dict, List


class NegotiationPairState:
    """Sequencing state for one local <-> remote negotiation."""

    def __init__(self, remote: str):
        self.remote = remote
        self.remote_description_applied = False
        self.pending_candidates = deque()

    def add_candidate(self, candidate: Any) -> bool:
        """Record a received candidate.

        Returns True if the caller may apply it now, False if it was buffered.
        """
        if self.remote_description_applied:
            return True
        self.pending_candidates.append(candidate)
        return False

    def mark_remote_description_applied(self) -> List[Any]:
        """Flip to the applied state and hand back every buffered candidate."""
        self.remote_description_applied = True
        flushed = list(self.pending_candidates)
        self.pending_candidates.clear()
        return flushed

    def reset(self):
        """Forget everything, e.g. when a fresh offer restarts negotiation."""
        self.remote_description_applied = False
        self.pending_candidates.clear()


class NegotiationTracker:
    """NegotiationPairState per remote connection id."""

    def __init__(self):
        self.pairs: Dict[str, NegotiationPairState] = {}

    def get(self, remote: str) -> NegotiationPairState:
        """Get the state for remote, creating it on first use."""
        state = self.pairs.get(remote)
        if state is None:
            state = NegotiationPairState(remote)
            self.pairs[remote] = state
        return state

    def add_candidate(self, remote: str, candidate: Any) -> bool:
        return self.get(remote).add_candidate(candidate)

    def remote_description_applied(self, remote: str) -> List[Any]:
        return self.get(remote).mark_remote_description_applied()

    def clear(self, remote: str):
        """Drop the state for one remote connection."""
        self.pairs.pop(remote, None)

    def clear_all(self):
        self.pairs.clear()

    def __contains__(self, remote: str) -> bool:
        return remote in self.pairs

    def __len__(self) -> int:
        return len(self.pairs)
