"""
Session registry module.

Maps short, human-typeable session codes to the connection hosting the share.
"""

import asyncio
import uuid
from typing import Callable, Dict, List, Optional

from common.constants import SESSION_CODE_LENGTH, MAX_CODE_ATTEMPTS
from common.errors import CodeGenerationError
from common.protocol_definitions import Session


def generate_code(length: int = SESSION_CODE_LENGTH) -> str:
    """Generate a short session code."""
    return uuid.uuid4().hex[:length]


class SessionRegistry:
    """Active session codes and their hosts."""

    def __init__(self, code_length: int = SESSION_CODE_LENGTH, max_attempts: int = MAX_CODE_ATTEMPTS,
                 code_generator: Optional[Callable[[int], str]] = None):
        self.sessions: Dict[str, str] = {}  # code -> host connection id
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.code_generator = code_generator or generate_code
        self.lock = asyncio.Lock()  # Protect shared state

    async def create_session(self, host: str) -> str:
        """Issue a code unique among active sessions and map it to host."""
        async with self.lock:
            for _ in range(self.max_attempts):
                code = self.code_generator(self.code_length)
                if code not in self.sessions:
                    self.sessions[code] = host
                    return code

        raise CodeGenerationError(f"No free session code after {self.max_attempts} attempts")

    async def resolve(self, code: str) -> Optional[str]:
        """Look up the host for a code, or None."""
        async with self.lock:
            return self.sessions.get(code)

    async def remove_all_for(self, host: str) -> List[str]:
        """Remove every code that maps to host. Returns the removed codes."""
        async with self.lock:
            codes = [code for code, owner in self.sessions.items() if owner == host]
            for code in codes:
                del self.sessions[code]
        return codes

    async def codes_for(self, host: str) -> List[str]:
        """Get the active codes of a host."""
        async with self.lock:
            return [code for code, owner in self.sessions.items() if owner == host]

    async def get_session(self, code: str) -> Optional[Session]:
        host = await self.resolve(code)
        return Session(code, host) if host is not None else None

    def active_count(self) -> int:
        """Get the number of active codes."""
        return len(self.sessions)
