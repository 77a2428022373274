from asyncio import Lock
from contextlib import asynccontextmanager
from typing import AsyncIterator


class SessionLockManager:
    def __init__(self):
        self.locks: dict[str, Lock] = {}  # one Lock per session_id
        self.users: dict[str, int] = {}  # holders + waiters per session_id
        self.lock = Lock()  # protects locks and users

    async def acquire_lock(self, session_id: str) -> Lock:
        """Get the Lock of the specified session_id and register the caller

        Args:
            session_id (str): ID to identify the game session

        Returns:
            Lock: Lock of the specified session_id
        """
        async with self.lock:
            if session_id not in self.locks:
                self.locks[session_id] = Lock()
                self.users[session_id] = 0
            self.users[session_id] += 1
            return self.locks[session_id]

    async def release_lock(self, session_id: str):
        """Unregister the caller and delete the Lock once nobody uses it

        Args:
            session_id (str): ID to identify the game session
        """
        async with self.lock:
            self.users[session_id] -= 1
            if self.users[session_id] == 0:
                del self.locks[session_id]
                del self.users[session_id]

    @asynccontextmanager
    async def hold(self, session_id: str) -> AsyncIterator[None]:
        """Serialize the block against every other holder of the same session_id."""
        session_lock = await self.acquire_lock(session_id)
        try:
            async with session_lock:
                yield
        finally:
            await self.release_lock(session_id)

    def active_sessions(self) -> int:
        return len(self.locks)
