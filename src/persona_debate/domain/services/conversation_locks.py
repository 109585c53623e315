"""Per-conversation mutual exclusion."""

import asyncio
import weakref


class ConversationLocks:
    """Hands out one ``asyncio.Lock`` per conversation ID.

    Read-modify-write operations on the same conversation are serialized
    inside one process. Locks are dropped once no coroutine holds or waits
    on them. Separate processes sharing one store are not coordinated.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def get(self, conversation_id: str) -> asyncio.Lock:
        """Get the lock for a conversation.

        Args:
            conversation_id: Conversation ID.

        Returns:
            Lock shared by all callers for this conversation.
        """
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
