from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional, Tuple

from .key_deriver import Credential

log = logging.getLogger(__name__)


@dataclass
class _LockEntry:
    lock: asyncio.Lock
    users: int = 0


class InMemoryKeyStore:
    """
    Signer keys registered for (network_id, account_id) pairs.

    ``set_key`` is last-writer-wins per pair; different accounts never touch
    each other's entries. Callers that must not race on the same account
    hold :meth:`lock` for that pair around register + submit.

    One instance per process (or per test) – pass it in, don't import a global.
    """

    def __init__(self) -> None:
        self._keys: Dict[Tuple[str, str], Credential] = {}
        self._locks: Dict[Tuple[str, str], _LockEntry] = {}

    def set_key(self, network_id: str, account_id: str, credential: Credential) -> None:
        self._keys[(network_id, account_id)] = credential
        log.debug("Key registered for %s on %s: %s", account_id, network_id, credential.public_key)

    def get_key(self, network_id: str, account_id: str) -> Optional[Credential]:
        return self._keys.get((network_id, account_id))

    def require_key(self, network_id: str, account_id: str) -> Credential:
        cred = self.get_key(network_id, account_id)
        if cred is None:
            raise KeyError(f"No key registered for account_id={account_id!r} on {network_id!r}")
        return cred

    def remove_key(self, network_id: str, account_id: str) -> None:
        self._keys.pop((network_id, account_id), None)

    def clear(self) -> None:
        self._keys.clear()

    @asynccontextmanager
    async def lock(self, network_id: str, account_id: str) -> AsyncIterator[None]:
        """
        Hold the pair's lock for the duration of the block.

        The entry is dropped once no holder or waiter is left, so a lock
        never outlives the event loop it was used on.
        """
        key = (network_id, account_id)
        entry = self._locks.get(key)
        if entry is None:
            entry = self._locks[key] = _LockEntry(asyncio.Lock())
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0 and self._locks.get(key) is entry:
                del self._locks[key]

    def active_locks(self) -> int:
        return len(self._locks)
