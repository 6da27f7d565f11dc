"""Per-account locks that serialise transaction handling."""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Callable

from tonwallet.prelude import DEFAULT_EXPIRATION_TIMEOUT

GUARD_LIFETIME = 5 * DEFAULT_EXPIRATION_TIMEOUT


class AccountGuards:
    """Hands out one asyncio lock per account; locks are forgotten once they expire."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._guards: dict[str, tuple[asyncio.Lock, int]] = {}
        self._mutex = threading.Lock()

    def get(self, account: str) -> asyncio.Lock:
        """The lock for an account, creating a fresh one if none is live."""
        now = int(self._clock())
        with self._mutex:
            self._guards = {
                key: entry for key, entry in self._guards.items() if now < entry[1]
            }
            entry = self._guards.get(account)
            if entry is None:
                entry = (asyncio.Lock(), now + GUARD_LIFETIME)
                self._guards[account] = entry
            return entry[0]

    def __len__(self) -> int:
        with self._mutex:
            return len(self._guards)