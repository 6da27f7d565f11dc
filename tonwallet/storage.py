"""In-memory storage of unsigned messages awaiting a signature."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class UnsignedMessage(Protocol):
    """A message prepared for sending that still needs to be signed."""

    def hash(self) -> bytes:
        """Hash of the message that identifies it."""

    def expire_at(self) -> int:
        """Unix time in seconds after which the message is no longer valid."""


class StorageHandler:
    """Keeps unsigned messages by the hex form of their hash until they expire."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._messages: dict[str, UnsignedMessage] = {}
        self._lock = threading.Lock()

    def add_message(self, message: UnsignedMessage) -> str:
        """Store a message and return its hex-encoded hash."""
        key = bytes(message.hash()).hex()
        with self._lock:
            self._messages[key] = message
        return key

    def get_message(self, hash_hex: str) -> UnsignedMessage | None:
        """Drop expired messages, then return the one with the given hash, if any."""
        now = int(self._clock())
        with self._lock:
            self._messages = {
                key: message
                for key, message in self._messages.items()
                if message.expire_at() > now
            }
            return self._messages.get(hash_hex)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)