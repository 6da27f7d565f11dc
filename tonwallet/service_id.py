"""Identifier of an API service."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceId:
    """A service identifier backed by a UUID."""

    value: uuid.UUID = field(default_factory=lambda: uuid.UUID(int=0))

    @classmethod
    def parse(cls, text: str) -> ServiceId:
        """Parse a UUID string; raises ValueError when it is malformed."""
        return cls(uuid.UUID(text))

    @classmethod
    def generate(cls) -> ServiceId:
        """Create a new random (version 4) identifier."""
        return cls(uuid.uuid4())

    def __str__(self) -> str:
        return str(self.value)