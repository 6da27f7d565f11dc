"""Cache that maps token wallet addresses to their owners."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from tonwallet.address import repack_address
from tonwallet.enums import TokenWalletVersionDb
from tonwallet.records import TokenOwnerFromDb

logger = logging.getLogger(__name__)

CACHE_CAPACITY = 5000


@dataclass(frozen=True)
class OwnerInfo:
    """Owner of a token wallet, in raw 'workchain:hex' address form."""

    owner_address: str
    root_address: str
    code_hash: bytes
    version: TokenWalletVersionDb


class OwnerStore(Protocol):
    """Persistent storage of token wallet owners."""

    async def get_all_token_owners(self) -> list[TokenOwnerFromDb]:
        """Every stored token owner."""

    async def get_token_owner_by_address(self, address: str) -> TokenOwnerFromDb:
        """The owner stored for a raw token wallet address; raises when absent."""

    async def new_token_owner(self, owner: TokenOwnerFromDb) -> None:
        """Store a token owner."""


def _owner_info(row: TokenOwnerFromDb) -> OwnerInfo:
    return OwnerInfo(
        owner_address=repack_address(
            f"{row.owner_account_workchain_id}:{row.owner_account_hex}"
        ),
        root_address=repack_address(row.root_address),
        code_hash=bytes(row.code_hash),
        version=TokenWalletVersionDb(row.version),
    )


class OwnersCache:
    """Least-recently-used cache of owners, backed by an owner store."""

    def __init__(self, store: OwnerStore, capacity: int = CACHE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("Cache capacity must be positive")
        self._store = store
        self._capacity = capacity
        self._entries: OrderedDict[str, OwnerInfo] = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    async def create(cls, store: OwnerStore) -> OwnersCache:
        """Build a cache preloaded with every owner in the store."""
        cache = cls(store)
        for row in await store.get_all_token_owners():
            cache._put(repack_address(row.address), _owner_info(row))
        return cache

    def _put(self, key: str, info: OwnerInfo) -> None:
        with self._lock:
            self._entries[key] = info
            self._entries.move_to_end(key)
            while len(self._entries) > self._capacity:
                self._entries.popitem(last=False)

    def _lookup(self, key: str) -> OwnerInfo | None:
        with self._lock:
            info = self._entries.get(key)
            if info is not None:
                self._entries.move_to_end(key)
            return info

    async def get(self, address: str) -> OwnerInfo | None:
        """Owner of a token wallet, or None when it is unknown."""
        key = repack_address(address)
        info = self._lookup(key)
        if info is not None:
            return info
        try:
            row = await self._store.get_token_owner_by_address(key)
        except Exception:
            return None
        return _owner_info(row)

    async def insert(self, address: str, info: OwnerInfo) -> None:
        """Cache the owner and persist it; storage failures are logged."""
        key = repack_address(address)
        self._put(key, info)
        workchain, owner_hex = repack_address(info.owner_address).split(":", 1)
        row = TokenOwnerFromDb(
            address=key,
            owner_account_workchain_id=int(workchain),
            owner_account_hex=owner_hex,
            root_address=repack_address(info.root_address),
            code_hash=info.code_hash,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
            version=info.version,
        )
        try:
            await self._store.new_token_owner(row)
        except Exception as exc:
            logger.error("Failed inserting owner info: %s", exc)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)