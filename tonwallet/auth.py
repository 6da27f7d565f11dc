"""Authentication of signed API requests."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import re
import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol

from tonwallet.records import Key
from tonwallet.service_id import ServiceId

TIMESTAMP_EXPIRED_SEC = 10

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


class AuthError(Exception):
    """Raised when a request cannot be authenticated."""


class _KeyStore(Protocol):
    async def get_key(self, api_key: str) -> Key:
        """The key record for an API key; raises when it is unknown."""


def _parse_i64(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not _I64_MIN <= value <= _I64_MAX:
        raise ValueError(text)
    return value


def _utc_naive(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, timezone.utc).replace(tzinfo=None)


class AuthService:
    """Checks API keys, IP whitelists, request age and HMAC signatures."""

    def __init__(self, key_store: _KeyStore, clock: Callable[[], float] = time.time) -> None:
        self._key_store = key_store
        self._clock = clock
        self._keys: dict[str, Key] = {}
        self._lock = threading.Lock()

    async def authenticate(
        self,
        api_key: str,
        timestamp: str,
        signature: str,
        path: str,
        body: str,
        real_ip: str | None = None,
    ) -> ServiceId:
        """Return the service owning the key if the request is valid; raise AuthError otherwise."""
        try:
            key = await self._get_key(api_key)
        except Exception as exc:
            raise AuthError(f"Can not find api key {api_key} in db") from exc

        if key.whitelist is not None:
            whitelist = key.whitelist
            if not isinstance(whitelist, list) or not all(isinstance(ip, str) for ip in whitelist):
                raise AuthError("Can not parse ips whitelist")
            if real_ip is None:
                raise AuthError("Failed to read x-real-ip header")
            if real_ip not in whitelist:
                raise AuthError(f"Ip {real_ip} is not in whitelist.")

        try:
            timestamp_ms = _parse_i64(timestamp)
        except ValueError as exc:
            raise AuthError("Failed to read timestamp header") from exc

        sign = -1 if timestamp_ms < 0 else 1
        timestamp_sec = sign * (abs(timestamp_ms) // 1000)

        now = _utc_naive(self._clock())
        try:
            then = _utc_naive(timestamp_sec)
        except (OverflowError, ValueError, OSError) as exc:
            raise AuthError("Invalid timestamp") from exc

        delta = int((now - then).total_seconds())
        if delta > TIMESTAMP_EXPIRED_SEC:
            raise AuthError(f"TIMESTAMP expired. server time: {now}, header time: {then}")

        message = f"{timestamp_ms}{path}{body}".encode()
        calculated = hmac.new(key.secret.encode(), message, hashlib.sha256).digest()

        try:
            expected = base64.b64decode(signature, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AuthError("Invalid signature encoding") from exc

        if not hmac.compare_digest(calculated, expected):
            raise AuthError("Invalid signature")

        return key.service_id

    async def _get_key(self, api_key: str) -> Key:
        with self._lock:
            cached = self._keys.get(api_key)
        if cached is not None:
            return cached
        key = await self._key_store.get_key(api_key)
        with self._lock:
            self._keys[api_key] = key
        return key