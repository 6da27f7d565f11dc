"""Application configuration."""

from __future__ import annotations

import base64
import binascii
import ipaddress
import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from cryptography.hazmat.primitives.kdf.argon2 import Argon2id

KEY_LENGTH = 32
ARGON2_MEMORY_COST = 4096
ARGON2_ITERATIONS = 3
ARGON2_LANES = 1

_DEFAULT_LOGGER_SETTINGS = """
appenders:
  stdout:
    kind: console
    encoder:
      pattern: "{d(%Y-%m-%d %H:%M:%S %Z)(utc)} - {h({l})} {M} = {m} {n}"
root:
  level: info
  appenders:
    - stdout
loggers:
  ton_wallet_api:
    level: info
    appenders:
      - stdout
    additive: false
"""

_B64_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/")


def _decode_salt(salt: str) -> bytes:
    if not 4 <= len(salt) <= 64 or not set(salt) <= _B64_ALPHABET or len(salt) % 4 == 1:
        raise ValueError(f"Invalid salt: {salt!r}")
    try:
        return base64.b64decode(salt + "=" * (-len(salt) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Invalid salt: {salt!r}") from exc


def derive_key(secret: str, salt: str) -> bytes:
    """Derive the 32-byte key for private keys from a secret and a base64 salt (Argon2id v19)."""
    kdf = Argon2id(
        salt=_decode_salt(salt),
        length=KEY_LENGTH,
        iterations=ARGON2_ITERATIONS,
        lanes=ARGON2_LANES,
        memory_cost=ARGON2_MEMORY_COST,
    )
    return kdf.derive(secret.encode())


def default_key() -> bytes:
    """Key derived from the SECRET and SALT environment variables."""
    try:
        return derive_key(os.environ["SECRET"], os.environ["SALT"])
    except (KeyError, ValueError) as exc:
        raise RuntimeError(f"Failed to get key to encrypt/decrypt private key: {exc!r}") from exc


def default_logger_settings() -> dict[str, Any]:
    """Logging configuration used when none is given."""
    return yaml.safe_load(_DEFAULT_LOGGER_SETTINGS)


def load_global_config(path: str | os.PathLike[str]) -> Any:
    """Read the network's global configuration from a JSON file."""
    with open(path, encoding="utf-8") as reader:
        return json.load(reader)


def _parse_socket_addr(text: Any) -> tuple[str, int]:
    if not isinstance(text, str):
        raise ValueError(f"Invalid socket address: {text!r}")
    try:
        if text.startswith("["):
            host, _, rest = text[1:].partition("]")
            if not rest.startswith(":"):
                raise ValueError(text)
            address: ipaddress._BaseAddress = ipaddress.IPv6Address(host)
            port_text = rest[1:]
        else:
            host, sep, port_text = text.rpartition(":")
            if not sep:
                raise ValueError(text)
            address = ipaddress.IPv4Address(host)
        if not port_text.isdigit() or not 0 <= int(port_text) <= 65535:
            raise ValueError(text)
    except ValueError as exc:
        raise ValueError(f"Invalid socket address: {text!r}") from exc
    return str(address), int(port_text)


def _parse_key(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, list) and all(
        isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 255 for item in value
    ):
        return bytes(value)
    raise ValueError("key must be a list of byte values")


@dataclass
class AppConfig:
    """Settings of the wallet service."""

    server_addr: tuple[str, int]
    database_url: str
    db_pool_size: int
    key: bytes = field(default_factory=default_key)
    ton_core: dict[str, Any] = field(default_factory=dict)
    api_metrics_addr: tuple[str, int] | None = None
    node_metrics_settings: dict[str, Any] | None = None
    logger_settings: Any = field(default_factory=default_logger_settings)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AppConfig:
        """Build the configuration from parsed data; raises ValueError when it is invalid."""
        missing = [name for name in ("server_addr", "database_url", "db_pool_size") if name not in data]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")

        database_url = data["database_url"]
        if not isinstance(database_url, str):
            raise ValueError("database_url must be a string")
        pool_size = data["db_pool_size"]
        if isinstance(pool_size, bool) or not isinstance(pool_size, int) or not 0 <= pool_size < 2**32:
            raise ValueError("db_pool_size must be an unsigned 32-bit integer")

        ton_core = data.get("ton_core") or {}
        if not isinstance(ton_core, Mapping):
            raise ValueError("ton_core must be a mapping")
        metrics_settings = data.get("node_metrics_settings")
        if metrics_settings is not None and not isinstance(metrics_settings, Mapping):
            raise ValueError("node_metrics_settings must be a mapping")
        metrics_addr = data.get("api_metrics_addr")

        return cls(
            server_addr=_parse_socket_addr(data["server_addr"]),
            database_url=database_url,
            db_pool_size=pool_size,
            key=_parse_key(data["key"]) if "key" in data else default_key(),
            ton_core=dict(ton_core),
            api_metrics_addr=_parse_socket_addr(metrics_addr) if metrics_addr is not None else None,
            node_metrics_settings=dict(metrics_settings) if metrics_settings is not None else None,
            logger_settings=(
                data["logger_settings"] if "logger_settings" in data else default_logger_settings()
            ),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> AppConfig:
        """Read the configuration from a YAML file."""
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError(f"Configuration in {path} is not a mapping")
        return cls.from_mapping(data)