"""Account addresses and address-related records."""

from __future__ import annotations

import base64
import binascii
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from tonwallet.enums import AccountStatus, AccountType
from tonwallet.service_id import ServiceId

_BOUNCEABLE_TAG = 0x11
_NON_BOUNCEABLE_TAG = 0x51
_TESTNET_FLAG = 0x80
_PACKED_LEN = 36


class AddressError(ValueError):
    """Raised for an address that cannot be parsed or packed."""


def _parse_raw(text: str) -> tuple[int, bytes]:
    workchain_text, sep, hex_text = text.partition(":")
    if not sep:
        raise AddressError(f"Invalid address: {text!r}")
    try:
        workchain_id = int(workchain_text)
    except ValueError as exc:
        raise AddressError(f"Invalid workchain in address: {text!r}") from exc
    if not -(2**31) <= workchain_id < 2**31:
        raise AddressError(f"Workchain out of range: {workchain_id}")
    if len(hex_text) != 64:
        raise AddressError(f"Address hash must be 64 hex digits: {text!r}")
    try:
        account_id = bytes.fromhex(hex_text)
    except ValueError as exc:
        raise AddressError(f"Invalid hex in address: {text!r}") from exc
    return workchain_id, account_id


def _crc16(data: bytes) -> bytes:
    return binascii.crc_hqx(data, 0).to_bytes(2, "big")


def pack_std_smc_addr(
    workchain_id: int, hex_address: str, bounceable: bool, url_safe: bool
) -> str:
    """Encode a standard address in the 48-character user-friendly form."""
    if not -128 <= workchain_id <= 127:
        raise AddressError(f"Workchain does not fit a packed address: {workchain_id}")
    _, account_id = _parse_raw(f"{workchain_id}:{hex_address}")
    tag = _BOUNCEABLE_TAG if bounceable else _NON_BOUNCEABLE_TAG
    body = bytes([tag]) + workchain_id.to_bytes(1, "big", signed=True) + account_id
    packed = body + _crc16(body)
    encoder = base64.urlsafe_b64encode if url_safe else base64.b64encode
    return encoder(packed).decode("ascii")


def unpack_std_smc_addr(text: str) -> tuple[int, str]:
    """Decode a user-friendly address into its workchain and lower-case hex hash."""
    if len(text) != 48:
        raise AddressError(f"Packed address must be 48 characters: {text!r}")
    standard = text.replace("-", "+").replace("_", "/")
    try:
        packed = base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AddressError(f"Invalid base64 in address: {text!r}") from exc
    if len(packed) != _PACKED_LEN:
        raise AddressError(f"Invalid packed address length: {text!r}")
    body, checksum = packed[:34], packed[34:]
    if _crc16(body) != checksum:
        raise AddressError(f"Address checksum mismatch: {text!r}")
    tag = body[0] & ~_TESTNET_FLAG
    if tag not in (_BOUNCEABLE_TAG, _NON_BOUNCEABLE_TAG):
        raise AddressError(f"Unknown address tag: {text!r}")
    workchain_id = int.from_bytes(body[1:2], "big", signed=True)
    return workchain_id, body[2:].hex()


def repack_address(text: str) -> str:
    """Normalise a raw or user-friendly address to the raw 'workchain:hex' form."""
    if ":" in text:
        workchain_id, account_id = _parse_raw(text)
        return f"{workchain_id}:{account_id.hex()}"
    workchain_id, hex_address = unpack_std_smc_addr(text)
    return f"{workchain_id}:{hex_address}"


@dataclass
class Account:
    """An account address in raw and user-friendly forms."""

    workchain_id: int
    hex: str
    base64url: str

    @classmethod
    def from_parts(cls, workchain_id: int, hex_address: str) -> Account:
        return cls(
            workchain_id=workchain_id,
            hex=hex_address,
            base64url=pack_std_smc_addr(workchain_id, hex_address, True, True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "workchainId": self.workchain_id,
            "hex": self.hex,
            "base64url": self.base64url,
        }


@dataclass
class CreateAddress:
    account_type: AccountType | None = None
    workchain_id: int | None = None
    custodians: int | None = None
    confirmations: int | None = None
    custodians_public_keys: list[str] | None = None


@dataclass
class CreatedAddress:
    workchain_id: int
    hex: str
    base64url: str
    public_key: bytes
    private_key: bytes
    account_type: AccountType
    custodians: int | None = None
    confirmations: int | None = None
    custodians_public_keys: list[str] | None = None


@dataclass
class CreateAddressInDb:
    id: uuid.UUID
    service_id: ServiceId
    workchain_id: int
    hex: str
    base64url: str
    public_key: str
    private_key: str
    account_type: AccountType
    custodians: int | None = None
    confirmations: int | None = None
    custodians_public_keys: Any = None

    @classmethod
    def from_created(
        cls,
        created: CreatedAddress,
        id: uuid.UUID,
        service_id: ServiceId,
        public_key: str,
        private_key: str,
    ) -> CreateAddressInDb:
        keys = created.custodians_public_keys
        return cls(
            id=id,
            service_id=service_id,
            workchain_id=created.workchain_id,
            hex=created.hex,
            base64url=created.base64url,
            public_key=public_key,
            private_key=private_key,
            account_type=created.account_type,
            custodians=created.custodians,
            confirmations=created.confirmations,
            custodians_public_keys=list(keys) if keys is not None else None,
        )


@dataclass
class NetworkAddressData:
    workchain_id: int
    hex: str
    account_status: AccountStatus
    network_balance: Decimal = field(default_factory=Decimal)
    last_transaction_hash: str | None = None
    last_transaction_lt: str | None = None
    sync_u_time: int = 0

    @classmethod
    def uninit(cls, workchain_id: int, hex_address: str) -> NetworkAddressData:
        """State of an account that has not been deployed yet."""
        _, account_id = _parse_raw(f"{workchain_id}:{hex_address}")
        return cls(
            workchain_id=workchain_id,
            hex=account_id.hex(),
            account_status=AccountStatus.UNINIT,
        )