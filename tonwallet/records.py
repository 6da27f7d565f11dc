"""Rows stored in the database and related network state records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, TypeVar

from tonwallet.address import Account, repack_address
from tonwallet.enums import (
    AccountStatus,
    AccountType,
    TokenWalletVersionDb,
    TonEventStatus,
    TonTokenTransactionStatus,
    TonTransactionDirection,
    TonTransactionStatus,
)
from tonwallet.service_id import ServiceId

_T = TypeVar("_T")


def _copy_into(cls: type[_T], source: object, **overrides: Any) -> _T:
    """Build ``cls`` from the same-named fields of ``source``, then apply the overrides."""
    values = {f.name: getattr(source, f.name) for f in fields(cls) if hasattr(source, f.name)}
    values.update(overrides)
    return cls(**values)


@dataclass(kw_only=True)
class _ServiceRecord:
    id: uuid.UUID
    service_id: ServiceId


@dataclass(kw_only=True)
class _AccountFields:
    account_workchain_id: int
    account_hex: str


@dataclass(kw_only=True)
class _SenderFields:
    sender_workchain_id: int | None = None
    sender_hex: str | None = None


@dataclass(kw_only=True)
class _Timestamps:
    created_at: datetime
    updated_at: datetime


@dataclass(kw_only=True)
class _SentFields:
    original_value: Decimal | None = None
    original_outputs: Any = None
    aborted: bool
    bounce: bool


@dataclass(kw_only=True)
class _TransactionOutcome(_SenderFields):
    transaction_hash: str | None = None
    transaction_lt: Decimal | None = None
    transaction_scan_lt: int | None = None
    messages: Any = None
    messages_hash: Any = None
    data: Any = None
    value: Decimal | None = None
    fee: Decimal | None = None
    balance_change: Decimal | None = None
    status: TonTransactionStatus
    error: str | None = None
    multisig_transaction_id: int | None = None


@dataclass(kw_only=True)
class _ReceivedTransaction(_TransactionOutcome, _SentFields, _AccountFields):
    id: uuid.UUID
    message_hash: str
    transaction_timeout: int | None = None
    direction: TonTransactionDirection


@dataclass(kw_only=True)
class _NativeEvent(_ServiceRecord, _AccountFields):
    transaction_id: uuid.UUID
    message_hash: str
    balance_change: Decimal | None = None
    transaction_direction: TonTransactionDirection
    transaction_status: TonTransactionStatus
    event_status: TonEventStatus


@dataclass(kw_only=True)
class _TokenEvent(_ServiceRecord, _AccountFields):
    token_transaction_id: uuid.UUID
    message_hash: str
    owner_message_hash: str | None = None
    value: Decimal
    root_address: str
    transaction_direction: TonTransactionDirection
    transaction_status: TonTokenTransactionStatus
    event_status: TonEventStatus


@dataclass(kw_only=True)
class _TokenTransaction(_AccountFields):
    id: uuid.UUID
    transaction_hash: str | None = None
    message_hash: str
    owner_message_hash: str | None = None
    value: Decimal
    root_address: str
    payload: bytes | None = None
    error: str | None = None
    direction: TonTransactionDirection
    status: TonTokenTransactionStatus
    in_message_hash: str | None = None


@dataclass(kw_only=True)
class _TokenBalance(_AccountFields):
    service_id: ServiceId
    balance: Decimal
    root_address: str


@dataclass(kw_only=True)
class ApiServiceDb:
    id: uuid.UUID
    name: str
    created_at: datetime


@dataclass(kw_only=True)
class ApiServiceKeyDb(_ServiceRecord):
    key: str
    secret: str
    whitelist: Any = None
    created_at: datetime


@dataclass(kw_only=True)
class ApiServiceCallbackDb(_ServiceRecord):
    callback: str
    created_at: datetime


@dataclass(kw_only=True)
class AddressDb(_ServiceRecord, _Timestamps):
    workchain_id: int
    hex: str
    base64url: str
    public_key: str
    private_key: str
    account_type: AccountType
    custodians: int | None = None
    confirmations: int | None = None
    custodians_public_keys: Any = None
    balance: Decimal

    def to_account(self) -> Account:
        """The account this row describes, with its user-friendly form computed."""
        return Account.from_parts(self.workchain_id, self.hex)


@dataclass(kw_only=True)
class TransactionDb(_ReceivedTransaction, _Timestamps):
    service_id: ServiceId
    transaction_timestamp: datetime | None = None


@dataclass(kw_only=True)
class TransactionEventDb(_NativeEvent, _SenderFields, _Timestamps):
    transaction_hash: str | None = None
    multisig_transaction_id: int | None = None


@dataclass(kw_only=True)
class TokenBalanceFromDb(_TokenBalance, _Timestamps):
    pass


@dataclass(kw_only=True)
class TokenTransactionFromDb(_TokenTransaction, _Timestamps):
    service_id: ServiceId
    transaction_timestamp: datetime | None = None
    block_hash: str | None = None
    block_time: int | None = None


@dataclass(kw_only=True)
class TokenTransactionEventDb(_TokenEvent, _Timestamps):
    token_transaction_hash: str | None = None


@dataclass(kw_only=True)
class TokenOwnerFromDb:
    address: str
    owner_account_workchain_id: int
    owner_account_hex: str
    root_address: str
    code_hash: bytes
    created_at: datetime
    version: TokenWalletVersionDb


@dataclass(kw_only=True)
class TokenWhitelistFromDb:
    name: str
    address: str
    version: TokenWalletVersionDb


@dataclass(kw_only=True)
class Key(ApiServiceKeyDb):
    """An API key together with its signing secret."""


@dataclass(kw_only=True)
class LastKeyBlock:
    block_id: str


@dataclass(kw_only=True)
class Metrics:
    gen_utime: int


@dataclass(kw_only=True)
class CreateTokenBalanceInDb(_TokenBalance):
    pass


@dataclass(kw_only=True)
class NetworkTokenAddressData:
    workchain_id: int
    hex: str
    root_address: str
    version: str = ""
    network_balance: Decimal = field(default_factory=Decimal)
    account_status: AccountStatus
    last_transaction_hash: str | None = None
    last_transaction_lt: str | None = None
    sync_u_time: int = 0

    @classmethod
    def uninit(
        cls, workchain_id: int, hex_address: str, root_address: str
    ) -> NetworkTokenAddressData:
        """State of a token wallet that has not been deployed yet."""
        owner = repack_address(f"{workchain_id}:{hex_address}")
        _, owner_hex = owner.split(":", 1)
        return cls(
            workchain_id=workchain_id,
            hex=owner_hex,
            root_address=repack_address(root_address),
            account_status=AccountStatus.UNINIT,
        )