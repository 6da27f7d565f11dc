"""Requests and records for native and token transactions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from tonwallet.enums import (
    TonTransactionDirection,
    TonTransactionStatus,
    TransactionSendOutputType,
    TransactionsSearchOrdering,
)
from tonwallet.records import (
    _AccountFields,
    _copy_into,
    _ReceivedTransaction,
    _SenderFields,
    _SentFields,
    _ServiceRecord,
    _TokenTransaction,
    _TransactionOutcome,
)


@dataclass(kw_only=True)
class TransactionSendOutput:
    recipient_address: str
    value: Decimal
    output_type: TransactionSendOutputType | None = None


@dataclass(kw_only=True)
class TransactionSend:
    id: uuid.UUID
    from_address: str
    outputs: list[TransactionSendOutput] = field(default_factory=list)
    bounce: bool | None = None
    payload: str | None = None


@dataclass(kw_only=True)
class CreateReceiveTransaction(_ReceivedTransaction):
    transaction_timestamp: int


@dataclass(kw_only=True)
class TransactionConfirm:
    id: uuid.UUID
    address: str
    transaction_id: int


@dataclass(kw_only=True)
class SentTransaction(_SentFields, _AccountFields):
    id: uuid.UUID
    message_hash: str


@dataclass(kw_only=True)
class CreateSendTransaction(_ServiceRecord, _SentFields, _AccountFields):
    message_hash: str
    direction: TonTransactionDirection
    status: TonTransactionStatus

    @classmethod
    def from_sent(cls, sent: SentTransaction, service_id) -> CreateSendTransaction:
        """A new outgoing transaction record for a message just sent."""
        return _copy_into(
            cls,
            sent,
            service_id=service_id,
            direction=TonTransactionDirection.SEND,
            status=TonTransactionStatus.NEW,
        )


@dataclass(kw_only=True)
class UpdateSendTransaction(_TransactionOutcome):
    transaction_timestamp: int | None = None

    @classmethod
    def from_error(cls, message: str) -> UpdateSendTransaction:
        """An update that marks the transaction as failed with the given message."""
        return cls(status=TonTransactionStatus.ERROR, error=message)


@dataclass(kw_only=True)
class UpdateSentTransaction(_AccountFields):
    message_hash: str
    input: UpdateSendTransaction


@dataclass(kw_only=True)
class TransactionsSearch:
    id: uuid.UUID | None = None
    message_hash: str | None = None
    transaction_hash: str | None = None
    account: str | None = None
    status: TonTransactionStatus | None = None
    direction: TonTransactionDirection | None = None
    created_at_min: int | None = None
    created_at_max: int | None = None
    ordering: TransactionsSearchOrdering | None = None
    limit: int
    offset: int


@dataclass(kw_only=True)
class CreateTokenTransaction(_TokenTransaction, _SenderFields):
    transaction_timestamp: int
    block_hash: str
    block_time: int


@dataclass(kw_only=True)
class _TokenRequest:
    id: uuid.UUID
    root_address: str
    value: Decimal
    send_gas_to: str | None = None
    fee: Decimal


@dataclass(kw_only=True)
class TokenTransactionSend(_TokenRequest):
    from_address: str
    recipient_address: str
    notify_receiver: bool
    payload: str | None = None


@dataclass(kw_only=True)
class TokenTransactionBurn(_TokenRequest):
    from_address: str
    callback_to: str


@dataclass(kw_only=True)
class TokenTransactionMint(_TokenRequest):
    owner_address: str
    recipient_address: str
    deploy_wallet_value: Decimal
    notify: bool