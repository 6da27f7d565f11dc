"""Notification events for native and token transactions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from tonwallet.address import Account
from tonwallet.enums import (
    TonEventStatus,
    TonTokenTransactionStatus,
    TonTransactionDirection,
    TonTransactionStatus,
)
from tonwallet.records import (
    TokenTransactionEventDb,
    TokenTransactionFromDb,
    TransactionDb,
    TransactionEventDb,
    _copy_into,
    _NativeEvent,
    _SenderFields,
    _TokenEvent,
)

_EPOCH = datetime(1970, 1, 1)


def _timestamp_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    delta = moment - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def _new_event(cls, payload, **overrides: Any):
    """A fresh event in the ``New`` state for a stored transaction."""
    return _copy_into(
        cls,
        payload,
        id=uuid.uuid4(),
        transaction_direction=payload.direction,
        transaction_status=payload.status,
        event_status=TonEventStatus.NEW,
        **overrides,
    )


@dataclass(kw_only=True)
class CreateSendTransactionEvent(_NativeEvent):
    multisig_transaction_id: int | None = None

    @classmethod
    def from_transaction(cls, payload: TransactionDb) -> CreateSendTransactionEvent:
        """A new event announcing an outgoing transaction."""
        return _new_event(cls, payload, transaction_id=payload.id)


@dataclass(kw_only=True)
class UpdateSendTransactionEvent:
    balance_change: Decimal | None = None
    transaction_status: TonTransactionStatus
    multisig_transaction_id: int | None = None

    @classmethod
    def from_transaction(cls, payload: TransactionDb) -> UpdateSendTransactionEvent:
        """The changes to apply to an existing outgoing transaction event."""
        return _copy_into(cls, payload, transaction_status=payload.status)


@dataclass(kw_only=True)
class CreateReceiveTransactionEvent(_NativeEvent, _SenderFields):
    @classmethod
    def from_transaction(cls, payload: TransactionDb) -> CreateReceiveTransactionEvent:
        """A new event announcing an incoming transaction."""
        return _new_event(cls, payload, transaction_id=payload.id)


@dataclass(kw_only=True)
class _EventsSearch:
    limit: int
    offset: int
    created_at_ge: int | None = None
    created_at_le: int | None = None
    message_hash: str | None = None
    account_workchain_id: int | None = None
    account_hex: str | None = None
    transaction_direction: TonTransactionDirection | None = None
    event_status: TonEventStatus | None = None


@dataclass(kw_only=True)
class TransactionsEventsSearch(_EventsSearch):
    transaction_id: uuid.UUID | None = None
    transaction_status: TonTransactionStatus | None = None


@dataclass(kw_only=True)
class CreateTokenTransactionEvent(_TokenEvent):
    @classmethod
    def from_token_transaction(
        cls, payload: TokenTransactionFromDb
    ) -> CreateTokenTransactionEvent:
        """A new event announcing a token transaction."""
        return _new_event(cls, payload, token_transaction_id=payload.id)


@dataclass(kw_only=True)
class TokenTransactionsEventsSearch(_EventsSearch):
    token_transaction_id: uuid.UUID | None = None
    owner_message_hash: str | None = None
    root_address: str | None = None
    transaction_status: TonTokenTransactionStatus | None = None


@dataclass(kw_only=True)
class AccountTransactionEvent:
    """An event as reported to API clients, for native or token transactions."""

    id: uuid.UUID
    transaction_id: uuid.UUID
    transaction_hash: str | None = None
    message_hash: str
    owner_message_hash: str | None = None
    account: Account
    sender: Account | None = None
    balance_change: Decimal | None = None
    root_address: str | None = None
    transaction_direction: TonTransactionDirection
    transaction_status: TonTransactionStatus
    event_status: TonEventStatus
    multisig_transaction_id: int | None = None
    created_at: int
    updated_at: int

    @classmethod
    def _from_stored(cls, event, **overrides: Any) -> AccountTransactionEvent:
        return _copy_into(
            cls,
            event,
            account=Account.from_parts(event.account_workchain_id, event.account_hex),
            created_at=_timestamp_millis(event.created_at),
            updated_at=_timestamp_millis(event.updated_at),
            **overrides,
        )

    @classmethod
    def from_token_event(cls, event: TokenTransactionEventDb) -> AccountTransactionEvent:
        return cls._from_stored(
            event,
            transaction_id=event.token_transaction_id,
            transaction_hash=event.token_transaction_hash,
            balance_change=event.value,
            transaction_status=TonTransactionStatus.from_token_status(event.transaction_status),
        )

    @classmethod
    def from_event(cls, event: TransactionEventDb) -> AccountTransactionEvent:
        sender = None
        if event.sender_workchain_id is not None and event.sender_hex is not None:
            sender = Account.from_parts(event.sender_workchain_id, event.sender_hex)
        return cls._from_stored(event, sender=sender)

    def to_dict(self) -> dict[str, Any]:
        """A JSON-ready mapping with camel-case keys."""
        return {
            "id": str(self.id),
            "transactionId": str(self.transaction_id),
            "transactionHash": self.transaction_hash,
            "messageHash": self.message_hash,
            "ownerMessageHash": self.owner_message_hash,
            "account": self.account.to_dict(),
            "sender": self.sender.to_dict() if self.sender is not None else None,
            "balanceChange": str(self.balance_change) if self.balance_change is not None else None,
            "rootAddress": self.root_address,
            "transactionDirection": self.transaction_direction.value,
            "transactionStatus": self.transaction_status.value,
            "eventStatus": self.event_status.value,
            "multisigTransactionId": self.multisig_transaction_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }