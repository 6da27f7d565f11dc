import uuid
from dataclasses import fields
from decimal import Decimal

import pytest

from tonwallet.enums import (
    TonTransactionDirection,
    TonTransactionStatus,
    TransactionSendOutputType,
)
from tonwallet.service_id import ServiceId
from tonwallet.transactions import (
    CreateReceiveTransaction,
    CreateSendTransaction,
    SentTransaction,
    TransactionSend,
    TransactionSendOutput,
    TransactionsSearch,
    UpdateSendTransaction,
    UpdateSentTransaction,
)

HEX = "ab" * 32


def _sent(**overrides):
    values = dict(
        id=uuid.uuid4(),
        message_hash="hash",
        account_workchain_id=0,
        account_hex=HEX,
        original_value=Decimal("10"),
        original_outputs=[{"value": "10"}],
        aborted=False,
        bounce=True,
    )
    values.update(overrides)
    return SentTransaction(**values)


def test_create_send_transaction_copies_sent_fields():
    sent = _sent()
    service_id = ServiceId.generate()
    created = CreateSendTransaction.from_sent(sent, service_id)
    assert created.id == sent.id
    assert created.service_id == service_id
    assert created.message_hash == sent.message_hash
    assert created.account_workchain_id == sent.account_workchain_id
    assert created.account_hex == sent.account_hex
    assert created.original_value == sent.original_value
    assert created.original_outputs == sent.original_outputs
    assert created.aborted is sent.aborted
    assert created.bounce is sent.bounce


def test_create_send_transaction_is_new_and_outgoing():
    created = CreateSendTransaction.from_sent(_sent(aborted=True), ServiceId.generate())
    assert created.direction is TonTransactionDirection.SEND
    assert created.status is TonTransactionStatus.NEW
    assert created.aborted is True


def test_update_send_transaction_from_error():
    update = UpdateSendTransaction.from_error("boom")
    assert update.status is TonTransactionStatus.ERROR
    assert update.error == "boom"
    others = [f.name for f in fields(update) if f.name not in ("status", "error")]
    assert all(getattr(update, name) is None for name in others)


def test_update_sent_transaction_wraps_input():
    update = UpdateSendTransaction.from_error("failed")
    wrapped = UpdateSentTransaction(
        message_hash="hash", account_workchain_id=-1, account_hex=HEX, input=update
    )
    assert wrapped.input.error == "failed"
    assert wrapped.account_workchain_id == -1


def test_update_send_transaction_requires_status():
    with pytest.raises(TypeError):
        UpdateSendTransaction()


def test_transactions_search_defaults():
    search = TransactionsSearch(limit=10, offset=5)
    assert (search.limit, search.offset) == (10, 5)
    assert search.ordering is None
    assert search.status is None
    assert search.account is None


def test_send_output_flags():
    output = TransactionSendOutput(
        recipient_address=f"0:{HEX}",
        value=Decimal("1"),
        output_type=TransactionSendOutputType.ALL_BALANCE,
    )
    assert output.output_type.flags() == 128
    assert TransactionSendOutput(recipient_address="a", value=Decimal(1)).output_type is None


def test_transaction_send_outputs_are_independent():
    first = TransactionSend(id=uuid.uuid4(), from_address="a")
    second = TransactionSend(id=uuid.uuid4(), from_address="b")
    first.outputs.append(TransactionSendOutput(recipient_address="c", value=Decimal(1)))
    assert len(first.outputs) == 1
    assert second.outputs == []


def test_create_receive_transaction_optional_fields():
    receive = CreateReceiveTransaction(
        id=uuid.uuid4(),
        message_hash="hash",
        transaction_timestamp=1_600_000_000,
        account_workchain_id=0,
        account_hex=HEX,
        direction=TonTransactionDirection.RECEIVE,
        status=TonTransactionStatus.DONE,
        aborted=False,
        bounce=False,
    )
    assert receive.sender_hex is None
    assert receive.balance_change is None
    assert receive.direction is TonTransactionDirection.RECEIVE