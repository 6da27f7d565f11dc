"""Enumerations describing accounts, transactions and events."""

from __future__ import annotations

from enum import Enum


class AccountType(str, Enum):
    """Kind of wallet contract behind an account."""

    HIGHLOAD_WALLET = "HighloadWallet"
    WALLET = "Wallet"
    SAFE_MULTISIG = "SafeMultisig"


class AccountStatus(str, Enum):
    """On-chain state of an account."""

    ACTIVE = "Active"
    UNINIT = "UnInit"
    FROZEN = "Frozen"


class TokenWalletVersionDb(str, Enum):
    """Token wallet contract version as stored in the database."""

    OLD_TIP3V4 = "OldTip3v4"
    TIP3 = "Tip3"


class TonStatus(str, Enum):
    OK = "Ok"
    ERROR = "Error"


class TonTokenTransactionStatus(str, Enum):
    NEW = "New"
    DONE = "Done"
    ERROR = "Error"


class TonTransactionStatus(str, Enum):
    NEW = "New"
    DONE = "Done"
    PARTIALLY_DONE = "PartiallyDone"
    ERROR = "Error"

    @classmethod
    def from_token_status(cls, status: TonTokenTransactionStatus) -> TonTransactionStatus:
        """Map a token transaction status onto the general transaction status."""
        return cls(TonTokenTransactionStatus(status).value)


class TonEventStatus(str, Enum):
    NEW = "New"
    NOTIFIED = "Notified"
    ERROR = "Error"


class TonTransactionDirection(str, Enum):
    SEND = "Send"
    RECEIVE = "Receive"


class AccountAddressType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


class TransactionsSearchOrdering(str, Enum):
    CREATED_AT_ASC = "CreatedAtAsc"
    CREATED_AT_DESC = "CreatedAtDesc"
    TRANSACTION_LT_ASC = "TransactionLtAsc"
    TRANSACTION_LT_DESC = "TransactionLtDesc"
    TRANSACTION_TIMESTAMP_ASC = "TransactionTimestampAsc"
    TRANSACTION_TIMESTAMP_DESC = "TransactionTimestampDesc"


class UnsupportedMessageFlagsError(ValueError):
    """Raised for message flags that have no output type."""

    def __init__(self, flags: int | None = None) -> None:
        super().__init__("Unsupported message flags set")
        self.flags = flags


class TransactionSendOutputType(str, Enum):
    """How the value of an outgoing message is determined."""

    NORMAL = "Normal"
    ALL_BALANCE = "AllBalance"
    ALL_BALANCE_DELETE_NETWORK_ACCOUNT = "AllBalanceDeleteNetworkAccount"

    @classmethod
    def from_flags(cls, value: int) -> TransactionSendOutputType:
        """Return the output type for the given message flags."""
        for output_type, flags in _OUTPUT_TYPE_FLAGS.items():
            if flags == value:
                return output_type
        raise UnsupportedMessageFlagsError(value)

    def flags(self) -> int:
        """Message flags used when sending with this output type."""
        return _OUTPUT_TYPE_FLAGS[self]


_OUTPUT_TYPE_FLAGS: dict[TransactionSendOutputType, int] = {
    TransactionSendOutputType.NORMAL: 3,
    TransactionSendOutputType.ALL_BALANCE: 128,
    TransactionSendOutputType.ALL_BALANCE_DELETE_NETWORK_ACCOUNT: 128 + 32,
}