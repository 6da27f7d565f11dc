# tonwallet

Building blocks for a TON wallet API service. These are data models, address handling, request authentication, key derivation and a few in-memory services. All of them can be used from plain Python or asyncio code.

## Modules

### `tonwallet.prelude`

Shared constants:

| Constant | Value | Meaning |
|---|---|---|
| `TOKEN_FEE` | `500_000_000` | 0.5 TON, in nanotons |
| `DEPLOY_TOKEN_VALUE` | `200_000_000` | 0.2 TON, in nanotons |
| `DEFAULT_EXPIRATION_TIMEOUT` | `60` | seconds |
| `MAX_LIMIT_SEARCH` | `100` | |

### `tonwallet.enums`

String enums for:

- `AccountType`
- `AccountStatus`
- `TokenWalletVersionDb`
- `TonStatus`
- `TonTransactionStatus`
- `TonTokenTransactionStatus`
- `TonEventStatus`
- `TonTransactionDirection`
- `AccountAddressType`
- `TransactionsSearchOrdering`
- `TransactionSendOutputType`

Two helpers convert between them and plain values:

- `TonTransactionStatus.from_token_status` maps a token transaction status onto the general transaction status.
- `TransactionSendOutputType.from_flags` maps message flags to an output type: `3` is `NORMAL`, `128` is `ALL_BALANCE` and `160` is `ALL_BALANCE_DELETE_NETWORK_ACCOUNT`. Any other value raises `UnsupportedMessageFlagsError`, a `ValueError`. `.flags()` gives the flags back.

### `tonwallet.service_id`

`ServiceId` is a frozen wrapper around a UUID.

- `ServiceId.parse(text)` raises `ValueError` on a malformed UUID.
- `ServiceId.generate()` creates a random version 4 id.
- `str()` gives the UUID text.

### `tonwallet.address`

Functions for the two address forms:

- `pack_std_smc_addr(workchain_id, hex_address, bounceable, url_safe)` encodes a raw address as the 48-character base64 user-friendly form, with a CRC16 checksum.
- `unpack_std_smc_addr(text)` decodes that form back to `(workchain_id, hex)`.
- `repack_address(text)` accepts either form and returns the raw `workchain:hex` form with lower-case hex.

Invalid input raises `AddressError`, a `ValueError`.

The module also defines these records:

- `Account` has `workchain_id`, `hex` and `base64url`. `Account.from_parts` builds it and computes the bounceable, URL-safe form. `to_dict()` returns camel-case keys.
- `CreateAddress`
- `CreatedAddress`
- `CreateAddressInDb`, built from a `CreatedAddress` with `CreateAddressInDb.from_created`.
- `NetworkAddressData`. `NetworkAddressData.uninit` gives the state of an account that has not been deployed.

### `tonwallet.records`

Dataclasses for stored rows:

- `ApiServiceDb`
- `ApiServiceKeyDb`
- `ApiServiceCallbackDb`
- `AddressDb`, whose `to_account()` returns an `Account`.
- `TransactionDb`
- `TransactionEventDb`
- `TokenBalanceFromDb`
- `TokenTransactionFromDb`
- `TokenTransactionEventDb`
- `TokenOwnerFromDb`
- `TokenWhitelistFromDb`
- `Key`
- `LastKeyBlock`
- `Metrics`
- `CreateTokenBalanceInDb`
- `NetworkTokenAddressData`, with `NetworkTokenAddressData.uninit`.

### `tonwallet.transactions`

Request and record dataclasses for native and token transactions:

- `TransactionSend` and `TransactionSendOutput`
- `CreateReceiveTransaction`
- `TransactionConfirm`
- `SentTransaction`
- `CreateSendTransaction`. `CreateSendTransaction.from_sent(sent, service_id)` creates a record with direction `SEND` and status `NEW`.
- `UpdateSendTransaction`. `UpdateSendTransaction.from_error(message)` creates an update with status `ERROR`.
- `UpdateSentTransaction`
- `TransactionsSearch`
- `CreateTokenTransaction`
- `TokenTransactionSend`
- `TokenTransactionBurn`
- `TokenTransactionMint`

### `tonwallet.events`

Notification events:

- `CreateSendTransactionEvent`, `UpdateSendTransactionEvent` and `CreateReceiveTransactionEvent`, each built with `from_transaction(payload)`.
- `CreateTokenTransactionEvent`, built with `from_token_transaction(payload)`.
- The search filters `TransactionsEventsSearch` and `TokenTransactionsEventsSearch`.

New events get a fresh UUID and event status `NEW`.

`AccountTransactionEvent` is the form reported to API clients.

- It is built with `from_event` for native transactions, which adds the sender account when it is known.
- It is built with `from_token_event` for token transactions, where `balance_change` is the token value and the token status is mapped onto `TonTransactionStatus`.
- Timestamps become milliseconds since the Unix epoch. Naive datetimes are taken as UTC.
- `to_dict()` returns a JSON-ready mapping with camel-case keys.

### `tonwallet.owners_cache`

`OwnersCache` is a least-recently-used map, holding at most 5000 entries by default, from a token wallet address to its `OwnerInfo`.

It sits in front of any object that implements the `OwnerStore` protocol. The protocol has three async methods:

- `get_all_token_owners`
- `get_token_owner_by_address`
- `new_token_owner`

Its methods:

- `await OwnersCache.create(store)` preloads every stored owner.
- `get` falls back to the store on a cache miss. It returns `None` when the store raises.
- `insert` caches the owner and then persists it. A storage failure is logged, not raised.

Addresses may be given in either form; they are normalised with `repack_address`.

### `tonwallet.auth`

`AuthService(key_store)` takes any object with an async `get_key(api_key)` method that returns a `Key`. Keys are cached after the first lookup.

`await authenticate(api_key, timestamp, signature, path, body, real_ip=None)` checks the request in this order:

1. The API key exists.
2. When the key has an IP whitelist, `real_ip` is given and is on it.
3. `timestamp`, in milliseconds, is no more than `TIMESTAMP_EXPIRED_SEC` (10) seconds old.
4. The base64 `signature` equals the HMAC-SHA256 of `timestamp + path + body`, keyed with the key's secret.

On success it returns the key's `ServiceId`. Otherwise it raises `AuthError`.

A `clock` callable can be passed for testing.

### `tonwallet.storage`

`StorageHandler` keeps objects that satisfy the `UnsignedMessage` protocol, meaning they have `hash()` and `expire_at()`. They are kept under the hex form of their hash.

- `add_message` returns that key.
- `get_message` first drops every message whose `expire_at()` is not after the current time, then returns the one asked for, or `None`.

### `tonwallet.settings`

`AppConfig` holds:

- `server_addr`
- `database_url`
- `db_pool_size`
- `key`
- `ton_core`
- `api_metrics_addr`
- `node_metrics_settings`
- `logger_settings`

Two ways to load it:

- `AppConfig.from_file(path)` reads YAML.
- `AppConfig.from_mapping(data)` validates already parsed data.

Both raise `ValueError` for invalid settings. Socket addresses are written as `"127.0.0.1:8080"` or `"[::1]:8080"`.

When `key` is absent, `default_key()` derives it from the `SECRET` and `SALT` environment variables. It raises `RuntimeError` if they are missing or invalid.

`derive_key(secret, salt)` returns a 32-byte key. It uses Argon2id with memory cost 4096 KiB, 3 iterations and 1 lane. The salt is given in unpadded base64.

`default_logger_settings()` returns the default logging configuration as a dict. `load_global_config(path)` reads a JSON file.

### `tonwallet.guards`

`AccountGuards.get(account)` returns one `asyncio.Lock` per account. A lock is forgotten 300 seconds (`5 * DEFAULT_EXPIRATION_TIMEOUT`) after it was created. After that, a fresh one is handed out.

## What the package does not do

The package provides no HTTP server and no command-line program. It does not talk to a database or a blockchain node.

Storage of keys and token owners is left to the caller, through the `get_key` method and the `OwnerStore` protocol. The `ton_core` and `node_metrics_settings` parts of `AppConfig` are kept as plain mappings and are not interpreted.

## Install

```
pip install .
```

## Example

```python
from tonwallet.address import Account, repack_address
from tonwallet.enums import TransactionSendOutputType

account = Account.from_parts(0, "00" * 32)
print(account.base64url)
print(repack_address(account.base64url))  # 0:000...000

assert TransactionSendOutputType.from_flags(128) is TransactionSendOutputType.ALL_BALANCE
```

## Tests

```
pip install ".[test]"
pytest
```