import base64
import hashlib
import hmac
import uuid
from datetime import datetime

import pytest

from tonwallet.auth import AuthError, AuthService
from tonwallet.records import Key
from tonwallet.service_id import ServiceId

NOW = 1_700_000_000.0
NOW_MS = 1_700_000_000_000
SERVICE = ServiceId(uuid.UUID("12345678-1234-5678-1234-567812345678"))


class FakeStore:
    def __init__(self, whitelist=None):
        self.calls = 0
        self.whitelist = whitelist

    async def get_key(self, api_key):
        self.calls += 1
        if api_key != "placeholder":
            raise LookupError(api_key)
        return Key(
            id=uuid.uuid4(),
            service_id=SERVICE,
            key=api_key,
            secret="secret",
            whitelist=self.whitelist,
            created_at=datetime(2023, 1, 1),
        )


def sign(timestamp_ms, path, body, secret="secret"):
    message = f"{timestamp_ms}{path}{body}".encode()
    return base64.b64encode(hmac.new(secret.encode(), message, hashlib.sha256).digest()).decode()


def make_service(whitelist=None):
    store = FakeStore(whitelist)
    return AuthService(store, clock=lambda: NOW), store


@pytest.mark.asyncio
async def test_valid_request_returns_service_id():
    service, _ = make_service()
    result = await service.authenticate(
        "placeholder", str(NOW_MS), sign(NOW_MS, "/path", "{}"), "/path", "{}", None
    )
    assert result == SERVICE


@pytest.mark.asyncio
async def test_key_is_cached():
    service, store = make_service()
    signature = sign(NOW_MS, "/a", "")
    for _ in range(3):
        assert await service.authenticate("placeholder", str(NOW_MS), signature, "/a", "", None) == SERVICE
    assert store.calls == 1


@pytest.mark.asyncio
async def test_unknown_key_rejected():
    service, _ = make_service()
    with pytest.raises(AuthError, match="Can not find api key other in db"):
        await service.authenticate("other", str(NOW_MS), sign(NOW_MS, "/", ""), "/", "", None)


@pytest.mark.asyncio
async def test_whitelist_requires_real_ip():
    service, _ = make_service(whitelist=["10.0.0.1"])
    with pytest.raises(AuthError, match="x-real-ip"):
        await service.authenticate("placeholder", str(NOW_MS), sign(NOW_MS, "/", ""), "/", "", None)


@pytest.mark.asyncio
async def test_ip_not_in_whitelist_rejected():
    service, _ = make_service(whitelist=["10.0.0.1"])
    with pytest.raises(AuthError, match="not in whitelist"):
        await service.authenticate(
            "placeholder", str(NOW_MS), sign(NOW_MS, "/", ""), "/", "", "10.0.0.2"
        )


@pytest.mark.asyncio
async def test_ip_in_whitelist_accepted():
    service, _ = make_service(whitelist=["10.0.0.1", "10.0.0.2"])
    result = await service.authenticate(
        "placeholder", str(NOW_MS), sign(NOW_MS, "/", ""), "/", "", "10.0.0.2"
    )
    assert result == SERVICE


@pytest.mark.asyncio
async def test_malformed_whitelist_rejected():
    service, _ = make_service(whitelist={"ip": "10.0.0.1"})
    with pytest.raises(AuthError, match="whitelist"):
        await service.authenticate(
            "placeholder", str(NOW_MS), sign(NOW_MS, "/", ""), "/", "", "10.0.0.1"
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("timestamp", ["abc", "", "1.5", " 1700000000000"])
async def test_unparsable_timestamp_rejected(timestamp):
    service, _ = make_service()
    with pytest.raises(AuthError, match="timestamp header"):
        await service.authenticate("placeholder", timestamp, sign(NOW_MS, "/", ""), "/", "", None)


@pytest.mark.asyncio
async def test_expired_timestamp_rejected():
    service, _ = make_service()
    old = NOW_MS - 11_000
    with pytest.raises(AuthError, match="TIMESTAMP expired"):
        await service.authenticate("placeholder", str(old), sign(old, "/", ""), "/", "", None)


@pytest.mark.asyncio
@pytest.mark.parametrize("offset_ms", [-10_000, 0, 60_000])
async def test_recent_or_future_timestamp_accepted(offset_ms):
    service, _ = make_service()
    ts = NOW_MS + offset_ms
    result = await service.authenticate("placeholder", str(ts), sign(ts, "/", "x"), "/", "x", None)
    assert result == SERVICE


@pytest.mark.asyncio
async def test_wrong_signature_rejected():
    service, _ = make_service()
    signature = sign(NOW_MS, "/path", "{}", secret="token")
    with pytest.raises(AuthError, match="Invalid signature"):
        await service.authenticate("placeholder", str(NOW_MS), signature, "/path", "{}", None)


@pytest.mark.asyncio
async def test_signature_over_different_body_rejected():
    service, _ = make_service()
    signature = sign(NOW_MS, "/path", "{}")
    with pytest.raises(AuthError, match="Invalid signature"):
        await service.authenticate("placeholder", str(NOW_MS), signature, "/path", "{ }", None)


@pytest.mark.asyncio
async def test_non_base64_signature_rejected():
    service, _ = make_service()
    with pytest.raises(AuthError):
        await service.authenticate("placeholder", str(NOW_MS), "!!not base64!!", "/", "", None)