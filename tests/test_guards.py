import pytest

from tonwallet.guards import GUARD_LIFETIME, AccountGuards
from tonwallet.prelude import DEFAULT_EXPIRATION_TIMEOUT

START = 1000


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock(START)


@pytest.fixture
def guards(clock):
    return AccountGuards(clock=clock)


@pytest.mark.parametrize(
    "elapsed, kept",
    [
        (0, True),
        (GUARD_LIFETIME - 1, True),
        (5 * DEFAULT_EXPIRATION_TIMEOUT - 1, True),
        (GUARD_LIFETIME, False),
        (5 * DEFAULT_EXPIRATION_TIMEOUT, False),
    ],
)
def test_guard_lifetime(clock, guards, elapsed, kept):
    first = guards.get("a")
    clock.now = START + elapsed
    assert (guards.get("a") is first) is kept
    assert len(guards) == 1


@pytest.mark.parametrize(
    "accounts, expected",
    [(["a", "a"], 1), (["a", "b"], 2), (["a", "b", "a", "c"], 3)],
)
def test_one_guard_per_account(guards, accounts, expected):
    locks = {account: guards.get(account) for account in accounts}
    assert all(guards.get(account) is lock for account, lock in locks.items())
    assert len({id(lock) for lock in locks.values()}) == expected
    assert len(guards) == expected


def test_expired_guards_of_other_accounts_are_dropped(clock, guards):
    guards.get("a")
    guards.get("b")
    clock.now = START + GUARD_LIFETIME
    guards.get("c")
    assert len(guards) == 1


@pytest.mark.asyncio
async def test_lock_serialises_holders(guards):
    lock = guards.get("a")
    async with lock:
        assert guards.get("a").locked()
    assert not guards.get("a").locked()