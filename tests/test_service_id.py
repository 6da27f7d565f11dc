import uuid

import pytest

from tonwallet.service_id import ServiceId


@pytest.fixture
def raw():
    return uuid.uuid4()


def test_parse_and_str_round_trip():
    generated = ServiceId.generate()
    assert ServiceId.parse(str(generated)) == generated


@pytest.mark.parametrize("render", [str, lambda value: value.hex], ids=["hyphenated", "simple"])
def test_parse_accepts_uuid_text(raw, render):
    parsed = ServiceId.parse(render(raw))
    assert parsed == ServiceId(raw)
    assert parsed.value == raw


@pytest.mark.parametrize("text", ["", "not-a-uuid", "1234"])
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        ServiceId.parse(text)


def test_generate_is_version_four():
    assert ServiceId.generate().value.version == 4


def test_generate_is_unique():
    ids = {ServiceId.generate() for _ in range(20)}
    assert len(ids) == 20


def test_default_is_nil():
    assert ServiceId().value == uuid.UUID(int=0)


def test_str_matches_uuid_text(raw):
    assert str(ServiceId(raw)) == str(raw)