import pytest

from utils.extension_utils import (
    day_bucket,
    day_to_milliseconds,
    from_hex,
    from_optional_hex,
    to_milliseconds,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("0x00", 0),
        ("0x", 0),
        ("0x1f", 31),
        ("0X10", 16),
        ("1234", 1234),
        (None, 0),
        (7, 7),
        (7.9, 7),
        ("", 0),
    ],
)
def test_from_hex(value, expected):
    assert from_hex(value) == expected


def test_from_hex_rejects_garbage():
    with pytest.raises(ValueError):
        from_hex("0xzz")
    with pytest.raises(ValueError):
        from_hex(True)


def test_from_optional_hex():
    assert from_optional_hex(None) is None
    assert from_optional_hex("0x02") == 2


def test_to_milliseconds():
    assert to_milliseconds(1614834367000) == 1614834367000
    assert to_milliseconds(1614834367000.6) == 1614834367001
    assert to_milliseconds(None) == 0


def test_day_bucket():
    assert day_bucket(0) == 0
    assert day_bucket(86399999) == 0
    assert day_bucket(86400000) == 86400


def test_day_to_milliseconds():
    assert day_to_milliseconds("02-01-1970") == 86400000
    assert day_to_milliseconds("not-a-day") == 0
