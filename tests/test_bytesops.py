import pytest

from blecore.bytesops import swap_buf


def test_swap_reverses_order():
    assert swap_buf(b"\x01\x02\x03\x04") == b"\x04\x03\x02\x01"


def test_swap_odd_length_keeps_middle():
    result = swap_buf(b"\x0a\x0b\x0c")
    assert result[1] == 0x0B
    assert result[0] == 0x0C


def test_swap_empty():
    assert swap_buf(b"") == b""


@pytest.mark.parametrize(
    "data",
    [b"\x00", b"\x01\x02", bytes(range(16)), bytes(range(255, 0, -3))],
)
def test_double_swap_is_identity(data):
    assert swap_buf(swap_buf(data)) == data


@pytest.mark.parametrize("data", [b"\x01", bytes(range(7)), bytes(32)])
def test_swap_preserves_length(data):
    assert len(swap_buf(data)) == len(data)


def test_swap_does_not_mutate_input():
    original = bytearray(b"\x10\x20\x30")
    swap_buf(original)
    assert original == bytearray(b"\x10\x20\x30")


def test_swap_returns_bytes_from_bytearray():
    result = swap_buf(bytearray(b"\x01\x02"))
    assert isinstance(result, bytes)
    assert result == bytes(reversed(b"\x01\x02"))