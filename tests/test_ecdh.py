import pytest

from blecore.ecdh import (
    generate_keys,
    generate_secret,
    marshal_public_key_x,
    marshal_public_key_xy,
    unmarshal_public_key,
)


def test_marshal_xy_length_and_little_endian():
    keys = generate_keys()
    xy = marshal_public_key_xy(keys.public)
    numbers = keys.public.public_numbers()
    assert len(xy) == 64
    assert int.from_bytes(xy[:32], "little") == numbers.x
    assert int.from_bytes(xy[32:], "little") == numbers.y


def test_marshal_x_is_prefix_of_xy():
    keys = generate_keys()
    assert marshal_public_key_x(keys.public) == marshal_public_key_xy(keys.public)[:32]


def test_unmarshal_round_trip():
    keys = generate_keys()
    xy = marshal_public_key_xy(keys.public)
    decoded = unmarshal_public_key(xy)
    assert decoded.public_numbers() == keys.public.public_numbers()
    assert marshal_public_key_xy(decoded) == xy


def test_shared_secret_agrees():
    a = generate_keys()
    b = generate_keys()
    s1 = generate_secret(a.private, b.public)
    s2 = generate_secret(b.private, a.public)
    assert s1 == s2
    assert len(s1) == 32


def test_shared_secret_through_wire_format():
    a = generate_keys()
    b = generate_keys()
    remote = unmarshal_public_key(marshal_public_key_xy(b.public))
    assert generate_secret(a.private, remote) == generate_secret(b.private, a.public)


def test_unmarshal_rejects_point_off_curve():
    with pytest.raises(ValueError):
        unmarshal_public_key(bytes(64))


@pytest.mark.parametrize("size", [0, 32, 63, 65])
def test_unmarshal_rejects_wrong_length(size):
    with pytest.raises(ValueError, match="64 bytes"):
        unmarshal_public_key(bytes(size))


def test_generated_keys_are_distinct():
    first = marshal_public_key_xy(generate_keys().public)
    second = marshal_public_key_xy(generate_keys().public)
    assert len({first, second}) == 2
    assert marshal_public_key_xy(unmarshal_public_key(first)) == first
    assert marshal_public_key_xy(unmarshal_public_key(second)) == second