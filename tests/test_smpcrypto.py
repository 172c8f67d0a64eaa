import pytest

from blecore.smpcrypto import (
    aes128,
    aes_cmac,
    is_legacy,
    legacy_pairing_tk,
    smp_c1,
    smp_e,
    smp_f4,
    smp_f5,
    smp_f6,
    smp_g2,
    smp_s1,
    xor_bytes,
)


def test_aes_cmac_empty_message_vector():
    key_be = bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c")
    out = aes_cmac(key_be[::-1], b"")
    assert out[::-1] == bytes.fromhex("bb1d6929e95937287fa37d129b756746")


def test_aes_cmac_rejects_bad_key():
    with pytest.raises(ValueError):
        aes_cmac(bytes(5), b"abc")


def test_aes128_rejects_short_block():
    with pytest.raises(ValueError):
        aes128(bytes(16), bytes(8))


def test_aes128_block_length_and_key_dependence():
    a = aes128(bytes(16), bytes(16))
    b = aes128(bytes([1]) + bytes(15), bytes(16))
    assert len(a) == 16
    assert a != b


def test_xor_bytes_involution():
    a = bytes(range(16))
    b = bytes(range(100, 116))
    assert xor_bytes(xor_bytes(a, b), b) == a
    assert xor_bytes(a, a) == bytes(16)


def test_xor_bytes_short_operand():
    with pytest.raises(ValueError):
        xor_bytes(bytes(4), bytes(3))


def test_c1_spec_sample():
    k = bytes(16)
    r = bytes.fromhex("5783d52156ad6f0e6388274ec6702ee0")[::-1]
    preq = bytes([0x01, 0x01, 0x00, 0x00, 0x10, 0x07, 0x07])
    pres = bytes([0x02, 0x03, 0x00, 0x00, 0x08, 0x00, 0x05])
    ia = bytes([0xA6, 0xA5, 0xA4, 0xA3, 0xA2, 0xA1])
    ra = bytes([0xB6, 0xB5, 0xB4, 0xB3, 0xB2, 0xB1])
    out = smp_c1(k, r, preq, pres, 0x01, 0x00, ia, ra)
    assert out[::-1] == bytes.fromhex("1e1e3fef878988ead2a74dc5bef13b86")


def test_s1_spec_sample():
    k = bytes(16)
    r1 = bytes([0x88, 0x77, 0x66, 0x55, 0x44, 0x33, 0x22, 0x11]) + bytes(8)
    r2 = bytes([0x00, 0xFF, 0xEE, 0xDD, 0xCC, 0xBB, 0xAA, 0x99]) + bytes(8)
    out = smp_s1(k, r1, r2)
    assert out[::-1] == bytes.fromhex("9a1fe1f0e8b0f49b5b4216ae796da062")


def test_s1_ignores_high_halves():
    k = bytes(range(16))
    r1 = bytes(range(16))
    r2 = bytes(range(16, 32))
    r1_alt = r1[:8] + bytes(8)
    r2_alt = r2[:8] + bytes([0xFF] * 8)
    assert smp_s1(k, r1, r2) == smp_s1(k, r1_alt, r2_alt)


@pytest.mark.parametrize(
    "k,r1,r2",
    [(bytes(15), bytes(16), bytes(16)), (bytes(16), bytes(17), bytes(16)), (bytes(16), bytes(16), bytes(1))],
)
def test_s1_length_errors(k, r1, r2):
    with pytest.raises(ValueError, match="s1: invalid length"):
        smp_s1(k, r1, r2)


def test_smp_e_deterministic_and_key_sensitive():
    msg = bytes(range(16))
    assert smp_e(bytes(16), msg) == smp_e(bytes(16), msg)
    assert smp_e(bytes(16), msg) != smp_e(bytes([1] * 16), msg)
    assert len(smp_e(bytes(16), msg)) == 16


def test_f4_output_and_z_sensitivity():
    u = bytes(range(32))
    v = bytes(range(32, 64))
    x = bytes(range(16))
    a = smp_f4(u, v, x, 0)
    b = smp_f4(u, v, x, 0x81)
    assert len(a) == 16
    assert a != b
    assert smp_f4(u, v, x, 0) == a


@pytest.mark.parametrize(
    "u,v,x",
    [(bytes(31), bytes(32), bytes(16)), (bytes(32), bytes(33), bytes(16)), (bytes(32), bytes(32), bytes(15))],
)
def test_f4_length_errors(u, v, x):
    with pytest.raises(ValueError, match="length error"):
        smp_f4(u, v, x, 0)


def test_f5_produces_distinct_keys():
    w = bytes(range(32))
    n1 = bytes(range(16))
    n2 = bytes(range(16, 32))
    a1 = bytes(range(7))
    a2 = bytes(range(7, 14))
    mac_key, ltk = smp_f5(w, n1, n2, a1, a2)
    assert len(mac_key) == 16
    assert len(ltk) == 16
    assert mac_key != ltk
    assert smp_f5(w, n1, n2, a1, a2) == (mac_key, ltk)


def test_f5_length_error():
    with pytest.raises(ValueError):
        smp_f5(bytes(32), bytes(16), bytes(16), bytes(6), bytes(7))


def test_f6_swapping_nonces_changes_result():
    w = bytes(range(16))
    n1 = bytes(range(16, 32))
    n2 = bytes(range(32, 48))
    r = bytes(16)
    io_cap = bytes([1, 2, 3])
    a1 = bytes(7)
    a2 = bytes([1] * 7)
    out = smp_f6(w, n1, n2, r, io_cap, a1, a2)
    assert len(out) == 16
    assert out != smp_f6(w, n2, n1, r, io_cap, a1, a2)


def test_f6_length_error():
    with pytest.raises(ValueError, match="length error"):
        smp_f6(bytes(16), bytes(16), bytes(16), bytes(16), bytes(2), bytes(7), bytes(7))


def test_g2_range():
    value = smp_g2(bytes(range(32)), bytes(range(32, 64)), bytes(16), bytes(range(16)))
    assert 0 <= value < 1_000_000


def test_g2_length_error():
    with pytest.raises(ValueError):
        smp_g2(bytes(32), bytes(32), bytes(16), bytes(15))


@pytest.mark.parametrize("auth_req,legacy", [(0x00, True), (0x01, True), (0x05, True), (0x08, False), (0x09, False), (0x2D, False)])
def test_is_legacy(auth_req, legacy):
    assert is_legacy(auth_req) is legacy


@pytest.mark.parametrize("passkey", [0, 1, 123456, 999999])
def test_legacy_tk_layout(passkey):
    tk = legacy_pairing_tk(passkey)
    assert len(tk) == 16
    assert int.from_bytes(tk, "little") == passkey
    assert tk[4:] == bytes(12)