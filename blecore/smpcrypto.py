"""Security Manager cryptographic toolbox (f4, f5, f6, g2, e, c1, s1).

All inputs and outputs are little-endian byte strings, as they appear on
the air; the AES primitives work on the most-significant-byte-first form,
so values are reversed on the way in and out.
"""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.cmac import CMAC

from blecore.bytesops import swap_buf

_F5_SALT = bytes(
    [
        0xBE, 0x83, 0x60, 0x5A, 0xDB, 0x0B, 0x37, 0x60,
        0x38, 0xA5, 0xF5, 0xAA, 0x91, 0x83, 0x88, 0x6C,
    ]
)
_F5_KEY_ID = bytes([0x65, 0x6C, 0x74, 0x62])  # "btle", little-endian
_F5_LENGTH = bytes([0x00, 0x01])  # 256 bits, little-endian


def _check_len(label: str, value: bytes, expected: int) -> None:
    if len(value) != expected:
        raise ValueError(f"length error {label} got {len(value)}, want {expected}")


def aes_cmac(key: bytes, msg: bytes) -> bytes:
    """AES-CMAC of little-endian ``msg`` under little-endian ``key``."""
    try:
        mac = CMAC(algorithms.AES(swap_buf(key)))
    except ValueError as exc:
        raise ValueError(f"invalid CMAC key: {exc}") from exc
    mac.update(swap_buf(msg))
    return swap_buf(mac.finalize())


def aes128(key: bytes, msg: bytes) -> bytes:
    """Encrypt one 16-byte block with AES-128 (big-endian byte order)."""
    _check_len("key", key, 16)
    _check_len("msg", msg, 16)
    encryptor = Cipher(algorithms.AES(bytes(key)), modes.ECB()).encryptor()
    return encryptor.update(bytes(msg)) + encryptor.finalize()


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR ``a`` with the leading bytes of ``b``; the result is as long as ``a``."""
    if len(b) < len(a):
        raise ValueError(f"xor operand too short: {len(b)} < {len(a)}")
    return bytes(x ^ y for x, y in zip(a, b))


def smp_f4(u: bytes, v: bytes, x: bytes, z: int) -> bytes:
    """LE Secure Connections confirm value function f4."""
    _check_len("u", u, 32)
    _check_len("v", v, 32)
    _check_len("x", x, 16)
    return aes_cmac(x, bytes([z]) + bytes(v) + bytes(u))


def smp_f5(
    w: bytes, n1: bytes, n2: bytes, a1: bytes, a2: bytes
) -> tuple[bytes, bytes]:
    """Key generation function f5; returns ``(mac_key, ltk)``."""
    _check_len("w", w, 32)
    _check_len("n1", n1, 16)
    _check_len("n2", n2, 16)
    _check_len("a1", a1, 7)
    _check_len("a2", a2, 7)

    t = aes_cmac(_F5_SALT, w)
    body = _F5_LENGTH + bytes(a2) + bytes(a1) + bytes(n2) + bytes(n1) + _F5_KEY_ID
    mac_key = aes_cmac(t, body + b"\x00")
    ltk = aes_cmac(t, body + b"\x01")
    return mac_key, ltk


def smp_f6(
    w: bytes,
    n1: bytes,
    n2: bytes,
    r: bytes,
    io_cap: bytes,
    a1: bytes,
    a2: bytes,
) -> bytes:
    """Check value function f6 = AES-CMAC_W(N1 || N2 || R || IOcap || A1 || A2)."""
    if (
        len(w) != 16
        or len(n1) != 16
        or len(n2) != 16
        or len(r) != 16
        or len(io_cap) != 3
        or len(a1) != 7
        or len(a2) != 7
    ):
        raise ValueError("length error")
    msg = bytes(a2) + bytes(a1) + bytes(io_cap) + bytes(r) + bytes(n2) + bytes(n1)
    return aes_cmac(w, msg)


def smp_g2(u: bytes, v: bytes, x: bytes, y: bytes) -> int:
    """Numeric comparison value g2, reduced to six decimal digits."""
    if len(u) != 32 or len(v) != 32 or len(x) != 16 or len(y) != 16:
        raise ValueError("length error")
    h = aes_cmac(x, bytes(y) + bytes(v) + bytes(u))
    return int.from_bytes(h[:4], "little") % 1_000_000


def smp_e(key: bytes, msg: bytes) -> bytes:
    """Security function e: AES-128 on little-endian key and block."""
    return swap_buf(aes128(swap_buf(key), swap_buf(msg)))


def smp_c1(
    k: bytes,
    r: bytes,
    preq: bytes,
    pres: bytes,
    iat: int,
    rat: int,
    ia: bytes,
    ra: bytes,
) -> bytes:
    """Legacy pairing confirm value function c1."""
    # p1 = pres || preq || rat' || iat', p2 = padding || ia || ra (little-endian)
    p1 = bytes([iat, rat]) + bytes(preq) + bytes(pres)
    p2 = bytes(ra) + bytes(ia) + bytes(4)
    try:
        first = smp_e(k, xor_bytes(r, p1))
    except ValueError as exc:
        raise ValueError(f"failed to encrypt r xor p1: {exc}") from exc
    try:
        return smp_e(k, xor_bytes(first, p2))
    except ValueError as exc:
        raise ValueError(f"failed to encrypt e(r xor p1) xor p2: {exc}") from exc


def smp_s1(k: bytes, r1: bytes, r2: bytes) -> bytes:
    """Legacy short-term key generation function s1."""
    if len(k) != 16:
        raise ValueError(f"s1: invalid length for k: {len(k)}")
    if len(r1) != 16:
        raise ValueError(f"s1: invalid length for r1: {len(r1)}")
    if len(r2) != 16:
        raise ValueError(f"s1: invalid length for r2: {len(r2)}")
    return smp_e(k, bytes(r2[:8]) + bytes(r1[:8]))


def is_legacy(auth_req: int) -> bool:
    """Report whether the AuthReq field lacks the Secure Connections bit."""
    return auth_req & 0x08 != 0x08


def legacy_pairing_tk(passkey: int) -> bytes:
    """Temporary key for legacy passkey pairing, little-endian, 16 bytes."""
    return (passkey & 0xFFFFFFFF).to_bytes(4, "little") + bytes(12)