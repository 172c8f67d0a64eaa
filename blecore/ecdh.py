"""P-256 key agreement for LE Secure Connections, in little-endian wire form."""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from blecore.bytesops import swap_buf

_CURVE = ec.SECP256R1()
_COORD_LEN = 32


@dataclass(frozen=True)
class ECDHKeys:
    """A P-256 key pair."""

    public: ec.EllipticCurvePublicKey
    private: ec.EllipticCurvePrivateKey


def generate_keys() -> ECDHKeys:
    """Generate a fresh P-256 key pair."""
    private = ec.generate_private_key(_CURVE)
    return ECDHKeys(public=private.public_key(), private=private)


def unmarshal_public_key(data: bytes) -> ec.EllipticCurvePublicKey:
    """Decode a 64-byte little-endian X || Y public key; raise ValueError if invalid."""
    data = bytes(data)
    if len(data) != 2 * _COORD_LEN:
        raise ValueError(f"public key must be {2 * _COORD_LEN} bytes, got {len(data)}")
    encoded = b"\x04" + swap_buf(data[:_COORD_LEN]) + swap_buf(data[_COORD_LEN:])
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(_CURVE, encoded)
    except ValueError as exc:
        raise ValueError(f"invalid public key: {exc}") from exc


def _uncompressed(key: ec.EllipticCurvePublicKey) -> bytes:
    return key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)[1:]


def marshal_public_key_xy(key: ec.EllipticCurvePublicKey) -> bytes:
    """Encode ``key`` as little-endian X || Y (64 bytes)."""
    raw = _uncompressed(key)
    return swap_buf(raw[:_COORD_LEN]) + swap_buf(raw[_COORD_LEN:])


def marshal_public_key_x(key: ec.EllipticCurvePublicKey) -> bytes:
    """Encode the X coordinate of ``key`` little-endian (32 bytes)."""
    return swap_buf(_uncompressed(key)[:_COORD_LEN])


def generate_secret(
    private: ec.EllipticCurvePrivateKey, public: ec.EllipticCurvePublicKey
) -> bytes:
    """Compute the little-endian ECDH shared secret (DHKey)."""
    return swap_buf(private.exchange(ec.ECDH(), public))