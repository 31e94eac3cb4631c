"""Deterministic EdDSA over the twisted Edwards curve embedded in BN254.

The curve is ``-x^2 + y^2 = 1 + d*x^2*y^2`` over the BN254 scalar field. Keys
are expanded from a 32-byte seed with BLAKE2b-512: the first half is clamped
into the signing scalar, the second half becomes the nonce source. Nonces are
derived from the nonce source and the message, so signing never consumes
randomness. Challenges are computed with MiMC over ``R.x, R.y, A.x, A.y, M``.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Optional, Tuple

from .mimc import FIELD_MODULUS, bytes_to_elements, hash_elements

Point = Tuple[int, int]

CURVE_D = 12181644023421730124874158521699555681764249180949974110617291017600649128846
CURVE_ORDER = 2736030358979909402780800718157159386076813972158567259200215660948447373041
BASE_POINT: Point = (
    9671717474070082183213120605117400219616337014328744928644933853176787189663,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)
IDENTITY: Point = (0, 1)

SEED_SIZE = 32
SCALAR_SIZE = 32
POINT_SIZE = 32
SIGNATURE_SIZE = POINT_SIZE + SCALAR_SIZE
PRIVATE_KEY_SIZE = POINT_SIZE + SCALAR_SIZE + SEED_SIZE

_SIGN_BIT = 0x80
_P = FIELD_MODULUS


def is_on_curve(point: Point) -> bool:
    x, y = point
    xx = x * x % _P
    yy = y * y % _P
    return (yy - xx) % _P == (1 + CURVE_D * xx * yy) % _P


def point_add(first: Point, second: Point) -> Point:
    x1, y1 = first
    x2, y2 = second
    t = CURVE_D * x1 * x2 * y1 * y2 % _P
    x3 = (x1 * y2 + y1 * x2) * pow((1 + t) % _P, -1, _P) % _P
    y3 = (y1 * y2 + x1 * x2) * pow((1 - t) % _P, -1, _P) % _P
    return (x3, y3)


def scalar_mul(point: Point, scalar: int) -> Point:
    result = IDENTITY
    addend = point
    while scalar > 0:
        if scalar & 1:
            result = point_add(result, addend)
        addend = point_add(addend, addend)
        scalar >>= 1
    return result


def _sqrt(value: int) -> Optional[int]:
    """Tonelli-Shanks square root modulo the field, or ``None`` for non-residues."""

    value %= _P
    if value == 0:
        return 0
    if pow(value, (_P - 1) // 2, _P) != 1:
        return None

    q, s = _P - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while pow(z, (_P - 1) // 2, _P) != _P - 1:
        z += 1

    m = s
    c = pow(z, q, _P)
    t = pow(value, q, _P)
    root = pow(value, (q + 1) // 2, _P)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % _P
            i += 1
        b = pow(c, 1 << (m - i - 1), _P)
        m = i
        c = b * b % _P
        t = t * c % _P
        root = root * b % _P
    return root


def compress_point(point: Point) -> bytes:
    x, y = point
    encoded = bytearray(y.to_bytes(POINT_SIZE, "big"))
    if x > (_P - 1) // 2:
        encoded[0] |= _SIGN_BIT
    return bytes(encoded)


def decompress_point(data: bytes) -> Point:
    if len(data) != POINT_SIZE:
        raise ValueError("compressed point must be 32 bytes")
    negative = bool(data[0] & _SIGN_BIT)
    y = int.from_bytes(bytes([data[0] & ~_SIGN_BIT & 0xFF]) + data[1:], "big")
    if y >= _P:
        raise ValueError("point coordinate is not a field element")
    yy = y * y % _P
    x = _sqrt((yy - 1) * pow((CURVE_D * yy + 1) % _P, -1, _P))
    if x is None:
        raise ValueError("point is not on the curve")
    if (x > (_P - 1) // 2) != negative:
        x = (-x) % _P
    return (x, y)


def _challenge(r_point: Point, public_point: Point, message: bytes) -> int:
    elements = [r_point[0], r_point[1], public_point[0], public_point[1]]
    elements.extend(bytes_to_elements(message))
    return hash_elements(elements)


@dataclass(frozen=True)
class PublicKey:
    point: Point

    def to_bytes(self) -> bytes:
        return compress_point(self.point)

    def hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        return cls(decompress_point(data))

    def verify(self, message: bytes, signature: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE:
            return False
        try:
            r_point = decompress_point(signature[:POINT_SIZE])
        except ValueError:
            return False
        s = int.from_bytes(signature[POINT_SIZE:], "big")
        if s >= CURVE_ORDER:
            return False
        challenge = _challenge(r_point, self.point, message)
        left = scalar_mul(BASE_POINT, s)
        right = point_add(r_point, scalar_mul(self.point, challenge))
        return left == right


@dataclass(frozen=True)
class PrivateKey:
    scalar: int
    nonce_source: bytes
    public_key: PublicKey

    @classmethod
    def from_seed(cls, seed: bytes) -> "PrivateKey":
        if len(seed) != SEED_SIZE:
            raise ValueError(f"seed must be {SEED_SIZE} bytes")
        expanded = bytearray(hashlib.blake2b(seed, digest_size=64).digest())
        expanded[0] &= 0xF8
        expanded[31] &= 0x7F
        expanded[31] |= 0x40
        scalar = int.from_bytes(bytes(expanded[:SCALAR_SIZE]), "little")
        return cls(scalar, bytes(expanded[SCALAR_SIZE:]), PublicKey(scalar_mul(BASE_POINT, scalar)))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PrivateKey":
        """Load the ``public_key || scalar || nonce_source`` record written by :meth:`to_bytes`."""

        if len(data) != PRIVATE_KEY_SIZE:
            raise ValueError(f"private key must be {PRIVATE_KEY_SIZE} bytes")
        scalar = int.from_bytes(data[POINT_SIZE : POINT_SIZE + SCALAR_SIZE], "big")
        if scalar == 0:
            raise ValueError("private scalar must be non-zero")
        public_key = PublicKey(scalar_mul(BASE_POINT, scalar))
        if public_key.to_bytes() != data[:POINT_SIZE]:
            raise ValueError("public key does not match private scalar")
        return cls(scalar, bytes(data[POINT_SIZE + SCALAR_SIZE :]), public_key)

    def to_bytes(self) -> bytes:
        return self.public_key.to_bytes() + self.scalar.to_bytes(SCALAR_SIZE, "big") + self.nonce_source

    def sign(self, message: bytes) -> bytes:
        nonce_digest = hashlib.blake2b(self.nonce_source + message, digest_size=64).digest()
        nonce = int.from_bytes(nonce_digest[:SCALAR_SIZE], "big")
        r_point = scalar_mul(BASE_POINT, nonce)
        challenge = _challenge(r_point, self.public_key.point, message)
        s = (nonce + challenge * self.scalar) % CURVE_ORDER
        return compress_point(r_point) + s.to_bytes(SCALAR_SIZE, "big")
