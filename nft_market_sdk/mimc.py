"""MiMC hash over the BN254 scalar field.

The permutation uses the ``x^7`` round function with 91 round constants derived
by iterating Keccak-256 over the ASCII seed ``"seed"``. Input bytes are split
into 32-byte big-endian blocks, each reduced modulo the field, and absorbed with
the Miyaguchi-Preneel construction. The digest is the final state encoded as a
32-byte big-endian integer.
"""
from __future__ import annotations

from typing import Iterable, List

from Crypto.Hash import keccak

FIELD_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
BLOCK_SIZE = 32
DIGEST_SIZE = 32

_NB_ROUNDS = 91
_SEED = b"seed"


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def _round_constants() -> List[int]:
    constants: List[int] = []
    rnd = _keccak256(_SEED)
    for _ in range(_NB_ROUNDS):
        rnd = _keccak256(rnd)
        constants.append(int.from_bytes(rnd, "big") % FIELD_MODULUS)
    return constants


_CONSTANTS = _round_constants()


def _encrypt(key: int, message: int) -> int:
    for constant in _CONSTANTS:
        message = pow((message + key + constant) % FIELD_MODULUS, 7, FIELD_MODULUS)
    return (message + key) % FIELD_MODULUS


def hash_elements(elements: Iterable[int]) -> int:
    """Absorb already-reduced field elements and return the resulting state."""

    state = 0
    for element in elements:
        element %= FIELD_MODULUS
        state = (_encrypt(state, element) + state + element) % FIELD_MODULUS
    return state


def element_to_bytes(element: int) -> bytes:
    return (element % FIELD_MODULUS).to_bytes(BLOCK_SIZE, "big")


def bytes_to_elements(data: bytes) -> List[int]:
    return [
        int.from_bytes(data[offset : offset + BLOCK_SIZE], "big") % FIELD_MODULUS
        for offset in range(0, len(data), BLOCK_SIZE)
    ]


class MiMC:
    """Incremental :mod:`hashlib`-style interface around :func:`hash_elements`."""

    name = "mimc_bn254"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._buffer = bytearray(data)

    def update(self, data: bytes) -> None:
        self._buffer.extend(data)

    def digest(self) -> bytes:
        return element_to_bytes(hash_elements(bytes_to_elements(bytes(self._buffer))))

    def hexdigest(self) -> str:
        return self.digest().hex()


def mimc_digest(data: bytes) -> bytes:
    return MiMC(data).digest()
