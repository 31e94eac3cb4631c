"""Key managers used by the SDK to sign transactions and messages."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Protocol

from .eddsa import PRIVATE_KEY_SIZE, SEED_SIZE, PrivateKey, PublicKey
from .errors import SigningError
from .mimc import mimc_digest


class KeyManager(Protocol):
    @property
    def public_key(self) -> PublicKey:
        ...

    def sign(self, message: bytes) -> bytes:
        ...


def _decode_hex(value: Optional[str], what: str) -> bytes:
    if value is None:
        raise SigningError.missing_key()
    if not isinstance(value, str):
        raise SigningError.malformed_key(f"{what} must be a hexadecimal string")
    raw = value.strip()
    raw = raw[2:] if raw.startswith(("0x", "0X")) else raw
    if not raw:
        raise SigningError.missing_key()
    try:
        return bytes.fromhex(raw)
    except ValueError as exc:
        raise SigningError.malformed_key(f"{what} must be a hexadecimal string") from exc


def _sign_digest(private_key: PrivateKey, message: bytes) -> bytes:
    digest = mimc_digest(message)
    try:
        return private_key.sign(digest)
    except (ValueError, ArithmeticError) as exc:  # pragma: no cover - defensive
        raise SigningError(f"Signature computation failed: {exc}") from exc


@dataclass(frozen=True)
class SeedKeyManager(KeyManager):
    """Key manager derived from a 32-byte hex seed."""

    seed: str
    _private_key: PrivateKey = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        seed_bytes = _decode_hex(self.seed, "seed")
        if len(seed_bytes) != SEED_SIZE:
            raise SigningError.malformed_key(f"seed must be {SEED_SIZE} bytes, got {len(seed_bytes)}")
        object.__setattr__(self, "_private_key", PrivateKey.from_seed(seed_bytes))

    @property
    def public_key(self) -> PublicKey:
        return self._private_key.public_key

    def sign(self, message: bytes) -> bytes:
        return _sign_digest(self._private_key, message)

    def export_private_key(self) -> str:
        """Return the raw private key accepted by :class:`PrivateKeyManager`."""

        return self._private_key.to_bytes().hex()


@dataclass(frozen=True)
class PrivateKeyManager(KeyManager):
    """Key manager built from a raw ``public_key || scalar || nonce_source`` hex key."""

    private_key: str
    _private_key: PrivateKey = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        key_bytes = _decode_hex(self.private_key, "private key")
        if len(key_bytes) != PRIVATE_KEY_SIZE:
            raise SigningError.malformed_key(
                f"private key must be {PRIVATE_KEY_SIZE} bytes, got {len(key_bytes)}"
            )
        try:
            loaded = PrivateKey.from_bytes(key_bytes)
        except ValueError as exc:
            raise SigningError.malformed_key(str(exc)) from exc
        object.__setattr__(self, "_private_key", loaded)

    @property
    def public_key(self) -> PublicKey:
        return self._private_key.public_key

    def sign(self, message: bytes) -> bytes:
        return _sign_digest(self._private_key, message)


def new_seed_key_manager(seed: str) -> KeyManager:
    return SeedKeyManager(seed)


def new_private_key_manager(private_key: str) -> KeyManager:
    return PrivateKeyManager(private_key)


def verify(public_key: PublicKey, message: bytes, signature: bytes) -> bool:
    """Check a signature produced by :meth:`KeyManager.sign` for ``message``."""

    return public_key.verify(mimc_digest(message), signature)


def sign_message(key_manager: Optional[KeyManager], message: str) -> str:
    """Sign an authentication message and return the signature as hex."""

    if key_manager is None:
        raise SigningError.missing_key()
    return key_manager.sign(message.encode("utf-8")).hex()


def generate_seed() -> str:
    return "0x" + os.urandom(SEED_SIZE).hex()
