"""Signed-message and wire encodings for transaction templates."""
from __future__ import annotations

import base64
import dataclasses
import json
from typing import Any, Dict, List

from Crypto.Hash import keccak

from .errors import SerializeError
from .mimc import FIELD_MODULUS, element_to_bytes, hash_elements
from .types.txs import SIG_FIELD


def _digest_element(data: bytes) -> int:
    return int.from_bytes(keccak.new(digest_bits=256, data=data).digest(), "big") % FIELD_MODULUS


def _field_element(codec: str, value: Any, field_name: str) -> int:
    if codec == "int":
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < FIELD_MODULUS:
            raise SerializeError.field_out_of_range(field_name, value)
        return value
    if codec == "str":
        if not isinstance(value, str):
            raise SerializeError.field_out_of_range(field_name, value)
        return _digest_element(value.encode("utf-8"))
    if codec == "bytes":
        if not isinstance(value, (bytes, bytearray)):
            raise SerializeError.field_out_of_range(field_name, value)
        return _digest_element(bytes(value))
    if codec == "offer":
        # Embedded offers are bound together with their signature.
        elements = message_elements(value, include_sig=True)
        return hash_elements(elements)
    raise SerializeError(f"Unsupported codec {codec!r} for {field_name}")  # pragma: no cover


def message_elements(template: Any, tag: int = 0, include_sig: bool = False) -> List[int]:
    """Field elements covering every field of ``template`` in declaration order."""

    elements = [tag] if tag else []
    for field in dataclasses.fields(template):
        value = getattr(template, field.name)
        if field.name == SIG_FIELD:
            if include_sig:
                elements.append(_digest_element(value or b""))
            continue
        elements.append(_field_element(field.metadata["codec"], value, field.metadata["json"]))
    return elements


def signing_message(template: Any, tag: int) -> bytes:
    """Concatenated 32-byte big-endian elements handed to the key manager."""

    return b"".join(element_to_bytes(element) for element in message_elements(template, tag))


def to_wire_dict(template: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for field in dataclasses.fields(template):
        value = getattr(template, field.name)
        codec = field.metadata["codec"]
        if codec == "offer":
            payload[field.metadata["json"]] = to_wire_dict(value)
        elif codec == "bytes":
            payload[field.metadata["json"]] = (
                None if value is None else base64.b64encode(bytes(value)).decode("ascii")
            )
        else:
            payload[field.metadata["json"]] = value
    return payload


def serialize_tx(template: Any) -> str:
    """Encode a signed template as the compact JSON string the backend accepts."""

    try:
        return json.dumps(to_wire_dict(template), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializeError(
            f"Cannot serialize {type(template).__name__}: {exc}",
            {"template": type(template).__name__},
        ) from exc
