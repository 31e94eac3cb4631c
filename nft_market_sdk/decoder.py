"""Decode backend JSON templates into typed transaction structures."""
from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, Dict, Mapping, Type, TypeVar, Union

from .errors import DecodeError
from .types.txs import TEMPLATE_TYPES, OfferTxInfo, TxKind
from .validation import to_bytes, to_int, to_str

logger = logging.getLogger(__name__)

T = TypeVar("T")

TemplateInput = Union[str, bytes, Mapping[str, Any], Any]


def parse_tx_kind(kind: Union[TxKind, str]) -> TxKind:
    if isinstance(kind, TxKind):
        return kind
    try:
        return TxKind(kind)
    except ValueError as exc:
        raise DecodeError(f"Unknown transaction kind {kind!r}", {"kind": kind}) from exc


def _decode_value(codec: str, value: Any, what: str, field_name: str) -> Any:
    if codec == "int":
        return to_int(value, what, field_name)
    if codec == "str":
        return to_str(value, what, field_name)
    if codec == "bytes":
        return to_bytes(value, what, field_name)
    if codec == "offer":
        return decode_template(OfferTxInfo, value)
    raise DecodeError(f"Unsupported codec {codec!r} for {field_name}")  # pragma: no cover


def decode_template(template_type: Type[T], payload: TemplateInput) -> T:
    """Build ``template_type`` from a JSON document or an already-parsed mapping."""

    what = template_type.__name__
    if isinstance(payload, template_type):
        return payload
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise DecodeError.invalid_json(what, exc) from exc
    if not isinstance(payload, Mapping):
        raise DecodeError.wrong_type(what, "<root>", "JSON object", payload)

    values: Dict[str, Any] = {}
    for field in dataclasses.fields(template_type):
        json_key = field.metadata["json"]
        if json_key not in payload:
            if field.default is dataclasses.MISSING:
                raise DecodeError.missing_field(what, json_key)
            continue
        raw = payload[json_key]
        if raw is None and field.name == "sig":
            values[field.name] = None
            continue
        values[field.name] = _decode_value(field.metadata["codec"], raw, what, json_key)

    return template_type(**values)


def decode_tx_template(kind: Union[TxKind, str], payload: TemplateInput) -> Any:
    """Decode the template for ``kind``; raises :class:`DecodeError` on shape mismatch."""

    tx_kind = parse_tx_kind(kind)
    template = decode_template(TEMPLATE_TYPES[tx_kind], payload)
    logger.debug("decoded %s template", tx_kind.value)
    return template
