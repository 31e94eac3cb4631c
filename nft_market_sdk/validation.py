"""Input validation helpers."""
from __future__ import annotations

import base64
import binascii
from typing import Any, Optional

from .errors import DecodeError, NftMarketSDKError


def to_int(value: Any, what: str, field_name: str) -> int:
    """Accept a JSON integer, or a decimal string as sent for big amounts."""

    if isinstance(value, bool):
        raise DecodeError.wrong_type(what, field_name, "integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text[:1] in ("-", "+") else text
        if digits.isascii() and digits.isdecimal():
            return int(text)
    raise DecodeError.wrong_type(what, field_name, "integer", value)


def to_str(value: Any, what: str, field_name: str) -> str:
    if not isinstance(value, str):
        raise DecodeError.wrong_type(what, field_name, "string", value)
    return value


def to_bytes(value: Any, what: str, field_name: str) -> bytes:
    """Decode a base64 JSON string; ``null`` decodes to empty bytes."""

    if value is None:
        return b""
    if not isinstance(value, str):
        raise DecodeError.wrong_type(what, field_name, "base64 string", value)
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError.wrong_type(what, field_name, "base64 string", value) from exc


def validate_account_name(account_name: Optional[str]) -> str:
    if account_name is None:
        raise NftMarketSDKError(
            "Invalid account name: No account name provided",
            "VALIDATION_ERROR",
            {"type": "MISSING_ACCOUNT_NAME"},
        )

    account_name = account_name.strip()
    if not account_name:
        raise NftMarketSDKError(
            "Invalid account name: must be a non-empty string",
            "VALIDATION_ERROR",
            {"type": "INVALID_ACCOUNT_NAME", "value": account_name},
        )

    return account_name


def validate_index(value: Any, parameter_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise NftMarketSDKError(
            f"Invalid {parameter_name}: must be a non-negative integer",
            "VALIDATION_ERROR",
            {"type": "INVALID_INDEX", "parameter_name": parameter_name, "value": value},
        )
    return value


def validate_amount(amount: Any, parameter_name: str) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise NftMarketSDKError(
            f"Invalid {parameter_name}: must be an integer",
            "VALIDATION_ERROR",
            {
                "type": "INVALID_AMOUNT",
                "parameter_name": parameter_name,
                "value": amount,
                "reason": "not_integer",
            },
        )
    if amount < 0:
        raise NftMarketSDKError(
            f"Invalid {parameter_name}: must be non-negative",
            "VALIDATION_ERROR",
            {
                "type": "INVALID_AMOUNT",
                "parameter_name": parameter_name,
                "value": amount,
                "reason": "negative",
            },
        )
    return amount
