"""Custom exceptions for the NFT marketplace Python SDK."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(eq=False)
class NftMarketSDKError(Exception):
    """Base exception raised by the NFT marketplace SDK."""

    message: str
    code: str
    details: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    @classmethod
    def no_key_manager_error(cls) -> "NftMarketSDKError":
        return cls(
            "This method requires a key manager. Please provide one to the NftMarketClient constructor.",
            "NO_KEY_MANAGER",
        )

    @classmethod
    def invalid_response_error(cls, url: str, payload: Any) -> "NftMarketSDKError":
        return cls(
            f"Unexpected response from {url}",
            "INVALID_RESPONSE",
            {"url": url, "payload": payload},
        )

    @classmethod
    def from_http_response(
        cls, url: str, status: int, body: Any, error_key: Optional[str], message: Optional[str]
    ) -> "NftMarketSDKError":
        if error_key and message:
            return cls(
                f"Marketplace Error {error_key} from {url}: {message}",
                error_key,
                {
                    "message": message,
                    "error_key": error_key,
                    "status": status,
                    "body": body,
                    "url": url,
                },
            )

        return cls(
            f"Unexpected HTTP Error {status} from {url}",
            "HTTP_ERROR",
            {"status": status, "body": body, "url": url},
        )


class DecodeError(NftMarketSDKError):
    """A template or attribute list does not have the expected shape."""

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message, "DECODE_ERROR", details)

    @classmethod
    def invalid_json(cls, what: str, exc: Exception) -> "DecodeError":
        return cls(f"Invalid JSON for {what}: {exc}", {"what": what})

    @classmethod
    def missing_field(cls, what: str, field_name: str) -> "DecodeError":
        return cls(
            f"Missing field {field_name!r} in {what}",
            {"what": what, "field": field_name},
        )

    @classmethod
    def wrong_type(cls, what: str, field_name: str, expected: str, value: Any) -> "DecodeError":
        return cls(
            f"Invalid field {field_name!r} in {what}: expected {expected}",
            {"what": what, "field": field_name, "expected": expected, "value": value},
        )


class SigningError(NftMarketSDKError):
    """The key is absent or malformed, or the signature could not be computed."""

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message, "SIGNING_ERROR", details)

    @classmethod
    def missing_key(cls) -> "SigningError":
        return cls("No signing key available")

    @classmethod
    def malformed_key(cls, reason: str) -> "SigningError":
        return cls(f"Malformed signing key: {reason}", {"reason": reason})


class SerializeError(NftMarketSDKError):
    """A signed transaction cannot be encoded to its wire form."""

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message, "SERIALIZE_ERROR", details)

    @classmethod
    def field_out_of_range(cls, field_name: str, value: Any) -> "SerializeError":
        return cls(
            f"Field {field_name!r} cannot be encoded as a field element",
            {"field": field_name, "value": value},
        )
