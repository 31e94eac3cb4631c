"""HTTP transport for the marketplace and legend backends."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import requests

from .errors import NftMarketSDKError

logger = logging.getLogger(__name__)

HttpRequestor = Callable[[str, Mapping[str, Any]], requests.Response]


def _decode_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_fields(payload: Any) -> Tuple[Optional[str], Optional[str]]:
    """Pull an error key and message out of a failed response body.

    The marketplace answers with a flat ``{"code": ..., "message": ...}``
    object; the hasura action endpoints nest it under ``error``.
    """

    if not isinstance(payload, Mapping):
        return None, None
    source = payload.get("error")
    if not isinstance(source, Mapping):
        source = payload
    key = source.get("ErrorKey") or source.get("errorKey") or source.get("code")
    message = source.get("Message") or source.get("message")
    return (str(key) if key is not None else None), message


@dataclass
class HttpClient:
    """Thin wrapper around :mod:`requests` that raises SDK errors on failure."""

    requestor: Optional[HttpRequestor] = None
    user_agent: str = "python-nft-market-sdk/0.1"
    timeout: float = 30

    def __post_init__(self) -> None:
        if self.requestor is None:
            session = requests.Session()

            def _requestor(url: str, kwargs: Mapping[str, Any]) -> requests.Response:
                return session.request(url=url, **dict(kwargs))

            self.requestor = _requestor

    def request(self, method: str, url: str, **options: Any) -> Any:
        """Send ``method`` to ``url`` and return the decoded body.

        ``options`` are handed to the requestor as-is (``params``, ``json``,
        ``data``); the user agent and timeout are filled in here.
        """

        headers: Dict[str, str] = {"User-Agent": self.user_agent}
        if "json" in options:
            headers["Content-Type"] = "application/json"
        kwargs: Dict[str, Any] = {"method": method, "headers": headers, "timeout": self.timeout}
        kwargs.update(options)

        assert self.requestor is not None
        logger.debug("%s %s", method, url)
        response = self.requestor(url, kwargs)
        payload = _decode_body(response)

        if not response.ok:
            error_key, message = _error_fields(payload)
            raise NftMarketSDKError.from_http_response(
                url, response.status_code, payload, error_key, message
            )
        return payload

    @staticmethod
    def build_url(base_url: str, base_path: str, endpoint: str) -> str:
        return f"{base_url.rstrip('/')}{base_path}{endpoint}"

    def send_post_request(
        self,
        base_url: str,
        base_path: str,
        endpoint: str,
        body: Mapping[str, Any],
    ) -> Any:
        return self.request("POST", self.build_url(base_url, base_path, endpoint), json=body)

    def send_form_request(
        self,
        base_url: str,
        base_path: str,
        endpoint: str,
        form: Mapping[str, str],
    ) -> Any:
        return self.request("POST", self.build_url(base_url, base_path, endpoint), data=form)

    def send_get_request(
        self,
        base_url: str,
        base_path: str,
        endpoint: str,
        params: Optional[Mapping[str, str]] = None,
    ) -> Any:
        url = self.build_url(base_url, base_path, endpoint)
        if params:
            return self.request("GET", url, params=params)
        return self.request("GET", url)
