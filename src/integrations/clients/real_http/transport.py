"""
Real PIM HTTP transport.

Purpose:
- Sends requests built by the endpoint services to the PIM REST API
- Injects the bearer token and the content-type each call family needs

Implementation notes:
- Uses a single httpx.Client (connection pooling, TLS, timeouts live here)
- Responses are returned in streaming mode; the endpoint service closes them
- Token acquisition/refresh is handled upstream: this transport receives an
  already valid access token

Important:
- Single-document calls and NDJSON batch calls use different headers.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from src.integrations.contracts.errors import TransportError
from src.integrations.contracts.interfaces import ApiTransport, Headers, QueryParams
from src.utils.config_loader import ClientConfig

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
BATCH_CONTENT_TYPE = "application/vnd.akeneo.collection+json"


class HttpxTransport(ApiTransport):
    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        timeout_seconds: float = 20.0,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.access_token = access_token or ""
        self.user_agent = user_agent
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "HttpxTransport":
        return cls(
            base_url=config.base_url,
            access_token=config.access_token,
            timeout_seconds=config.timeout_seconds,
            user_agent=config.user_agent,
        )

    def _base_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": JSON_CONTENT_TYPE}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    def get_headers_for_request(self) -> Headers:
        headers = self._base_headers()
        headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    def get_headers_for_batch_request(self) -> Headers:
        headers = self._base_headers()
        headers["Content-Type"] = BATCH_CONTENT_TYPE
        return headers

    def do_request(
        self,
        method: str,
        path: str,
        headers: Headers,
        body: Optional[bytes] = None,
        query_params: Optional[QueryParams] = None,
    ) -> httpx.Response:
        request = self._client.build_request(
            method,
            path,
            headers=headers,
            content=body,
            params=query_params or None,
        )
        logger.debug("Sending %s %s", method, request.url)
        try:
            return self._client.send(request, stream=True)
        except httpx.RequestError as exc:
            logger.warning("Request error calling PIM API %s %s: %s", method, path, exc)
            raise TransportError(f"{method} {path}: {exc}") from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
