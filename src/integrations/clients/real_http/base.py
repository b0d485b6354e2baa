"""
Generic endpoint service.

Shared request/response machinery for every PIM resource endpoint:
- single-document calls (list, get, create, upsert)
- NDJSON batch calls with per-line result correlation

Resource services (families, ...) subclass ApiService and only decide paths,
payloads and result types.

Important:
- Every response obtained from the transport is closed before returning,
  on success and on failure.
- Failures are raised as ApiError; nothing is retried here.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from src.integrations.contracts.errors import ApiError, TransportError
from src.integrations.contracts.interfaces import ApiTransport, Headers, QueryParams
from src.integrations.policy.response_wrappers import (
    DEFAULT_ERROR_THRESHOLD,
    decode_document,
    decode_ndjson,
    raise_for_status,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def encode_json(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def encode_ndjson(payloads: Iterable[Dict[str, Any]]) -> bytes:
    """One JSON document per line, each line newline-terminated, no enclosing array."""
    return b"".join(encode_json(payload) + b"\n" for payload in payloads)


def resource_path(collection: str, code: str) -> str:
    return f"{collection}/{quote(code, safe='')}"


class ApiService:
    def __init__(self, transport: ApiTransport) -> None:
        self.transport = transport

    def _dispatch(
        self,
        method: str,
        path: str,
        headers: Headers,
        body: Optional[bytes] = None,
        query_params: Optional[QueryParams] = None,
    ) -> httpx.Response:
        logger.debug("Dispatching %s %s", method, path)
        try:
            return self.transport.do_request(method, path, headers, body, query_params)
        except TransportError as exc:
            raise ApiError(str(exc)) from exc

    def _fetch(self, path: str, model: Type[ModelT], query_params: Optional[QueryParams] = None) -> ModelT:
        headers = self.transport.get_headers_for_request()
        response = self._dispatch("GET", path, headers, None, query_params)
        try:
            raise_for_status(response, DEFAULT_ERROR_THRESHOLD)
            return decode_document(response, model)
        finally:
            response.close()

    def _send(self, method: str, path: str, payload: Dict[str, Any], threshold: int) -> None:
        headers = self.transport.get_headers_for_request()
        response = self._dispatch(method, path, headers, encode_json(payload))
        try:
            raise_for_status(response, threshold)
        finally:
            response.close()

    def _send_batch(
        self,
        method: str,
        path: str,
        payloads: Iterable[Dict[str, Any]],
        model: Type[ModelT],
    ) -> List[ModelT]:
        headers = self.transport.get_headers_for_batch_request()
        response = self._dispatch(method, path, headers, encode_ndjson(payloads))
        try:
            raise_for_status(response, DEFAULT_ERROR_THRESHOLD)
            return decode_ndjson(response, model)
        finally:
            response.close()
