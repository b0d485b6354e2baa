"""
Mock PIM Families Transport.

Purpose:
- Provides a fake PIM API for the families endpoints, used for development/testing
- Does NOT make any network calls
- Keeps families in memory and answers with the same status codes and bodies
  the remote API uses

Behavior guidelines:
- GET families honours page / limit / withCount and returns the `_embedded` envelope
- GET families/{code} returns 404 for unknown codes
- POST families returns 201, or 422 when the code is missing or already used
- PATCH families/{code} returns 201 on creation, 204 on update
- PATCH families expects the collection content-type and answers one NDJSON
  line per submitted line
- Single-document writes sent with the collection content-type (and batch
  calls sent without it) get 415

Swap:
Replace with clients/real_http/transport.py (HttpxTransport) when a PIM
instance and credentials are available.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import httpx

from src.integrations.clients.real_http.transport import BATCH_CONTENT_TYPE, JSON_CONTENT_TYPE
from src.integrations.contracts.errors import TransportError
from src.integrations.contracts.interfaces import ApiTransport, Headers, QueryParams

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class InMemoryFamilyTransport(ApiTransport):
    def __init__(self, base_url: str = "http://pim.local/api/rest/v1/") -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.families: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.unavailable = False

    # -- ApiTransport --

    def get_headers_for_request(self) -> Headers:
        return {"Accept": JSON_CONTENT_TYPE, "Content-Type": JSON_CONTENT_TYPE}

    def get_headers_for_batch_request(self) -> Headers:
        return {"Accept": JSON_CONTENT_TYPE, "Content-Type": BATCH_CONTENT_TYPE}

    def do_request(
        self,
        method: str,
        path: str,
        headers: Headers,
        body: Optional[bytes] = None,
        query_params: Optional[QueryParams] = None,
    ) -> httpx.Response:
        self.calls.append(
            {
                "method": method,
                "path": path,
                "headers": dict(headers),
                "body": body,
                "query_params": dict(query_params or {}),
            }
        )
        if self.unavailable:
            raise TransportError(f"{method} {path}: mock PIM API is unavailable")

        status, payload, content_type = self._route(method, path, headers, body, query_params or {})
        request = httpx.Request(method, self._url(path), params=query_params or None)
        if payload is None:
            return httpx.Response(status, request=request)
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload, headers={"Content-Type": content_type}, request=request)
        return httpx.Response(status, json=payload, request=request)

    # -- Routing --

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _route(
        self,
        method: str,
        path: str,
        headers: Headers,
        body: Optional[bytes],
        query: QueryParams,
    ) -> Tuple[int, Any, str]:
        content_type = headers.get("Content-Type", JSON_CONTENT_TYPE)
        parts = path.strip("/").split("/")
        if parts[0] != "families" or len(parts) > 2:
            return 404, _error(404, "Not Found"), JSON_CONTENT_TYPE

        code = unquote(parts[1]) if len(parts) == 2 else None

        if method == "GET":
            if code is None:
                return 200, self._list(query), JSON_CONTENT_TYPE
            return self._get(code)
        if method == "POST" and code is None:
            if content_type != JSON_CONTENT_TYPE:
                return _unsupported(content_type)
            return self._create(body)
        if method == "PATCH" and code is not None:
            if content_type != JSON_CONTENT_TYPE:
                return _unsupported(content_type)
            return self._patch_one(code, body)
        if method == "PATCH":
            if content_type != BATCH_CONTENT_TYPE:
                return _unsupported(content_type)
            return 200, self._patch_many(body), BATCH_CONTENT_TYPE

        return 405, _error(405, "Method Not Allowed"), JSON_CONTENT_TYPE

    # -- Handlers --

    def _list(self, query: QueryParams) -> Dict[str, Any]:
        try:
            page = max(int(query.get("page", "1")), 1)
            limit = min(max(int(query.get("limit", str(DEFAULT_LIMIT))), 1), MAX_LIMIT)
        except ValueError:
            page, limit = 1, DEFAULT_LIMIT

        codes = list(self.families)
        start = (page - 1) * limit
        page_codes = codes[start:start + limit]

        links: Dict[str, Any] = {
            "self": {"href": self._url(f"families?page={page}&limit={limit}")},
            "first": {"href": self._url(f"families?page=1&limit={limit}")},
        }
        if page > 1:
            links["previous"] = {"href": self._url(f"families?page={page - 1}&limit={limit}")}
        if start + limit < len(codes):
            links["next"] = {"href": self._url(f"families?page={page + 1}&limit={limit}")}

        envelope: Dict[str, Any] = {
            "_links": links,
            "current_page": page,
            "_embedded": {
                "items": [
                    {**self.families[c], "_links": {"self": {"href": self._url(f"families/{c}")}}}
                    for c in page_codes
                ]
            },
        }
        if query.get("withCount") == "true":
            envelope["items_count"] = len(codes)
        return envelope

    def _get(self, code: str) -> Tuple[int, Any, str]:
        family = self.families.get(code)
        if family is None:
            return 404, _error(404, f"Family \"{code}\" does not exist."), JSON_CONTENT_TYPE
        return 200, family, JSON_CONTENT_TYPE

    def _create(self, body: Optional[bytes]) -> Tuple[int, Any, str]:
        data, problem = _parse_document(body)
        if problem:
            return 400, _error(400, problem), JSON_CONTENT_TYPE
        status, message = self._validate_new(data)
        if status:
            return status, _error(status, message), JSON_CONTENT_TYPE
        self.families[data["code"]] = data
        return 201, None, JSON_CONTENT_TYPE

    def _patch_one(self, code: str, body: Optional[bytes]) -> Tuple[int, Any, str]:
        data, problem = _parse_document(body)
        if problem:
            return 400, _error(400, problem), JSON_CONTENT_TYPE
        status, message = self._upsert(code, data)
        if status >= 300:
            return status, _error(status, message), JSON_CONTENT_TYPE
        return status, None, JSON_CONTENT_TYPE

    def _patch_many(self, body: Optional[bytes]) -> bytes:
        out: List[bytes] = []
        lines = (body or b"").split(b"\n")
        for position, raw_line in enumerate(lines, start=1):
            if not raw_line.strip():
                continue
            data, problem = _parse_document(raw_line)
            if problem:
                result = {"line": position, "status_code": 400, "message": problem}
            else:
                code = data.get("code")
                if not code:
                    result = {"line": position, "status_code": 422, "message": "Code is missing."}
                else:
                    status, message = self._upsert(code, data)
                    result = {"line": position, "code": code, "status_code": status}
                    if status >= 300:
                        result["message"] = message
            out.append(json.dumps(result).encode("utf-8") + b"\n")
        return b"".join(out)

    # -- Domain rules --

    def _validate_new(self, data: Dict[str, Any]) -> Tuple[int, str]:
        code = data.get("code")
        if not code:
            return 422, "Property \"code\" is required."
        if code in self.families:
            return 422, "The same identifier is already set on another family."
        if not data.get("attribute_as_label"):
            return 422, "Property \"attribute_as_label\" is required."
        return 0, ""

    def _upsert(self, code: str, data: Dict[str, Any]) -> Tuple[int, str]:
        if data.get("code", code) != code:
            return 422, f"The code \"{data.get('code')}\" provided in the request body must match the code \"{code}\" provided in the url."
        existing = self.families.get(code)
        if existing is None:
            status, message = self._validate_new({**data, "code": code})
            if status:
                return status, message
            self.families[code] = {**data, "code": code}
            return 201, ""
        self.families[code] = _merge(existing, data)
        return 204, ""


def _error(code: int, message: str) -> Dict[str, Any]:
    return {"code": code, "message": message}


def _unsupported(content_type: str) -> Tuple[int, Any, str]:
    return 415, _error(415, f"The '{content_type}' content-type is not supported."), JSON_CONTENT_TYPE


def _parse_document(body: Optional[bytes]) -> Tuple[Dict[str, Any], Optional[str]]:
    try:
        data = json.loads((body or b"").decode("utf-8"))
    except ValueError:
        return {}, "Invalid json message received"
    if not isinstance(data, dict):
        return {}, "Invalid json message received"
    return data, None


def _merge(existing: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """Objects are merged key by key; scalars and lists are replaced."""
    merged = dict(existing)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged
