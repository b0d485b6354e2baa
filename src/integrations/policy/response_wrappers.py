"""
Response decoding shared by every resource endpoint.

Two modes:
- single document: the whole body is one JSON document decoded into a model
- NDJSON: every line is one JSON document decoded into a model, in arrival order

Status failures are checked before any decoding: the body is then returned to
the caller verbatim as the error message, never parsed.
"""
from __future__ import annotations

from typing import Iterator, List, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.integrations.contracts.errors import ApiError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Create treats 3xx as success; every other operation fails from 300 up.
DEFAULT_ERROR_THRESHOLD = 300
CREATE_ERROR_THRESHOLD = 400


def status_text(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


def raise_for_status(response: httpx.Response, threshold: int = DEFAULT_ERROR_THRESHOLD) -> None:
    if response.status_code < threshold:
        return
    try:
        raw = response.read().decode("utf-8", errors="replace")
    except httpx.HTTPError as exc:
        raw = f"failed to read error body: {exc}"
    raise ApiError(raw, code=response.status_code, status=status_text(response))


def decode_document(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    try:
        return model.model_validate_json(response.read())
    except ValidationError as exc:
        raise ApiError(f"Response decoding failed: {exc}") from exc
    except httpx.HTTPError as exc:
        raise ApiError(f"Response body could not be read: {exc}") from exc


def _iter_ndjson_lines(response: httpx.Response) -> Iterator[bytes]:
    """Split the body on b"\\n" only, dropping one trailing b"\\r" per line."""
    pending = b""
    for chunk in response.iter_bytes():
        pending += chunk
        *complete, pending = pending.split(b"\n")
        for line in complete:
            yield line[:-1] if line.endswith(b"\r") else line
    if pending:
        yield pending[:-1] if pending.endswith(b"\r") else pending


def decode_ndjson(response: httpx.Response, model: Type[ModelT]) -> List[ModelT]:
    """
    Decode an NDJSON body into an ordered list of models.

    All or nothing: the first undecodable line aborts the scan and nothing
    decoded so far is returned. Blank lines carry no document and are skipped.
    Only b"\\n" separates documents; U+2028 and friends may appear raw inside
    JSON strings.
    """
    decoded: List[ModelT] = []
    position = 0
    try:
        for raw_line in _iter_ndjson_lines(response):
            position += 1
            if not raw_line.strip():
                continue
            try:
                decoded.append(model.model_validate_json(raw_line))
            except ValidationError as exc:
                raise ApiError(f"Response line {position} decoding failed: {exc}") from exc
    except httpx.HTTPError as exc:
        raise ApiError(f"Response stream could not be read: {exc}") from exc

    return decoded
