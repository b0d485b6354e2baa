"""Pytest fixtures for the PIM client tests."""

from typing import Any, Dict, List, Optional

import httpx
import pytest

from src.integrations.clients.mocks.families import InMemoryFamilyTransport
from src.integrations.clients.real_http.families import FamilyApi
from src.integrations.contracts.errors import TransportError
from src.integrations.contracts.interfaces import ApiTransport

REQUEST_HEADERS = {"Content-Type": "application/json", "X-Call": "single"}
BATCH_HEADERS = {"Content-Type": "application/vnd.akeneo.collection+json", "X-Call": "batch"}


class TrackingStream(httpx.SyncByteStream):
    """Response body that remembers whether it was closed."""

    def __init__(self, chunks: List[bytes]):
        self.chunks = chunks
        self.closed = False

    def __iter__(self):
        for chunk in self.chunks:
            yield chunk

    def close(self):
        self.closed = True


class ScriptedTransport(ApiTransport):
    """Returns queued responses and records every call."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[httpx.Response] = []
        self.streams: List[TrackingStream] = []
        self.error: Optional[Exception] = None

    def reply(self, status_code: int, body: bytes = b"", chunks: Optional[List[bytes]] = None) -> TrackingStream:
        stream = TrackingStream(chunks if chunks is not None else [body])
        self.streams.append(stream)
        self.responses.append(
            httpx.Response(status_code, stream=stream, request=httpx.Request("GET", "http://pim.test/"))
        )
        return stream

    def get_headers_for_request(self):
        return dict(REQUEST_HEADERS)

    def get_headers_for_batch_request(self):
        return dict(BATCH_HEADERS)

    def do_request(self, method, path, headers, body=None, query_params=None):
        self.calls.append(
            {"method": method, "path": path, "headers": headers, "body": body, "query_params": query_params}
        )
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def family_api(transport):
    return FamilyApi(transport)


@pytest.fixture
def memory_transport():
    return InMemoryFamilyTransport()


@pytest.fixture
def unreachable(transport):
    transport.error = TransportError("GET families: connection refused")
    return transport
