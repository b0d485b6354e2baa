from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import httpx


# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

# Caller-supplied options for list calls (page, limit, withCount, ...).
RequestOpts = Mapping[str, Any]

Headers = Dict[str, str]
QueryParams = Dict[str, str]


# ---------------------------------------------------------------------------
# Abstract transport interface
# ---------------------------------------------------------------------------

class ApiTransport(ABC):
    """
    Every transport used by the endpoint services must implement this interface.

    The transport owns authentication, connection handling and timeouts.
    Endpoint services only decide method, path, headers, body and query,
    and are responsible for closing the response they receive.
    """

    # -- Headers --

    @abstractmethod
    def get_headers_for_request(self) -> Headers:
        """Headers for single-document JSON calls (list, get, create, upsert)."""

    @abstractmethod
    def get_headers_for_batch_request(self) -> Headers:
        """Headers for NDJSON batch calls; declares the collection content type."""

    # -- Dispatch --

    @abstractmethod
    def do_request(
        self,
        method: str,
        path: str,
        headers: Headers,
        body: Optional[bytes] = None,
        query_params: Optional[QueryParams] = None,
    ) -> httpx.Response:
        """
        Send one request and return the (possibly streamed) response.

        Raises TransportError when no response could be obtained.
        The caller must close the returned response.
        """
