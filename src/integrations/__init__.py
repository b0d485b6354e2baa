"""
Integrations layer.
This package contains all code used to communicate with the remote PIM REST API:
- contracts: the types exchanged with the API and the transport interface
- policy: query filtering and response decoding shared by every endpoint
- clients: endpoint services, the real HTTP transport and the in-memory mock

Key rule:
- Calling code MUST NOT talk HTTP directly.
- It goes through PimClient (or an endpoint service such as FamilyApi).
- We use the MOCK transport during development and swap to the REAL_HTTP
  transport when a PIM instance is available.

Switching implementations:
- The selection of mock vs real transport happens in ONE place (PimClient.from_config).
"""

from .client import PimClient
from .contracts.errors import ApiError, TransportError
from .contracts.families import FamiliesResponse, Family, FamilyItem
from .contracts.interfaces import ApiTransport, RequestOpts
from .contracts.responses import BatchResultLine, BatchUpsertReport, LineErrorDetail, Link, ResponseLinks
from .clients.real_http.families import FamilyApi
from .clients.real_http.transport import HttpxTransport
from .clients.mocks.families import InMemoryFamilyTransport
from .policy.query_params import LIST_QUERY_KEYS, build_query_params

__all__ = [
    # client
    "PimClient", "FamilyApi", "HttpxTransport", "InMemoryFamilyTransport",
    # contracts
    "ApiError", "TransportError", "ApiTransport", "RequestOpts",
    "FamiliesResponse", "Family", "FamilyItem",
    "BatchResultLine", "BatchUpsertReport", "LineErrorDetail", "Link", "ResponseLinks",
    # policy
    "LIST_QUERY_KEYS", "build_query_params",
]
