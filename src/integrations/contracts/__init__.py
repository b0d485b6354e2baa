"""
Integration contracts.

Defines the structures exchanged with the remote PIM API:
- the transport interface every HTTP client (real or mock) implements
- the family resource and its list envelope
- batch result lines and the ApiError raised on failures

Why:
- Endpoint services, real transports and mocks all speak the same types
- Keeps wire details (aliases like `_links`, `_embedded`) out of calling code
"""
from .errors import ApiError, TransportError
from .families import EmbeddedFamilies, FamiliesResponse, Family, FamilyItem
from .interfaces import ApiTransport, Headers, QueryParams, RequestOpts
from .responses import BatchResultLine, BatchUpsertReport, LineErrorDetail, Link, ResponseLinks

__all__ = [
    "ApiError", "TransportError",
    "EmbeddedFamilies", "FamiliesResponse", "Family", "FamilyItem",
    "ApiTransport", "Headers", "QueryParams", "RequestOpts",
    "BatchResultLine", "BatchUpsertReport", "LineErrorDetail", "Link", "ResponseLinks",
]
