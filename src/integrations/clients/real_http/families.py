"""
Family endpoint service.

Maps the five family operations onto the PIM REST API:
- get_all       GET   families{?page,limit,withCount}
- get           GET   families/{code}
- create        POST  families
- upsert        PATCH families/{code}
- batch_upsert  PATCH families   (NDJSON body, one family per line)

Usage:
- Reached through PimClient.families
- Works with any ApiTransport (HttpxTransport or InMemoryFamilyTransport)
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from src.integrations.clients.real_http.base import ApiService, resource_path
from src.integrations.contracts.families import FamiliesResponse, Family
from src.integrations.contracts.interfaces import RequestOpts
from src.integrations.contracts.responses import BatchResultLine
from src.integrations.policy.query_params import build_query_params
from src.integrations.policy.response_wrappers import CREATE_ERROR_THRESHOLD, DEFAULT_ERROR_THRESHOLD

FAMILIES_PATH = "families"


class FamilyApi(ApiService):
    def get_all(self, opts: Optional[RequestOpts] = None) -> FamiliesResponse:
        """List one page of families. Only page, limit and withCount are forwarded."""
        return self._fetch(FAMILIES_PATH, FamiliesResponse, build_query_params(opts))

    def get(self, code: str) -> Family:
        if not code:
            raise ValueError("family code must be a non-empty string")
        return self._fetch(resource_path(FAMILIES_PATH, code), Family)

    def create(self, family: Family) -> None:
        self._send("POST", FAMILIES_PATH, family.to_payload(), CREATE_ERROR_THRESHOLD)

    def upsert(self, family: Family) -> None:
        """Create the family or patch the fields it carries."""
        self._send("PATCH", resource_path(FAMILIES_PATH, family.code), family.to_payload(), DEFAULT_ERROR_THRESHOLD)

    def batch_upsert(self, families: Sequence[Family]) -> List[BatchResultLine]:
        """
        Upsert several families in one call.

        Returns one result line per submitted family, in submission order.
        A family rejected by the server shows up as a failing line, not as an
        exception; ApiError is raised only when the call as a whole fails.
        """
        return self._send_batch("PATCH", FAMILIES_PATH, [family.to_payload() for family in families], BatchResultLine)
