"""
Query parameter filtering for list endpoints.

Only whitelisted options with string values are forwarded. Anything else is
ignored: validating options is the caller's job, not the builder's.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from src.integrations.contracts.interfaces import QueryParams

LIST_QUERY_KEYS = ("page", "limit", "withCount")


def build_query_params(
    opts: Optional[Mapping[str, Any]],
    allowed: Iterable[str] = LIST_QUERY_KEYS,
) -> QueryParams:
    params: QueryParams = {}
    if not opts:
        return params
    for key in allowed:
        value = opts.get(key)
        if isinstance(value, str):
            params[key] = value
    return params
