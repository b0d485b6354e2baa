"""
Response contracts shared by every resource endpoint.

- navigation links attached to list envelopes and list items
- batch result lines returned, one per submitted entity, by NDJSON batch calls
- a summary helper callers use to interpret per-line batch failures
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


# ---------------------------------------------------------------------------
# Navigation links
# ---------------------------------------------------------------------------

class Link(BaseModel):
    model_config = ConfigDict(extra="ignore")

    href: str


class ResponseLinks(BaseModel):
    """Opaque to the client: links are exposed but never followed automatically."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    self_link: Optional[Link] = Field(default=None, alias="self")
    first: Optional[Link] = None
    previous: Optional[Link] = None
    next: Optional[Link] = None


# ---------------------------------------------------------------------------
# Batch results
# ---------------------------------------------------------------------------

class LineErrorDetail(BaseModel):
    """One validation error reported by the server for a batch line."""

    model_config = ConfigDict(extra="ignore")

    property: Optional[str] = None
    message: str = ""
    attribute: Optional[str] = None
    locale: Optional[str] = None
    scope: Optional[str] = None


class BatchResultLine(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line: int = Field(..., description="1-based position of the entity in the submitted body.")
    code: Optional[str] = Field(default=None, description="Identity of the entity this line reports on.")
    status_code: int
    message: Optional[str] = None
    errors: List[LineErrorDetail] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.status_code < 300


class BatchUpsertReport(BaseModel):
    total: int
    successful: int
    failed: int
    failures: List[BatchResultLine] = Field(default_factory=list)

    @classmethod
    def from_lines(cls, lines: Sequence[BatchResultLine]) -> "BatchUpsertReport":
        failures = [line for line in lines if not line.is_success]
        return cls(
            total=len(lines),
            successful=len(lines) - len(failures),
            failed=len(failures),
            failures=failures,
        )

    def failure_messages(self) -> Dict[str, Any]:
        """Map each failing entity code (or line number) to its server message."""
        out: Dict[str, Any] = {}
        for line in self.failures:
            key = line.code or f"line:{line.line}"
            out[key] = line.message or [e.message for e in line.errors]
        return out
