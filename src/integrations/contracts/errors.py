"""
Error contract for the PIM REST client.

Every failure detected by an endpoint service is surfaced as an ApiError:
- transport failures (no response obtained) carry only a message
- status failures carry the HTTP status code, the status text and the raw body
- decode failures carry only a message

Per-line batch failures are NOT errors; they are data inside BatchResultLine.
"""
from __future__ import annotations

from typing import Optional


class ApiError(Exception):
    def __init__(self, message: str, *, code: Optional[int] = None, status: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    @property
    def is_status_error(self) -> bool:
        return self.code is not None

    def __str__(self) -> str:
        if self.status:
            return f"{self.status}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, status={self.status!r}, message={self.message!r})"


class TransportError(Exception):
    """Raised by a transport when no HTTP response could be obtained."""
