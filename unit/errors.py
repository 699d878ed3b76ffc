from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .debug import dprint


class UnitSDKError(Exception):
    """Base exception for all Unit SDK errors."""
    pass


class UnitConfigError(UnitSDKError):
    """Raised when configuration/credentials are invalid or missing."""
    pass


class UnitValidationError(UnitSDKError, ValueError):
    """
    Raised when a request or response payload violates its declared shape.

    Always raised *before* anything is sent when it concerns a request body,
    so a rejected call never costs a round trip.

    Attributes
    ----------
    errors : list
        Pydantic-style error entries (``loc``/``msg``/``type``) when the
        failure came from model validation; empty otherwise.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = list(errors or [])
        super().__init__(message)

    @classmethod
    def from_pydantic(cls, label: str, exc: PydanticValidationError) -> "UnitValidationError":
        entries = exc.errors(include_url=False, include_input=False)
        first = entries[0] if entries else {}
        loc = ".".join(str(p) for p in first.get("loc", ())) or "(root)"
        msg = f"{label}: {first.get('msg', 'invalid payload')} at {loc}"
        if len(entries) > 1:
            msg += f" (+{len(entries) - 1} more)"
        dprint("UnitValidationError", {"label": label, "count": len(entries)})
        return cls(msg, entries)

    @property
    def fields(self) -> List[str]:
        """Dotted locations of every failing field."""
        return [".".join(str(p) for p in e.get("loc", ())) for e in self.errors]


class UnitTransportError(UnitSDKError):
    """
    Network-level failure (connection refused, timeout, protocol error).

    Remote API errors are *not* raised; they come back as ``UnitError`` values.
    """

    def __init__(self, message: str, *, method: Optional[str] = None, url: Optional[str] = None):
        self.method = method
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        where = f" {self.method} {self.url}" if self.method and self.url else ""
        return f"transport error{where}: {self.args[0]}"

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "url": self.url, "message": self.args[0]}


__all__ = [
    "UnitSDKError",
    "UnitConfigError",
    "UnitValidationError",
    "UnitTransportError",
]
