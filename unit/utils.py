from __future__ import annotations
import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Union

from .debug import dprint, djson

# ==============================================================================
# Amounts (cents)
# ==============================================================================

def parse_cents(value: Union[str, int]) -> int:
    """
    Cents from a resource amount. Resources send amounts as decimal strings
    of cents ("1500"); create requests take plain ints.
    """
    if isinstance(value, bool):
        raise TypeError("amount must be a str or int, not bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not s.lstrip("-").isdigit():
            raise ValueError(f"Invalid cents string: {value!r}")
        return int(s)
    raise TypeError("amount must be a str or int")


def cents_to_str(cents: int) -> str:
    """Inverse of :func:`parse_cents` for the string representation."""
    if isinstance(cents, bool) or not isinstance(cents, int):
        raise TypeError("cents must be an int")
    return str(cents)


def to_cents(amount: Union[Decimal, str, int]) -> int:
    """
    Dollars to cents (``"12.34"`` -> ``1234``). Refuses amounts with
    fractional cents instead of rounding them.
    """
    try:
        dec = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    scaled = dec * 100
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount!r} has fractional cents")
    cents = int(scaled)
    dprint("utils.to_cents()", {"amount_in": str(amount), "cents": cents})
    return cents


# ==============================================================================
# Idempotency keys / time helpers
# ==============================================================================

def make_idempotency_key(prefix: Optional[str] = "unitpy") -> str:
    """
    Generate a fresh idempotency key. Length kept well under the API limit.
    """
    base = (prefix or "unitpy").strip() or "unitpy"
    key = f"{base}_{uuid.uuid4().hex}"
    if len(key) > 64:
        key = key[:64]
    dprint("utils.make_idempotency_key()", {"key": key})
    return key


def ensure_idempotency_key(existing: Optional[str], prefix: Optional[str] = "unitpy") -> str:
    """
    Return existing if provided, otherwise generate a new one.

    Reuse the returned key on every retry of the same logical request.
    """
    if isinstance(existing, str) and existing.strip():
        k = existing.strip()
        dprint("utils.ensure_idempotency_key()", {"existing": k})
        return k
    return make_idempotency_key(prefix=prefix)


def utcnow_iso() -> str:
    """
    RFC3339 UTC timestamp (seconds precision), e.g. '2025-09-13T12:34:56Z'.
    """
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def to_rfc3339(value: Union[datetime, str]) -> str:
    """Render a datetime for ``filter[since]`` style parameters."""
    if isinstance(value, str):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# ==============================================================================
# Tags
# ==============================================================================

def safe_tags(tags: Optional[Mapping[Any, Any]]) -> Dict[str, str]:
    """
    Tags are a flat string -> string map. Coerce keys and scalar values to
    ``str``; nested values are refused.
    """
    tags = tags or {}
    if not isinstance(tags, Mapping):
        raise TypeError("tags must be a mapping")
    out: Dict[str, str] = {}
    for k, v in tags.items():
        if isinstance(v, (dict, list, tuple, set)):
            raise ValueError(f"tag {k!r} must be a scalar value")
        out[str(k)] = "" if v is None else str(v)
    djson("utils.safe_tags()", out)
    return out


__all__ = [
    "parse_cents",
    "cents_to_str",
    "to_cents",
    "make_idempotency_key",
    "ensure_idempotency_key",
    "utcnow_iso",
    "to_rfc3339",
    "safe_tags",
]
