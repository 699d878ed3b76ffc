"""
Opt-in diagnostics for the Unit SDK.

Set ``UNIT_DEBUG=1`` (or call ``set_debug(True)``) to print every request and
response the client handles. Output goes to stdout, prefixed with
``[UnitSDK]`` and a UTC timestamp. Bearer tokens and the sensitive JSON:API
attributes listed in ``SENSITIVE_BODY_KEYS`` are masked before printing.
"""

from __future__ import annotations
import os
import json
import datetime
import re
from typing import Any, Dict, Mapping, Optional

_FALSY = ("0", "false", "no", "off", "")

_enabled = os.getenv("UNIT_DEBUG", "0").strip().lower() not in _FALSY


def is_enabled() -> bool:
    return _enabled


def set_debug(enabled: bool) -> None:
    global _enabled
    _enabled = bool(enabled)


# Headers that must never be printed in clear.
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "cookie"})

# Attributes inside request/response documents that carry secrets or PII.
SENSITIVE_BODY_KEYS = frozenset(
    {
        "token",
        "verificationCode",
        "verificationToken",
        "plaidProcessorToken",
        "ssn",
        "passport",
        "accountNumber",
        "ein",
    }
)

MAX_JSON_CHARS = int(os.getenv("UNIT_DEBUG_MAX_JSON", "20000"))

_BEARER = re.compile(r"^bearer\s+(\S+)$", re.I)


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# ------------------------------------------------------------------------------
# Masking
# ------------------------------------------------------------------------------
def mask_token(token: Optional[str]) -> str:
    """``v2.public.eyJ...ifQ`` -> ``v2.p...4ifQ``; short values collapse to ``***``."""
    if not token:
        return "(empty)"
    t = token.strip()
    return "***" if len(t) <= 10 else f"{t[:4]}...{t[-4:]}"


def redact_auth(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    m = _BEARER.match(value.strip())
    return f"Bearer {mask_token(m.group(1))}" if m else "***"


def scrub_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Copy of ``headers`` that is safe to print."""
    out: Dict[str, str] = {}
    for name, value in (headers or {}).items():
        key = name.lower()
        if key == "authorization":
            out[name] = redact_auth(value) or "***"
        elif key in SENSITIVE_HEADERS:
            out[name] = "***"
        else:
            out[name] = value
    return out


def redact_body(data: Any) -> Any:
    """Deep copy of a JSON document with sensitive attribute values masked."""
    if isinstance(data, Mapping):
        return {
            k: (mask_token(v) if isinstance(v, str) else "***") if k in SENSITIVE_BODY_KEYS else redact_body(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [redact_body(v) for v in data]
    return data


# ------------------------------------------------------------------------------
# Printing
# ------------------------------------------------------------------------------
def dprint(*args: Any) -> None:
    if _enabled:
        print("[UnitSDK]", _now(), *args, flush=True)


def djson(label: str, data: Any) -> None:
    """Pretty-print a (redacted) JSON document under ``label``."""
    if not _enabled:
        return
    try:
        text = json.dumps(redact_body(data), ensure_ascii=False, indent=2, default=str)
    except (TypeError, ValueError):
        text = repr(data)
    if len(text) > MAX_JSON_CHARS:
        text = text[:MAX_JSON_CHARS] + "... (truncated)"
    print("[UnitSDK]", _now(), f"{label}:", text, flush=True)


__all__ = [
    "is_enabled",
    "set_debug",
    "mask_token",
    "redact_auth",
    "scrub_headers",
    "redact_body",
    "dprint",
    "djson",
    "SENSITIVE_BODY_KEYS",
]
