from __future__ import annotations

import json as _json
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from .config import UnitConfig
from .debug import dprint, djson, mask_token, scrub_headers
from .errors import UnitTransportError

SDK_VERSION = "0.1.0"

# -------------------- constants --------------------

JSON_API = "application/vnd.api+json"

REQUEST_ID_HEADERS: Tuple[str, ...] = ("X-Request-ID", "X-Request-Id", "X-Unit-Request-Id")


def _auth_header(token: str) -> str:
    return f"Bearer {token}"


def _first_header(headers: httpx.Headers, names: Tuple[str, ...]) -> Optional[str]:
    for n in names:
        v = headers.get(n)
        if v:
            return v
    return None


def _error_document(r: httpx.Response) -> Dict[str, Any]:
    """Wrap a non-JSON:API failure so callers always see ``{"errors": [...]}``."""
    entry: Dict[str, Any] = {"status": str(r.status_code), "title": r.reason_phrase or "HTTP error"}
    text = r.text.strip() if r.content else ""
    if text:
        entry["detail"] = text if len(text) <= 500 else text[:497] + "..."
    return {"errors": [entry]}


class UnitClient:
    """
    Async transport for the Unit REST API.

    - Adds ``Authorization: Bearer <token>`` and JSON:API content headers.
    - Token, base URL and headers are fixed at construction; one instance is
      safe to share between concurrent calls.
    - Remote failures come back as ``{"errors": [...]}`` documents; only
      network failures raise (``UnitTransportError``).
    - No retries: pass your own idempotency keys where the API supports them.
    """

    def __init__(
        self,
        config: Optional[UnitConfig] = None,
        *,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if config is None:
            config = UnitConfig(token=token, base_url=base_url)
        elif token is not None or base_url is not None:
            config = config.copy_with(token=token, base_url=base_url)
        self.config = config.validate()

        headers = {
            "Authorization": _auth_header(self.config.token),
            "Content-Type": JSON_API,
            "Accept": f"{JSON_API}, application/json",
            "User-Agent": f"unit-python/{SDK_VERSION}",
        }
        if self.config.api_version:
            headers["X-Accept-Version"] = self.config.api_version

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers=headers,
            transport=transport,
        )
        dprint(
            "Client init",
            {
                "base_url": self.config.base_url,
                "token": mask_token(self.config.token),
                "timeout": self.config.timeout,
                "api_version": self.config.api_version,
                "sdk_version": SDK_VERSION,
            },
        )

    # ------------ read-only credentials ------------
    @property
    def token(self) -> str:
        return self.config.token

    @property
    def base_url(self) -> str:
        return self.config.base_url

    # ------------ context manager support ------------
    async def __aenter__(self) -> "UnitClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------ internal helpers ------------
    def _handle(self, r: httpx.Response) -> Dict[str, Any]:
        request_id = _first_header(r.headers, REQUEST_ID_HEADERS)
        dprint("Response", {"status": r.status_code, "request_id": request_id})

        if r.status_code == 204 or not r.content:
            body: Dict[str, Any] = {}
        else:
            try:
                parsed = r.json()
            except ValueError:
                parsed = None
            body = parsed if isinstance(parsed, dict) else {}

        djson("Response body", body)

        if 200 <= r.status_code < 300:
            return body

        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return body
        return _error_document(r)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON document.

        ``json`` is the full document (callers wrap bodies as ``{"data": ...}``).
        """
        if not path.startswith("/"):
            raise ValueError(f"path must start with '/', got {path!r}")
        method = method.upper()
        dprint("HTTP send", {"method": method, "path": path, "params": dict(params or {})})
        djson("Request headers", scrub_headers(dict(self._client.headers)))
        if json is not None:
            djson("Request JSON", json)

        kwargs: Dict[str, Any] = {"params": dict(params or {})}
        if json is not None:
            kwargs["content"] = _json.dumps(json).encode("utf-8")

        try:
            r = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            dprint("Network error", {"error": repr(e)})
            raise UnitTransportError(str(e) or type(e).__name__, method=method, url=f"{self.base_url}{path}") from e
        return self._handle(r)

    async def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.request("POST", path, json=json, params=params)

    async def patch(self, path: str, *, json: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("DELETE", path, params=params)

    async def aclose(self) -> None:
        dprint("Client aclose()")
        await self._client.aclose()


__all__ = ["UnitClient", "SDK_VERSION", "JSON_API"]
