from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

from .debug import mask_token
from .errors import UnitConfigError

# Pick up a local .env, never overriding variables already exported
load_dotenv(override=False)

DEFAULT_BASE_URL = "https://api.s.unit.sh"
DEFAULT_TIMEOUT = 30.0

ENV_TOKEN = "UNIT_TOKEN"
ENV_BASE_URL = "UNIT_API_URL"
ENV_TIMEOUT = "UNIT_TIMEOUT"
ENV_API_VERSION = "UNIT_API_VERSION"
ENV_DEBUG = "UNIT_DEBUG"


# ----------------------------- parsers -----------------------------

def _env_bool(raw: str) -> bool:
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


def _env_timeout(raw: str) -> float:
    # a malformed variable falls back rather than breaking import-time config
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT


def _normalize_base_url(url: Optional[str]) -> str:
    url = (url or "").strip()
    return url.rstrip("/") if url else DEFAULT_BASE_URL


def _arg_timeout(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise UnitConfigError(f"timeout must be a number, got {value!r}")


# ----------------------------- config -----------------------------

@dataclass
class UnitConfig:
    """
    Client settings, resolved per field as
      explicit argument > environment (``.env`` included) > default

    ``token`` is the only required value; ``validate()`` enforces it.
    """

    token: Optional[str] = None
    base_url: Optional[str] = None
    timeout: Optional[float] = None
    api_version: Optional[str] = None   # sent as X-Accept-Version when set
    debug: Optional[bool] = None

    # where each field came from ("arg" / "env" / "default"), for masked()
    _source: Dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.token = self._resolve("token", ENV_TOKEN, str, "")
        self.base_url = _normalize_base_url(self._resolve("base_url", ENV_BASE_URL, str, DEFAULT_BASE_URL))
        self.timeout = self._resolve("timeout", ENV_TIMEOUT, _env_timeout, DEFAULT_TIMEOUT, arg=_arg_timeout)
        self.api_version = self._resolve("api_version", ENV_API_VERSION, str, None)
        self.debug = self._resolve("debug", ENV_DEBUG, _env_bool, False, arg=bool)

        if self.timeout <= 0:
            raise UnitConfigError("timeout must be positive.")
        if self.debug:
            print("[UnitSDK][Config]", "Loaded config:", self.masked())

    def _resolve(
        self,
        name: str,
        env_name: str,
        from_env: Callable[[str], Any],
        default: Any,
        *,
        arg: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        value = getattr(self, name)
        if value is not None and value != "":
            self._source[name] = "arg"
            return arg(value) if arg else value
        raw = os.environ.get(env_name)
        if raw:
            self._source[name] = "env"
            return from_env(raw)
        self._source[name] = "default"
        return default

    # -------- validation & utils --------
    def validate(self) -> "UnitConfig":
        """Raise UnitConfigError unless the config can make API calls."""
        if not self.token:
            raise UnitConfigError(f"{ENV_TOKEN} is required for API calls.")
        if not self.base_url.startswith(("http://", "https://")):
            raise UnitConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        return self

    def masked(self) -> dict:
        """Printable view with the token masked."""
        return {
            "token": mask_token(self.token),
            "base_url": self.base_url,
            "timeout": self.timeout,
            "api_version": self.api_version,
            "debug": self.debug,
            "source": dict(self._source),
        }

    def copy_with(
        self,
        *,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        api_version: Optional[str] = None,
        debug: Optional[bool] = None,
    ) -> "UnitConfig":
        """New config with the given fields replaced; unset ones carry over with their source."""
        changes = {
            "token": token,
            "base_url": base_url,
            "timeout": timeout,
            "api_version": api_version,
            "debug": debug,
        }
        overridden = {name for name, value in changes.items() if value is not None}
        new = replace(self, **{name: getattr(self, name) if value is None else value for name, value in changes.items()})
        for name, src in self._source.items():
            if name not in overridden:
                new._source[name] = src
        return new

    @classmethod
    def from_env(cls) -> "UnitConfig":
        """Config from the environment alone, validated."""
        return cls().validate()


__all__ = ["UnitConfig", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT"]
