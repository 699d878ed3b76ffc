from __future__ import annotations
import json
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..client import UnitClient
from ..debug import dprint, djson
from ..errors import UnitValidationError
from ..models.common import UnitEmptyResponse, UnitError, is_error
from ..utils import to_rfc3339

M = TypeVar("M", bound=BaseModel)

MAX_PAGE_LIMIT = 1000


# ----------------------- validation helpers -----------------------

def _validate_id(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise UnitValidationError(f"{name} is required and must be a non-empty string.")
    if any(c in value for c in "/?#"):
        raise UnitValidationError(f"{name} must not contain '/', '?' or '#', got {value!r}")


def _list_params(
    *,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    filters: Optional[Mapping[str, Any]] = None,
    include: Optional[str] = None,
    sort: Optional[str] = None,
) -> Dict[str, Any]:
    """
    JSON:API query parameters.

    ``page[limit]``/``page[offset]`` for paging, ``filter[key]`` per filter,
    ``filter[key][i]`` for list filters and a JSON string for ``filter[tags]``.
    """
    params: Dict[str, Any] = {}
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int) or not 0 < limit <= MAX_PAGE_LIMIT:
            raise UnitValidationError(f"limit must be an integer between 1 and {MAX_PAGE_LIMIT}.")
        params["page[limit]"] = limit
    if offset is not None:
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            raise UnitValidationError("offset must be a non-negative integer.")
        params["page[offset]"] = offset

    for key, val in (filters or {}).items():
        if val is None:
            continue
        if key == "tags":
            params["filter[tags]"] = json.dumps(dict(val), separators=(",", ":"))
        elif isinstance(val, (list, tuple)):
            for i, item in enumerate(val):
                params[f"filter[{key}][{i}]"] = item
        elif isinstance(val, datetime):
            params[f"filter[{key}]"] = to_rfc3339(val)
        else:
            params[f"filter[{key}]"] = val

    if include:
        params["include"] = include
    if sort:
        params["sort"] = sort
    return params


def _coerce_request(label: str, request: Union[M, Mapping[str, Any]], model: Type[M]) -> M:
    """Accept a model instance or a plain dict; validate before anything is sent."""
    if isinstance(request, model):
        return request
    if isinstance(request, Mapping):
        try:
            return model.model_validate(dict(request))
        except ValidationError as e:
            raise UnitValidationError.from_pydantic(label, e) from e
    raise UnitValidationError(f"{label} must be a {model.__name__} or a mapping, got {type(request).__name__}")


def _remote_error(label: str, body: Dict[str, Any]) -> UnitError:
    """Build a ``UnitError`` from an error body; bare entries become their ``detail``."""
    entries = [e if isinstance(e, Mapping) else {"detail": str(e)} for e in body["errors"]]
    try:
        return UnitError.model_validate({**body, "errors": entries})
    except ValidationError as e:
        djson(f"{label} unexpected error body", body)
        raise UnitValidationError.from_pydantic(f"{label} error", e) from e


def _document(data: Any) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {"data": data}


class BaseResourceAPI:
    """
    Shared plumbing of the resource facades.

    A facade holds the client (token + base URL, never mutated) and a base
    path; every operation sends exactly one request and returns either the
    typed document or a ``UnitError`` value.
    """

    resource = ""

    def __init__(self, client: UnitClient):
        self.client = client
        self.base_path = f"/{self.resource}"

    def _path(self, *parts: str) -> str:
        return "/".join([self.base_path, *(quote(p, safe="") for p in parts)])

    def _parse(self, label: str, body: Dict[str, Any], response_type: Any) -> Any:
        """Remote error document -> ``UnitError``; otherwise validate against ``response_type``."""
        if is_error(body):
            err = _remote_error(label, body)
            dprint(f"{label} -> remote error", {"status": err.status, "title": err.title})
            return err
        try:
            if isinstance(response_type, type) and issubclass(response_type, BaseModel):
                return response_type.model_validate(body)
            return TypeAdapter(response_type).validate_python(body)
        except ValidationError as e:
            djson(f"{label} unexpected body", body)
            raise UnitValidationError.from_pydantic(f"{label} response", e) from e

    def _parse_empty(self, label: str, body: Dict[str, Any]) -> Union[UnitEmptyResponse, UnitError]:
        if is_error(body):
            return _remote_error(label, body)
        return UnitEmptyResponse.model_validate(body)


__all__ = ["BaseResourceAPI", "MAX_PAGE_LIMIT"]
