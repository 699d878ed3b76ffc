from __future__ import annotations
from typing import Any, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..debug import dprint, djson
from ..errors import UnitValidationError
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.resources import (
    Application,
    ApplicationDocument,
    CreateApplicationRequest,
    CreateBusinessApplicationRequest,
    CreateIndividualApplicationRequest,
)
from .base import BaseResourceAPI, _document, _list_params, _validate_id

ApplicationResponse = UnitResponse[Application]
ApplicationListResponse = UnitListResponse[Application]
DocumentListResponse = UnitListResponse[ApplicationDocument]

_create_adapter: TypeAdapter = TypeAdapter(CreateApplicationRequest)


class ApplicationsAPI(BaseResourceAPI):
    """
    Applications API.

    An application is the KYC/KYB submission that, once approved, yields a
    customer. Individual and business applications share the endpoint and are
    told apart by ``type``.
    """

    resource = "applications"

    async def create(self, request: Any) -> Union[ApplicationResponse, UnitError]:
        if not isinstance(request, (CreateIndividualApplicationRequest, CreateBusinessApplicationRequest)):
            if not isinstance(request, Mapping):
                raise UnitValidationError(f"create application request must be a mapping, got {type(request).__name__}")
            try:
                request = _create_adapter.validate_python(dict(request))
            except ValidationError as e:
                raise UnitValidationError.from_pydantic("create application request", e) from e

        body = _document(request)
        dprint("applications.create()", {"type": request.type})
        djson("applications.create body", body)
        resp = await self.client.post(self.base_path, json=body)
        return self._parse("applications.create", resp, ApplicationResponse)

    async def get(self, application_id: str) -> Union[ApplicationResponse, UnitError]:
        _validate_id("application_id", application_id)
        dprint("applications.get()", {"application_id": application_id})
        resp = await self.client.get(self._path(application_id))
        return self._parse("applications.get", resp, ApplicationResponse)

    async def list(
        self,
        *,
        query: Optional[str] = None,
        email: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> Union[ApplicationListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"query": query, "email": email, "tags": tags},
            sort=sort,
        )
        dprint("applications.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("applications.list", resp, ApplicationListResponse)

    async def list_documents(self, application_id: str) -> Union[DocumentListResponse, UnitError]:
        _validate_id("application_id", application_id)
        resp = await self.client.get(self._path(application_id, "documents"))
        return self._parse("applications.list_documents", resp, DocumentListResponse)


__all__ = ["ApplicationsAPI", "ApplicationResponse", "ApplicationListResponse", "DocumentListResponse"]
