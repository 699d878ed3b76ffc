from __future__ import annotations
from typing import Any, Mapping, Optional, Union

from ..debug import dprint, djson
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.resources import Customer, PatchCustomerRequest
from .base import BaseResourceAPI, _coerce_request, _document, _list_params, _validate_id

CustomerResponse = UnitResponse[Customer]
CustomerListResponse = UnitListResponse[Customer]


class CustomersAPI(BaseResourceAPI):
    """Customers are created by approved applications; here they are read and patched."""

    resource = "customers"

    async def get(self, customer_id: str) -> Union[CustomerResponse, UnitError]:
        _validate_id("customer_id", customer_id)
        dprint("customers.get()", {"customer_id": customer_id})
        resp = await self.client.get(self._path(customer_id))
        return self._parse("customers.get", resp, CustomerResponse)

    async def list(
        self,
        *,
        query: Optional[str] = None,
        email: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> Union[CustomerListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"query": query, "email": email, "tags": tags},
            sort=sort,
        )
        dprint("customers.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("customers.list", resp, CustomerListResponse)

    async def update(
        self,
        customer_id: str,
        request: Union[PatchCustomerRequest, Mapping[str, Any]],
    ) -> Union[CustomerResponse, UnitError]:
        _validate_id("customer_id", customer_id)
        req = _coerce_request("patch customer request", request, PatchCustomerRequest)
        body = _document(req)
        djson("customers.update body", body)
        resp = await self.client.patch(self._path(customer_id), json=body)
        return self._parse("customers.update", resp, CustomerResponse)


__all__ = ["CustomersAPI", "CustomerResponse", "CustomerListResponse"]
