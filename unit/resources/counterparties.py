from __future__ import annotations
from typing import Any, Mapping, Optional, Union

from ..debug import dprint, djson
from ..models.common import UnitEmptyResponse, UnitError, UnitListResponse, UnitResponse
from ..models.resources import AchCounterparty, CreateCounterpartyRequest, PatchCounterpartyRequest
from .base import BaseResourceAPI, _coerce_request, _document, _list_params, _validate_id

CounterpartyResponse = UnitResponse[AchCounterparty]
CounterpartyListResponse = UnitListResponse[AchCounterparty]


class CounterpartiesAPI(BaseResourceAPI):
    """
    Saved ACH counterparties.

    A counterparty created here is what a *linked* ACH payment points at
    through its ``counterparty`` relationship.
    """

    resource = "counterparties"

    async def create(
        self,
        request: Union[CreateCounterpartyRequest, Mapping[str, Any]],
    ) -> Union[CounterpartyResponse, UnitError]:
        req = _coerce_request("create counterparty request", request, CreateCounterpartyRequest)
        body = _document(req)
        dprint("counterparties.create()", {"name": req.attributes.name})
        djson("counterparties.create body", body)
        resp = await self.client.post(self.base_path, json=body)
        return self._parse("counterparties.create", resp, CounterpartyResponse)

    async def get(self, counterparty_id: str) -> Union[CounterpartyResponse, UnitError]:
        _validate_id("counterparty_id", counterparty_id)
        resp = await self.client.get(self._path(counterparty_id))
        return self._parse("counterparties.get", resp, CounterpartyResponse)

    async def list(
        self,
        *,
        customer_id: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Union[CounterpartyListResponse, UnitError]:
        params = _list_params(limit=limit, offset=offset, filters={"customerId": customer_id, "tags": tags})
        dprint("counterparties.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("counterparties.list", resp, CounterpartyListResponse)

    async def update(
        self,
        counterparty_id: str,
        request: Union[PatchCounterpartyRequest, Mapping[str, Any]],
    ) -> Union[CounterpartyResponse, UnitError]:
        _validate_id("counterparty_id", counterparty_id)
        req = _coerce_request("patch counterparty request", request, PatchCounterpartyRequest)
        resp = await self.client.patch(self._path(counterparty_id), json=_document(req))
        return self._parse("counterparties.update", resp, CounterpartyResponse)

    async def delete(self, counterparty_id: str) -> Union[UnitEmptyResponse, UnitError]:
        _validate_id("counterparty_id", counterparty_id)
        dprint("counterparties.delete()", {"counterparty_id": counterparty_id})
        resp = await self.client.delete(self._path(counterparty_id))
        return self._parse_empty("counterparties.delete", resp)


__all__ = ["CounterpartiesAPI", "CounterpartyResponse", "CounterpartyListResponse"]
