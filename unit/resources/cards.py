from __future__ import annotations
from typing import Any, Mapping, Optional, Union

from ..debug import dprint, djson
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.resources import Card, CreateDebitCardRequest
from .base import BaseResourceAPI, _coerce_request, _document, _list_params, _validate_id

CardResponse = UnitResponse[Card]
CardListResponse = UnitListResponse[Card]


class CardsAPI(BaseResourceAPI):
    """
    Debit cards API.

    Card state changes are POST actions on ``/cards/{id}/{action}`` with no
    body; each returns the updated card.
    """

    resource = "cards"

    async def create(self, request: Union[CreateDebitCardRequest, Mapping[str, Any]]) -> Union[CardResponse, UnitError]:
        req = _coerce_request("create card request", request, CreateDebitCardRequest)
        body = _document(req)
        dprint("cards.create()", {"type": req.type})
        djson("cards.create body", body)
        resp = await self.client.post(self.base_path, json=body)
        return self._parse("cards.create", resp, CardResponse)

    async def get(self, card_id: str, *, include: Optional[str] = None) -> Union[CardResponse, UnitError]:
        _validate_id("card_id", card_id)
        dprint("cards.get()", {"card_id": card_id})
        resp = await self.client.get(self._path(card_id), params={"include": include} if include else None)
        return self._parse("cards.get", resp, CardResponse)

    async def list(
        self,
        *,
        account_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include: Optional[str] = None,
    ) -> Union[CardListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"accountId": account_id, "customerId": customer_id, "tags": tags},
            include=include,
        )
        dprint("cards.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("cards.list", resp, CardListResponse)

    # ----------------------- actions -----------------------

    async def _action(self, card_id: str, action: str) -> Union[CardResponse, UnitError]:
        _validate_id("card_id", card_id)
        dprint(f"cards.{action}()", {"card_id": card_id})
        resp = await self.client.post(self._path(card_id, action))
        return self._parse(f"cards.{action}", resp, CardResponse)

    async def freeze(self, card_id: str) -> Union[CardResponse, UnitError]:
        return await self._action(card_id, "freeze")

    async def unfreeze(self, card_id: str) -> Union[CardResponse, UnitError]:
        return await self._action(card_id, "unfreeze")

    async def close(self, card_id: str) -> Union[CardResponse, UnitError]:
        return await self._action(card_id, "close")

    async def report_lost(self, card_id: str) -> Union[CardResponse, UnitError]:
        return await self._action(card_id, "report-lost")

    async def report_stolen(self, card_id: str) -> Union[CardResponse, UnitError]:
        return await self._action(card_id, "report-stolen")


__all__ = ["CardsAPI", "CardResponse", "CardListResponse"]
