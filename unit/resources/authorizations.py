from __future__ import annotations
from typing import Optional, Union

from ..debug import dprint
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.resources import Authorization
from .base import BaseResourceAPI, _list_params, _validate_id

AuthorizationResponse = UnitResponse[Authorization]
AuthorizationListResponse = UnitListResponse[Authorization]


class AuthorizationsAPI(BaseResourceAPI):
    """Card authorizations (read-only)."""

    resource = "authorizations"

    async def get(self, authorization_id: str) -> Union[AuthorizationResponse, UnitError]:
        _validate_id("authorization_id", authorization_id)
        resp = await self.client.get(self._path(authorization_id))
        return self._parse("authorizations.get", resp, AuthorizationResponse)

    async def list(
        self,
        *,
        account_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        card_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Union[AuthorizationListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"accountId": account_id, "customerId": customer_id, "cardId": card_id},
        )
        dprint("authorizations.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("authorizations.list", resp, AuthorizationListResponse)


__all__ = ["AuthorizationsAPI", "AuthorizationResponse", "AuthorizationListResponse"]
