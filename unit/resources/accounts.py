from __future__ import annotations
from typing import Any, Mapping, Optional, Union

from ..debug import dprint, djson
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.resources import (
    Account,
    CloseAccountRequest,
    CreateDepositAccountRequest,
    PatchDepositAccountRequest,
)
from .base import BaseResourceAPI, _coerce_request, _document, _list_params, _validate_id

AccountResponse = UnitResponse[Account]
AccountListResponse = UnitListResponse[Account]


class AccountsAPI(BaseResourceAPI):
    """
    Deposit accounts API.

    Accounts are opened for an existing customer and closed/reopened through
    dedicated actions; balances are read-only.
    """

    resource = "accounts"

    async def create(
        self,
        request: Union[CreateDepositAccountRequest, Mapping[str, Any]],
    ) -> Union[AccountResponse, UnitError]:
        req = _coerce_request("create account request", request, CreateDepositAccountRequest)
        body = _document(req)
        djson("accounts.create body", body)
        resp = await self.client.post(self.base_path, json=body)
        return self._parse("accounts.create", resp, AccountResponse)

    async def get(self, account_id: str, *, include: Optional[str] = None) -> Union[AccountResponse, UnitError]:
        _validate_id("account_id", account_id)
        dprint("accounts.get()", {"account_id": account_id})
        resp = await self.client.get(self._path(account_id), params={"include": include} if include else None)
        return self._parse("accounts.get", resp, AccountResponse)

    async def list(
        self,
        *,
        customer_id: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include: Optional[str] = None,
    ) -> Union[AccountListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"customerId": customer_id, "tags": tags},
            include=include,
        )
        dprint("accounts.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("accounts.list", resp, AccountListResponse)

    async def update(
        self,
        account_id: str,
        request: Union[PatchDepositAccountRequest, Mapping[str, Any]],
    ) -> Union[AccountResponse, UnitError]:
        _validate_id("account_id", account_id)
        req = _coerce_request("patch account request", request, PatchDepositAccountRequest)
        body = _document(req)
        djson("accounts.update body", body)
        resp = await self.client.patch(self._path(account_id), json=body)
        return self._parse("accounts.update", resp, AccountResponse)

    async def close_account(
        self,
        account_id: str,
        request: Union[CloseAccountRequest, Mapping[str, Any], None] = None,
    ) -> Union[AccountResponse, UnitError]:
        """Close an account; ``reason`` defaults to ``ByCustomer``."""
        _validate_id("account_id", account_id)
        req = _coerce_request("close account request", request or CloseAccountRequest(), CloseAccountRequest)
        dprint("accounts.close_account()", {"account_id": account_id, "reason": req.attributes.reason})
        resp = await self.client.post(self._path(account_id, "close"), json=_document(req))
        return self._parse("accounts.close_account", resp, AccountResponse)

    async def reopen_account(self, account_id: str) -> Union[AccountResponse, UnitError]:
        _validate_id("account_id", account_id)
        dprint("accounts.reopen_account()", {"account_id": account_id})
        resp = await self.client.post(self._path(account_id, "reopen"))
        return self._parse("accounts.reopen_account", resp, AccountResponse)


__all__ = ["AccountsAPI", "AccountResponse", "AccountListResponse"]
