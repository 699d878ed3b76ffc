from __future__ import annotations
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union
from urllib.parse import quote

from ..debug import dprint, djson
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.resources import PatchTransactionRequest, Transaction
from .base import BaseResourceAPI, _coerce_request, _document, _list_params, _validate_id

TransactionResponse = UnitResponse[Transaction]
TransactionListResponse = UnitListResponse[Transaction]


class TransactionsAPI(BaseResourceAPI):
    """
    Transactions API.

    Single transactions live under their account
    (``/accounts/{account_id}/transactions/{id}``); the collection endpoint is
    top level and filtered by account or customer.
    """

    resource = "transactions"

    def _account_path(self, account_id: str, transaction_id: str) -> str:
        return f"/accounts/{quote(account_id, safe='')}/transactions/{quote(transaction_id, safe='')}"

    async def get(
        self,
        account_id: str,
        transaction_id: str,
        *,
        include: Optional[str] = None,
    ) -> Union[TransactionResponse, UnitError]:
        _validate_id("account_id", account_id)
        _validate_id("transaction_id", transaction_id)
        dprint("transactions.get()", {"account_id": account_id, "transaction_id": transaction_id})
        resp = await self.client.get(
            self._account_path(account_id, transaction_id),
            params={"include": include} if include else None,
        )
        return self._parse("transactions.get", resp, TransactionResponse)

    async def list(
        self,
        *,
        account_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        query: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        since: Union[datetime, str, None] = None,
        until: Union[datetime, str, None] = None,
        type: Optional[List[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Union[TransactionListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={
                "accountId": account_id,
                "customerId": customer_id,
                "query": query,
                "tags": tags,
                "since": since,
                "until": until,
                "type": type,
            },
            include=include,
            sort=sort,
        )
        dprint("transactions.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("transactions.list", resp, TransactionListResponse)

    async def update(
        self,
        account_id: str,
        transaction_id: str,
        request: Union[PatchTransactionRequest, Mapping[str, Any]],
    ) -> Union[TransactionResponse, UnitError]:
        """Replace the tags of a transaction (the only mutable field)."""
        _validate_id("account_id", account_id)
        _validate_id("transaction_id", transaction_id)
        req = _coerce_request("patch transaction request", request, PatchTransactionRequest)
        body = _document(req)
        djson("transactions.update body", body)
        resp = await self.client.patch(self._account_path(account_id, transaction_id), json=body)
        return self._parse("transactions.update", resp, TransactionResponse)


__all__ = ["TransactionsAPI", "TransactionResponse", "TransactionListResponse"]
