from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Union

from ..debug import dprint, djson
from ..errors import UnitValidationError
from ..models.common import UnitError, UnitListResponse, UnitResponse
from ..models.payments import (
    CreateBookPaymentRequest,
    Payment,
    PatchPaymentRequest,
    PaymentType,
    create_payment_shape,
    dump_create_payment_request,
    parse_create_payment_request,
    parse_patch_payment_request,
)
from .base import BaseResourceAPI, _list_params, _validate_id

PaymentResponse = UnitResponse[Payment]
PaymentListResponse = UnitListResponse[Payment]


class PaymentsAPI(BaseResourceAPI):
    """
    Payments API (ACH and book payments).

    Notes:
      - ``create`` accepts any of the four create shapes (model or dict) and
        validates it locally before sending.
      - ``update`` can only change ``tags``; anything else is rejected locally.
      - Status changes (Pending -> Clearing -> Sent ...) happen server-side;
        re-``get`` the payment to observe them.
    """

    resource = "payments"

    async def create(self, request: Any) -> Union[PaymentResponse, UnitError]:
        """
        Create a payment.

        Parameters
        ----------
        request :
            A ``CreateBookPaymentRequest`` / ``CreateInlinePaymentRequest`` /
            ``CreateLinkedPaymentRequest`` / ``CreateVerifiedPaymentRequest``,
            or the equivalent dict. See ``build_create_payment_request`` for
            a keyword-argument builder.

        Returns
        -------
        UnitResponse[Payment] or UnitError

        Raises
        ------
        UnitValidationError
            If the body matches none of the four shapes.
        """
        if isinstance(request, Mapping):
            request = parse_create_payment_request(request)
        shape = create_payment_shape(request)
        if shape is None:
            raise UnitValidationError(f"unsupported create payment request: {type(request).__name__}")

        if isinstance(request, CreateBookPaymentRequest) and request.attributes.idempotency_key is None:
            dprint("payments.create: bookPayment without idempotencyKey; a retry may duplicate it")

        body = {"data": dump_create_payment_request(request)}
        dprint("payments.create()", {"shape": shape, "type": request.type})
        djson("payments.create body", body)

        resp = await self.client.post(self.base_path, json=body)
        return self._parse("payments.create", resp, PaymentResponse)

    async def get(self, payment_id: str, *, include: Optional[str] = None) -> Union[PaymentResponse, UnitError]:
        """
        Fetch a payment. ``include`` may name related resources
        (``"customer"``, ``"account"``) to embed under ``included``.
        """
        _validate_id("payment_id", payment_id)
        params = {"include": include} if include else None
        dprint("payments.get()", {"payment_id": payment_id, "include": include})
        resp = await self.client.get(self._path(payment_id), params=params)
        return self._parse("payments.get", resp, PaymentResponse)

    async def list(
        self,
        *,
        account_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        status: Optional[List[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Union[PaymentListResponse, UnitError]:
        """List payments, newest first unless ``sort`` says otherwise."""
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"accountId": account_id, "customerId": customer_id, "tags": tags, "status": status},
            include=include,
            sort=sort,
        )
        dprint("payments.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("payments.list", resp, PaymentListResponse)

    async def update(
        self,
        payment_id: str,
        request: Union[PatchPaymentRequest, Mapping[str, Any]],
    ) -> Union[PaymentResponse, UnitError]:
        """
        Replace the tags of a payment.

        Any attribute other than ``tags`` (``status``, ``amount``, ...) or a
        ``relationships`` block raises UnitValidationError without a request.
        """
        _validate_id("payment_id", payment_id)
        if not isinstance(request, PatchPaymentRequest):
            if not isinstance(request, Mapping):
                raise UnitValidationError(f"patch payment request must be a mapping, got {type(request).__name__}")
            request = parse_patch_payment_request(request)

        body: Dict[str, Any] = {"data": request.to_api()}
        dprint("payments.update()", {"payment_id": payment_id, "type": request.type})
        djson("payments.update body", body)
        resp = await self.client.patch(self._path(payment_id), json=body)
        return self._parse("payments.update", resp, PaymentResponse)

    async def update_tags(
        self,
        payment_id: str,
        tags: Mapping[str, str],
        *,
        type: PaymentType,
    ) -> Union[PaymentResponse, UnitError]:
        """Convenience: ``update`` built from a tags mapping; ``type`` must match the stored payment."""
        return await self.update(payment_id, {"type": type, "attributes": {"tags": dict(tags)}})


__all__ = ["PaymentsAPI", "PaymentResponse", "PaymentListResponse"]
