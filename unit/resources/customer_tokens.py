from __future__ import annotations
from typing import Any, Mapping, Union

from ..debug import dprint
from ..models.common import UnitError, UnitResponse
from ..models.resources import (
    CreateTokenRequest,
    CreateTokenVerificationRequest,
    CustomerToken,
    CustomerTokenVerification,
)
from .base import BaseResourceAPI, _coerce_request, _document, _validate_id

CustomerTokenResponse = UnitResponse[CustomerToken]
CustomerTokenVerificationResponse = UnitResponse[CustomerTokenVerification]


class CustomerTokensAPI(BaseResourceAPI):
    """
    Customer bearer tokens.

    Scopes that move money need a verification round first:
    ``create_token_verification`` sends a code to the customer, and the
    returned ``verificationToken`` plus that code go into ``create_token``.
    """

    resource = "customers"

    async def create_token(
        self,
        customer_id: str,
        request: Union[CreateTokenRequest, Mapping[str, Any]],
    ) -> Union[CustomerTokenResponse, UnitError]:
        _validate_id("customer_id", customer_id)
        req = _coerce_request("create token request", request, CreateTokenRequest)
        # the response carries a bearer token; never dump it
        dprint("customer_tokens.create_token()", {"customer_id": customer_id, "scope": req.attributes.scope})
        resp = await self.client.post(self._path(customer_id, "token"), json=_document(req))
        return self._parse("customer_tokens.create_token", resp, CustomerTokenResponse)

    async def create_token_verification(
        self,
        customer_id: str,
        request: Union[CreateTokenVerificationRequest, Mapping[str, Any]],
    ) -> Union[CustomerTokenVerificationResponse, UnitError]:
        _validate_id("customer_id", customer_id)
        req = _coerce_request("create token verification request", request, CreateTokenVerificationRequest)
        dprint("customer_tokens.create_token_verification()", {"customer_id": customer_id, "channel": req.attributes.channel})
        resp = await self.client.post(self._path(customer_id, "token", "verification"), json=_document(req))
        return self._parse("customer_tokens.create_token_verification", resp, CustomerTokenVerificationResponse)


__all__ = ["CustomerTokensAPI", "CustomerTokenResponse", "CustomerTokenVerificationResponse"]
