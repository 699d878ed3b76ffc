from __future__ import annotations
from typing import Any, Mapping, Optional, Union

from ..debug import dprint, djson
from ..models.common import UnitEmptyResponse, UnitError, UnitListResponse, UnitResponse
from ..models.resources import CreateWebhookRequest, PatchWebhookRequest, Webhook
from .base import BaseResourceAPI, _coerce_request, _document, _list_params, _validate_id

WebhookResponse = UnitResponse[Webhook]
WebhookListResponse = UnitListResponse[Webhook]


class WebhooksAPI(BaseResourceAPI):
    """
    Webhook subscriptions API.

    Manages where Unit delivers events; receiving and verifying the
    deliveries themselves is up to the application.
    """

    resource = "webhooks"

    async def create(self, request: Union[CreateWebhookRequest, Mapping[str, Any]]) -> Union[WebhookResponse, UnitError]:
        req = _coerce_request("create webhook request", request, CreateWebhookRequest)
        body = _document(req)
        dprint("webhooks.create()", {"label": req.attributes.label, "url": req.attributes.url})
        djson("webhooks.create body", body)
        resp = await self.client.post(self.base_path, json=body)
        return self._parse("webhooks.create", resp, WebhookResponse)

    async def get(self, webhook_id: str) -> Union[WebhookResponse, UnitError]:
        _validate_id("webhook_id", webhook_id)
        resp = await self.client.get(self._path(webhook_id))
        return self._parse("webhooks.get", resp, WebhookResponse)

    async def list(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Union[WebhookListResponse, UnitError]:
        params = _list_params(limit=limit, offset=offset)
        dprint("webhooks.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("webhooks.list", resp, WebhookListResponse)

    async def update(
        self,
        webhook_id: str,
        request: Union[PatchWebhookRequest, Mapping[str, Any]],
    ) -> Union[WebhookResponse, UnitError]:
        _validate_id("webhook_id", webhook_id)
        req = _coerce_request("patch webhook request", request, PatchWebhookRequest)
        resp = await self.client.patch(self._path(webhook_id), json=_document(req))
        return self._parse("webhooks.update", resp, WebhookResponse)

    async def enable(self, webhook_id: str) -> Union[WebhookResponse, UnitError]:
        _validate_id("webhook_id", webhook_id)
        dprint("webhooks.enable()", {"webhook_id": webhook_id})
        resp = await self.client.post(self._path(webhook_id, "enable"))
        return self._parse("webhooks.enable", resp, WebhookResponse)

    async def disable(self, webhook_id: str) -> Union[WebhookResponse, UnitError]:
        _validate_id("webhook_id", webhook_id)
        dprint("webhooks.disable()", {"webhook_id": webhook_id})
        resp = await self.client.post(self._path(webhook_id, "disable"))
        return self._parse("webhooks.disable", resp, WebhookResponse)

    async def delete(self, webhook_id: str) -> Union[UnitEmptyResponse, UnitError]:
        _validate_id("webhook_id", webhook_id)
        dprint("webhooks.delete()", {"webhook_id": webhook_id})
        resp = await self.client.delete(self._path(webhook_id))
        return self._parse_empty("webhooks.delete", resp)


__all__ = ["WebhooksAPI", "WebhookResponse", "WebhookListResponse"]
