from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Union

from ..debug import dprint
from ..models.common import UnitEmptyResponse, UnitError, UnitListResponse, UnitResponse
from ..models.resources import Event
from .base import BaseResourceAPI, _list_params, _validate_id

EventResponse = UnitResponse[Event]
EventListResponse = UnitListResponse[Event]


class EventsAPI(BaseResourceAPI):
    """
    Events API.

    ``fire`` asks Unit to deliver an event again to every enabled webhook.
    """

    resource = "events"

    async def get(self, event_id: str) -> Union[EventResponse, UnitError]:
        _validate_id("event_id", event_id)
        resp = await self.client.get(self._path(event_id))
        return self._parse("events.get", resp, EventResponse)

    async def list(
        self,
        *,
        since: Union[datetime, str, None] = None,
        until: Union[datetime, str, None] = None,
        type: Optional[List[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Union[EventListResponse, UnitError]:
        params = _list_params(
            limit=limit,
            offset=offset,
            filters={"since": since, "until": until, "type": type},
        )
        dprint("events.list()", {"params": params})
        resp = await self.client.get(self.base_path, params=params)
        return self._parse("events.list", resp, EventListResponse)

    async def fire(self, event_id: str) -> Union[UnitEmptyResponse, UnitError]:
        _validate_id("event_id", event_id)
        dprint("events.fire()", {"event_id": event_id})
        resp = await self.client.post(self._path(event_id))
        return self._parse_empty("events.fire", resp)


__all__ = ["EventsAPI", "EventResponse", "EventListResponse"]
