"""Shared test fixtures."""

import copy
import json

import httpx
import pytest
import pytest_asyncio

from unit import Unit
from unit import debug

BASE_URL = "https://api.s.unit.sh"
TOKEN = "test-token-0123456789"

UNIT_ENV_VARS = ("UNIT_TOKEN", "UNIT_API_URL", "UNIT_TIMEOUT", "UNIT_DEBUG", "UNIT_API_VERSION")


class Recorder:
    """MockTransport handler: records every request and replays queued replies."""

    def __init__(self):
        self.requests = []
        self._replies = []

    def reply(self, status=200, body=None, *, text=None, headers=None):
        self._replies.append((status, body, text, headers))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._replies:
            status, body, text, headers = self._replies.pop(0)
        else:
            status, body, text, headers = 204, None, None, None
        if text is not None:
            return httpx.Response(status, text=text, headers=headers)
        if body is None:
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, json=body, headers=headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own UNIT_* variables out of the tests."""
    for name in UNIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    was_enabled = debug.is_enabled()
    debug.set_debug(False)
    yield
    debug.set_debug(was_enabled)


@pytest.fixture
def recorder():
    return Recorder()


@pytest_asyncio.fixture
async def unit(recorder):
    """Unit SDK wired to the recording transport."""
    sdk = Unit(TOKEN, BASE_URL, transport=httpx.MockTransport(recorder))
    yield sdk
    await sdk.aclose()


_ACH_PAYMENT = {
    "id": "1",
    "type": "achPayment",
    "attributes": {
        "createdAt": "2024-03-01T10:20:30.000Z",
        "status": "Pending",
        "direction": "Credit",
        "description": "Payroll",
        "amount": "500",
        "counterparty": {
            "routingNumber": "812345678",
            "accountNumber": "1000000001",
            "accountType": "Checking",
            "name": "Jane Doe",
        },
        "addenda": "March salary",
        "settlementDate": "2024-03-04",
        "tags": {"env": "test"},
    },
    "relationships": {
        "account": {"data": {"type": "depositAccount", "id": "10001"}},
        "customer": {"data": {"type": "individualCustomer", "id": "555"}},
        "counterparty": {"data": {"type": "counterparty", "id": "77"}},
    },
}

_BOOK_PAYMENT = {
    "id": "2",
    "type": "bookPayment",
    "attributes": {
        "createdAt": "2024-03-01T10:20:30.000Z",
        "status": "Sent",
        "direction": "Credit",
        "description": "Rent for March, apartment 4B",
        "amount": "125000",
        "tags": {},
    },
    "relationships": {
        "account": {"data": {"type": "depositAccount", "id": "10001"}},
        "customer": {"data": {"type": "individualCustomer", "id": "555"}},
        "counterpartyAccount": {"data": {"type": "depositAccount", "id": "10002"}},
        "counterpartyCustomer": {"data": {"type": "individualCustomer", "id": "556"}},
        "transaction": {"data": {"type": "transaction", "id": "9001"}},
    },
}


@pytest.fixture
def ach_payment_data():
    return copy.deepcopy(_ACH_PAYMENT)


@pytest.fixture
def book_payment_data():
    return copy.deepcopy(_BOOK_PAYMENT)


@pytest.fixture
def verified_request_data():
    return {
        "type": "achPayment",
        "attributes": {
            "amount": 500,
            "direction": "Credit",
            "description": "Payroll",
            "counterpartyName": "Jane Doe",
            "plaidProcessorToken": "tok_abc",
        },
        "relationships": {"account": {"data": {"type": "depositAccount", "id": "10001"}}},
    }
