"""
Unit-Python SDK

Async, typed client for the Unit banking-as-a-service API:
- Payments (ACH inline / linked / processor-token, book payments)
- Accounts, customers, applications, cards, transactions
- Counterparties, authorizations, events, webhooks, customer tokens
- Typed value-object helpers (address, full name, phone, ...)
"""

from __future__ import annotations

from typing import Optional

import httpx

# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------
__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Public API re-exports
# ---------------------------------------------------------------------------
from .config import UnitConfig
from .client import UnitClient
from .errors import (
    UnitSDKError,
    UnitConfigError,
    UnitValidationError,
    UnitTransportError,
)
from .models import (
    AchPayment,
    BookPayment,
    CreateBookPaymentRequest,
    CreateInlinePaymentRequest,
    CreateLinkedPaymentRequest,
    CreateVerifiedPaymentRequest,
    PatchPaymentRequest,
    UnitError,
    UnitListResponse,
    UnitResponse,
    build_create_payment_request,
    is_error,
    parse_payment,
)
from .resources import (
    PaymentsAPI,
    AccountsAPI,
    CustomersAPI,
    ApplicationsAPI,
    CardsAPI,
    TransactionsAPI,
    WebhooksAPI,
    CounterpartiesAPI,
    AuthorizationsAPI,
    EventsAPI,
    CustomerTokensAPI,
)
from . import helpers
from .utils import (
    make_idempotency_key,
    ensure_idempotency_key,
    parse_cents,
    to_cents,
    safe_tags,
)
from .debug import dprint, djson, is_enabled as debug_enabled, set_debug as set_debug_enabled


class Unit:
    """
    One entry point holding every resource facade.

        async with Unit(token, "https://api.s.unit.sh") as unit:
            resp = await unit.payments.get("123")
            if unit.is_error(resp):
                ...

    All facades share one ``UnitClient`` (token and base URL fixed at
    construction).
    """

    helpers = helpers

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        config: Optional[UnitConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = UnitClient(config, token=token, base_url=base_url, transport=transport)
        self.applications = ApplicationsAPI(self.client)
        self.customers = CustomersAPI(self.client)
        self.accounts = AccountsAPI(self.client)
        self.transactions = TransactionsAPI(self.client)
        self.cards = CardsAPI(self.client)
        self.webhooks = WebhooksAPI(self.client)
        self.customer_tokens = CustomerTokensAPI(self.client)
        self.counterparties = CounterpartiesAPI(self.client)
        self.events = EventsAPI(self.client)
        self.payments = PaymentsAPI(self.client)
        self.authorizations = AuthorizationsAPI(self.client)
        dprint("Unit init", {"base_url": self.client.base_url})

    @staticmethod
    def is_error(response) -> bool:
        return is_error(response)

    async def __aenter__(self) -> "Unit":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = (
    "__version__",
    # core
    "Unit",
    "UnitConfig",
    "UnitClient",
    # errors
    "UnitSDKError",
    "UnitConfigError",
    "UnitValidationError",
    "UnitTransportError",
    "UnitError",
    "is_error",
    # payment models
    "AchPayment",
    "BookPayment",
    "CreateBookPaymentRequest",
    "CreateInlinePaymentRequest",
    "CreateLinkedPaymentRequest",
    "CreateVerifiedPaymentRequest",
    "PatchPaymentRequest",
    "UnitResponse",
    "UnitListResponse",
    "build_create_payment_request",
    "parse_payment",
    # resources
    "PaymentsAPI",
    "AccountsAPI",
    "CustomersAPI",
    "ApplicationsAPI",
    "CardsAPI",
    "TransactionsAPI",
    "WebhooksAPI",
    "CounterpartiesAPI",
    "AuthorizationsAPI",
    "EventsAPI",
    "CustomerTokensAPI",
    # helpers & utils
    "helpers",
    "make_idempotency_key",
    "ensure_idempotency_key",
    "parse_cents",
    "to_cents",
    "safe_tags",
    # debug controls
    "dprint",
    "djson",
    "debug_enabled",
    "set_debug_enabled",
)
