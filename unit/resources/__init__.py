from __future__ import annotations

"""
Resource APIs for the Unit SDK.

Public exports:

- PaymentsAPI
- AccountsAPI
- CustomersAPI
- ApplicationsAPI
- CardsAPI
- TransactionsAPI
- WebhooksAPI
- CounterpartiesAPI
- AuthorizationsAPI
- EventsAPI
- CustomerTokensAPI
"""

from .payments import PaymentsAPI
from .accounts import AccountsAPI
from .customers import CustomersAPI
from .applications import ApplicationsAPI
from .cards import CardsAPI
from .transactions import TransactionsAPI
from .webhooks import WebhooksAPI
from .counterparties import CounterpartiesAPI
from .authorizations import AuthorizationsAPI
from .events import EventsAPI
from .customer_tokens import CustomerTokensAPI

__all__ = (
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
)
