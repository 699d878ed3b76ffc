"""
Typed models for Unit API resources and request bodies.

- ``common``: relationships, shared value objects, error and envelope documents
- ``payments``: the payment / create-payment tagged unions
- ``resources``: accounts, customers, cards, transactions, webhooks, ...
"""

from .common import *  # noqa: F401,F403
from .common import __all__ as _common_all
from .payments import *  # noqa: F401,F403
from .payments import __all__ as _payments_all
from .resources import *  # noqa: F401,F403
from .resources import __all__ as _resources_all

__all__ = [*_common_all, *_payments_all, *_resources_all]
