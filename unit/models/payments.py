from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
)

from ..debug import dprint, djson
from ..errors import UnitValidationError
from .common import (
    Counterparty,
    Direction,
    Relationship,
    Tags,
    _StrictModel,
)

logger = logging.getLogger(__name__)

# Remote lifecycle; only read here, never driven locally.
PaymentStatus = Literal["Pending", "Rejected", "Clearing", "Sent", "Canceled", "Returned"]
PaymentType = Literal["achPayment", "bookPayment"]

ACH_DESCRIPTION_MAX = 10
BOOK_DESCRIPTION_MAX = 50
ADDENDA_MAX = 50
IDEMPOTENCY_KEY_MAX = 255


# =============================================================================
# Payment resources
# =============================================================================
class BasePaymentAttributes(_StrictModel):
    created_at: datetime = Field(..., alias="createdAt")
    status: PaymentStatus
    reason: Optional[str] = None
    direction: Direction
    description: str
    amount: str = Field(..., pattern=r"^\d+$")   # cents, as a decimal string
    tags: Tags = Field(default_factory=dict)

    @property
    def amount_cents(self) -> int:
        return int(self.amount)


class AchPaymentAttributes(BasePaymentAttributes):
    description: str = Field(..., max_length=ACH_DESCRIPTION_MAX)
    counterparty: Counterparty
    addenda: Optional[str] = Field(None, max_length=ADDENDA_MAX)
    settlement_date: Optional[date] = Field(None, alias="settlementDate")


class AchPaymentRelationships(_StrictModel):
    account: Relationship
    customer: Relationship
    counterparty: Relationship


class AchPayment(_StrictModel):
    """ACH origination, settled through the external clearing network."""
    id: str = Field(..., min_length=1)
    type: Literal["achPayment"]
    attributes: AchPaymentAttributes
    relationships: AchPaymentRelationships


class BookPaymentAttributes(BasePaymentAttributes):
    description: str = Field(..., max_length=BOOK_DESCRIPTION_MAX)


class BookPaymentRelationships(_StrictModel):
    account: Relationship
    customer: Relationship
    counterparty_account: Relationship = Field(..., alias="counterpartyAccount")
    counterparty_customer: Relationship = Field(..., alias="counterpartyCustomer")
    transaction: Relationship


class BookPayment(_StrictModel):
    """Transfer between two accounts held at the same provider."""
    id: str = Field(..., min_length=1)
    type: Literal["bookPayment"]
    attributes: BookPaymentAttributes
    relationships: BookPaymentRelationships


Payment = Annotated[Union[AchPayment, BookPayment], Field(discriminator="type")]

_payment_adapter: TypeAdapter = TypeAdapter(Payment)


def parse_payment(payload: Union[Mapping[str, Any], str, bytes]) -> Union[AchPayment, BookPayment]:
    """
    Validate a payment resource (decoded dict or raw JSON).

    Raises UnitValidationError for an unknown ``type`` or any field that does
    not belong to the selected variant.
    """
    try:
        if isinstance(payload, (str, bytes)):
            return _payment_adapter.validate_json(payload)
        return _payment_adapter.validate_python(payload)
    except ValidationError as e:
        raise UnitValidationError.from_pydantic("payment", e) from e


def payment_kind(payment: Union[AchPayment, BookPayment]) -> PaymentType:
    if isinstance(payment, AchPayment):
        return "achPayment"
    if isinstance(payment, BookPayment):
        return "bookPayment"
    raise TypeError(f"not a payment resource: {type(payment).__name__}")


# =============================================================================
# Create requests
# =============================================================================
Cents = Annotated[int, Field(gt=0, strict=True)]
IdempotencyKey = Annotated[str, Field(min_length=1, max_length=IDEMPOTENCY_KEY_MAX)]


class CreateBookPaymentAttributes(_StrictModel):
    amount: Cents
    description: str = Field(..., min_length=1, max_length=BOOK_DESCRIPTION_MAX)
    idempotency_key: Optional[IdempotencyKey] = Field(None, alias="idempotencyKey")
    tags: Optional[Tags] = None


class CreateBookPaymentRelationships(_StrictModel):
    account: Relationship
    counterparty_account: Relationship = Field(..., alias="counterpartyAccount")


class CreateBookPaymentRequest(_StrictModel):
    """
    Move funds between two accounts inside the system.

    There is no ``direction``: a book payment always pushes from ``account``
    to ``counterpartyAccount``. ``idempotencyKey`` is optional here, so a
    retried request without one may create a second payment.
    """
    type: Literal["bookPayment"] = "bookPayment"
    attributes: CreateBookPaymentAttributes
    relationships: CreateBookPaymentRelationships


class CreateInlinePaymentAttributes(_StrictModel):
    amount: Cents
    direction: Direction
    counterparty: Counterparty
    description: str = Field(..., min_length=1, max_length=ACH_DESCRIPTION_MAX)
    addenda: Optional[str] = Field(None, max_length=ADDENDA_MAX)
    idempotency_key: IdempotencyKey = Field(..., alias="idempotencyKey")
    tags: Optional[Tags] = None


class AccountOnlyRelationships(_StrictModel):
    account: Relationship


class CreateInlinePaymentRequest(_StrictModel):
    """ACH payment to an ad hoc counterparty described inline."""
    type: Literal["achPayment"] = "achPayment"
    attributes: CreateInlinePaymentAttributes
    relationships: AccountOnlyRelationships


class CreateLinkedPaymentAttributes(_StrictModel):
    amount: Cents
    direction: Direction
    description: str = Field(..., min_length=1, max_length=ACH_DESCRIPTION_MAX)
    addenda: Optional[str] = Field(None, max_length=ADDENDA_MAX)
    idempotency_key: IdempotencyKey = Field(..., alias="idempotencyKey")
    tags: Optional[Tags] = None


class CreateLinkedPaymentRelationships(_StrictModel):
    account: Relationship
    counterparty: Relationship


class CreateLinkedPaymentRequest(_StrictModel):
    """ACH payment to a previously created counterparty resource."""
    type: Literal["achPayment"] = "achPayment"
    attributes: CreateLinkedPaymentAttributes
    relationships: CreateLinkedPaymentRelationships


class CreateVerifiedPaymentAttributes(_StrictModel):
    amount: Cents
    direction: Direction
    description: str = Field(..., min_length=1, max_length=ACH_DESCRIPTION_MAX)
    counterparty_name: str = Field(..., alias="counterpartyName", min_length=1)
    plaid_processor_token: str = Field(..., alias="plaidProcessorToken", min_length=1)


class CreateVerifiedPaymentRequest(_StrictModel):
    """
    ACH payment funded through a processor token issued by a bank-link
    provider instead of raw account numbers. No idempotency key is accepted.
    """
    type: Literal["achPayment"] = "achPayment"
    attributes: CreateVerifiedPaymentAttributes
    relationships: AccountOnlyRelationships


_SHAPE_BY_CLASS = {
    CreateBookPaymentRequest: "book",
    CreateInlinePaymentRequest: "inline",
    CreateLinkedPaymentRequest: "linked",
    CreateVerifiedPaymentRequest: "verified",
}


def create_payment_shape(value: Any) -> Optional[str]:
    """
    Pick the create-request shape for a payload.

    ``bookPayment`` is its own shape. For ``achPayment`` a processor token
    wins, then a counterparty relationship, then an inline counterparty.
    Returns None when nothing matches.
    """
    if isinstance(value, BaseModel):
        return _SHAPE_BY_CLASS.get(type(value))
    if not isinstance(value, Mapping):
        return None

    kind = value.get("type")
    attrs = value.get("attributes")
    rels = value.get("relationships")
    attrs = attrs if isinstance(attrs, Mapping) else {}
    rels = rels if isinstance(rels, Mapping) else {}

    if kind == "bookPayment":
        return "book"
    if kind != "achPayment":
        return None
    if "plaidProcessorToken" in attrs or "plaid_processor_token" in attrs:
        return "verified"
    if "counterparty" in rels:
        return "linked"
    if "counterparty" in attrs:
        return "inline"
    return None


CreatePaymentRequest = Annotated[
    Union[
        Annotated[CreateBookPaymentRequest, Tag("book")],
        Annotated[CreateInlinePaymentRequest, Tag("inline")],
        Annotated[CreateLinkedPaymentRequest, Tag("linked")],
        Annotated[CreateVerifiedPaymentRequest, Tag("verified")],
    ],
    Discriminator(
        create_payment_shape,
        custom_error_type="payment_shape",
        custom_error_message=(
            "type must be 'bookPayment' or 'achPayment', and an achPayment needs exactly one of "
            "an inline counterparty, a counterparty relationship or a plaidProcessorToken"
        ),
    ),
]

_create_adapter: TypeAdapter = TypeAdapter(CreatePaymentRequest)


def parse_create_payment_request(payload: Union[Mapping[str, Any], str, bytes]):
    """Validate a create-payment body (decoded dict or raw JSON) into its shape."""
    try:
        if isinstance(payload, (str, bytes)):
            return _create_adapter.validate_json(payload)
        return _create_adapter.validate_python(payload)
    except ValidationError as e:
        raise UnitValidationError.from_pydantic("create payment request", e) from e


def dump_create_payment_request(request) -> Dict[str, Any]:
    return _create_adapter.dump_python(request, mode="json", by_alias=True, exclude_none=True)


def _rel(type_: str, id_: str) -> Dict[str, Any]:
    return {"data": {"type": type_, "id": id_}}


def _counterparty_dict(counterparty: Union[Counterparty, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(counterparty, Counterparty):
        return counterparty.to_api()
    return dict(counterparty)


def build_create_payment_request(
    *,
    type: PaymentType = "achPayment",
    amount: int,
    description: str,
    account_id: str,
    direction: Optional[str] = None,
    counterparty: Union[Counterparty, Mapping[str, Any], None] = None,
    counterparty_id: Optional[str] = None,
    counterparty_account_id: Optional[str] = None,
    counterparty_name: Optional[str] = None,
    plaid_processor_token: Optional[str] = None,
    addenda: Optional[str] = None,
    idempotency_key: Optional[str] = None,
    tags: Optional[Mapping[str, str]] = None,
):
    """
    Build one of the four create-payment shapes from flat keyword fields.

    * ``type="bookPayment"`` needs ``counterparty_account_id`` and takes no
      ``direction``.
    * ``type="achPayment"`` needs ``direction`` plus exactly one of
      ``counterparty`` (inline), ``counterparty_id`` (linked) or
      ``plaid_processor_token`` (verified, with ``counterparty_name``).
      Inline and linked payments require ``idempotency_key``; verified
      payments do not accept one.

    Raises UnitValidationError before anything is sent.
    """
    if type not in ("achPayment", "bookPayment"):
        raise UnitValidationError(f"unknown payment type {type!r}")

    sources = [
        name
        for name, val in (
            ("counterparty", counterparty),
            ("counterparty_id", counterparty_id),
            ("plaid_processor_token", plaid_processor_token),
        )
        if val is not None
    ]

    if type == "bookPayment":
        if direction is not None:
            raise UnitValidationError("bookPayment does not take a direction")
        if sources:
            raise UnitValidationError(f"bookPayment does not take {', '.join(sources)}; use counterparty_account_id")
        if idempotency_key is None:
            logger.warning(
                "bookPayment created without an idempotency key; retrying this request may create a duplicate payment"
            )
    else:
        if len(sources) != 1:
            raise UnitValidationError(
                "achPayment needs exactly one of counterparty, counterparty_id, plaid_processor_token"
                + (f" (got {', '.join(sources)})" if sources else "")
            )
        if counterparty_account_id is not None:
            raise UnitValidationError("counterparty_account_id is only valid for bookPayment")
        if plaid_processor_token is not None and idempotency_key is not None:
            raise UnitValidationError("idempotency_key is not supported for processor-token payments")

    attributes: Dict[str, Any] = {"amount": amount, "description": description}
    relationships: Dict[str, Any] = {"account": _rel("depositAccount", account_id)}

    if direction is not None:
        attributes["direction"] = direction
    if counterparty is not None:
        attributes["counterparty"] = _counterparty_dict(counterparty)
    if counterparty_id is not None:
        relationships["counterparty"] = _rel("counterparty", counterparty_id)
    if counterparty_account_id is not None:
        relationships["counterpartyAccount"] = _rel("depositAccount", counterparty_account_id)
    if plaid_processor_token is not None:
        attributes["plaidProcessorToken"] = plaid_processor_token
    if counterparty_name is not None:
        attributes["counterpartyName"] = counterparty_name
    if addenda is not None:
        attributes["addenda"] = addenda
    if idempotency_key is not None:
        attributes["idempotencyKey"] = idempotency_key
    if tags is not None:
        attributes["tags"] = dict(tags)

    payload = {"type": type, "attributes": attributes, "relationships": relationships}
    djson("payments.build_create_payment_request payload", payload)
    request = parse_create_payment_request(payload)
    dprint("payments.build_create_payment_request()", {"shape": create_payment_shape(request)})
    return request


# =============================================================================
# Patch request
# =============================================================================
class PatchPaymentAttributes(_StrictModel):
    tags: Tags


class PatchPaymentRequest(_StrictModel):
    """Only ``tags`` can change once a payment exists."""
    type: PaymentType
    attributes: PatchPaymentAttributes

    @classmethod
    def for_tags(cls, type_: PaymentType, tags: Mapping[str, str]) -> "PatchPaymentRequest":
        return cls(type=type_, attributes=PatchPaymentAttributes(tags=dict(tags)))


def parse_patch_payment_request(payload: Union[Mapping[str, Any], str, bytes]) -> PatchPaymentRequest:
    try:
        if isinstance(payload, (str, bytes)):
            return PatchPaymentRequest.model_validate_json(payload)
        return PatchPaymentRequest.model_validate(payload)
    except ValidationError as e:
        raise UnitValidationError.from_pydantic("patch payment request", e) from e


__all__ = [
    "PaymentStatus",
    "PaymentType",
    "BasePaymentAttributes",
    "AchPaymentAttributes",
    "AchPaymentRelationships",
    "AchPayment",
    "BookPaymentAttributes",
    "BookPaymentRelationships",
    "BookPayment",
    "Payment",
    "parse_payment",
    "payment_kind",
    "CreateBookPaymentAttributes",
    "CreateBookPaymentRelationships",
    "CreateBookPaymentRequest",
    "CreateInlinePaymentAttributes",
    "AccountOnlyRelationships",
    "CreateInlinePaymentRequest",
    "CreateLinkedPaymentAttributes",
    "CreateLinkedPaymentRelationships",
    "CreateLinkedPaymentRequest",
    "CreateVerifiedPaymentAttributes",
    "CreateVerifiedPaymentRequest",
    "CreatePaymentRequest",
    "create_payment_shape",
    "parse_create_payment_request",
    "dump_create_payment_request",
    "build_create_payment_request",
    "PatchPaymentAttributes",
    "PatchPaymentRequest",
    "parse_patch_payment_request",
]
