from __future__ import annotations
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator

from .common import (
    Address,
    AuthorizedUser,
    BeneficialOwner,
    BusinessContact,
    Coordinates,
    FullName,
    Officer,
    Phone,
    Relationship,
    RelationshipArray,
    Tags,
    _APIModel,
    _StrictModel,
)


_DATETIME = TypeAdapter(datetime)


# =============================================================================
# Generic resource
# =============================================================================
class UnitResource(_APIModel):
    """
    ``{id, type, attributes, relationships}`` document.

    Attributes stay a plain dict on the generic form; the subclasses below
    narrow ``type`` and expose the commonly used attributes as properties.
    """
    id: str
    type: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relationships: Dict[str, Union[Relationship, RelationshipArray, Dict[str, Any]]] = Field(default_factory=dict)

    @property
    def created_at(self) -> Optional[str]:
        return self.attributes.get("createdAt")

    @property
    def status(self) -> Optional[str]:
        return self.attributes.get("status")

    @property
    def tags(self) -> Dict[str, str]:
        return dict(self.attributes.get("tags") or {})

    def related_id(self, name: str) -> Optional[str]:
        rel = self.relationships.get(name)
        if isinstance(rel, Relationship):
            return rel.data.id
        if isinstance(rel, dict) and isinstance(rel.get("data"), dict):
            return rel["data"].get("id")
        return None


# =============================================================================
# Applications & customers
# =============================================================================
class Application(UnitResource):
    type: Literal["individualApplication", "businessApplication"]


class ApplicationDocument(UnitResource):
    type: Literal["document"]


class Customer(UnitResource):
    type: Literal["individualCustomer", "businessCustomer"]

    @property
    def email(self) -> Optional[str]:
        return self.attributes.get("email") or (self.attributes.get("contact") or {}).get("email")


class CreateIndividualApplicationAttributes(_StrictModel):
    ssn: Optional[str] = Field(None, pattern=r"^\d{9}$")
    passport: Optional[str] = None
    nationality: Optional[str] = None
    full_name: FullName = Field(..., alias="fullName")
    date_of_birth: date = Field(..., alias="dateOfBirth")
    address: Address
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    phone: Phone
    ip: Optional[str] = None
    ein: Optional[str] = None
    dba: Optional[str] = None
    sole_proprietorship: Optional[bool] = Field(None, alias="soleProprietorship")
    device_fingerprints: Optional[List[Dict[str, Any]]] = Field(None, alias="deviceFingerprints")
    idempotency_key: Optional[str] = Field(None, alias="idempotencyKey")
    tags: Optional[Tags] = None

    @field_validator("passport")
    @classmethod
    def _one_id(cls, v: Optional[str], info) -> Optional[str]:
        if v is not None and info.data.get("ssn") is not None:
            raise ValueError("provide either ssn or passport, not both")
        return v


class CreateIndividualApplicationRequest(_StrictModel):
    type: Literal["individualApplication"] = "individualApplication"
    attributes: CreateIndividualApplicationAttributes


class CreateBusinessApplicationAttributes(_StrictModel):
    name: str = Field(..., min_length=1)
    dba: Optional[str] = None
    address: Address
    phone: Phone
    state_of_incorporation: str = Field(..., alias="stateOfIncorporation", min_length=2, max_length=2)
    ein: str = Field(..., pattern=r"^\d{9}$")
    entity_type: Literal[
        "Corporation", "LLC", "Partnership", "PubliclyTradedCorporation", "PrivatelyHeldCorporation", "NotForProfitOrganization"
    ] = Field(..., alias="entityType")
    ip: Optional[str] = None
    website: Optional[str] = None
    contact: BusinessContact
    officer: Officer
    beneficial_owners: List[BeneficialOwner] = Field(..., alias="beneficialOwners")
    idempotency_key: Optional[str] = Field(None, alias="idempotencyKey")
    tags: Optional[Tags] = None


class CreateBusinessApplicationRequest(_StrictModel):
    type: Literal["businessApplication"] = "businessApplication"
    attributes: CreateBusinessApplicationAttributes


CreateApplicationRequest = Annotated[
    Union[CreateIndividualApplicationRequest, CreateBusinessApplicationRequest],
    Field(discriminator="type"),
]


class PatchCustomerAttributes(_StrictModel):
    address: Optional[Address] = None
    phone: Optional[Phone] = None
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+$")
    dba: Optional[str] = None
    contact: Optional[BusinessContact] = None
    authorized_users: Optional[List[AuthorizedUser]] = Field(None, alias="authorizedUsers")
    tags: Optional[Tags] = None


class PatchCustomerRequest(_StrictModel):
    type: Literal["individualCustomer", "businessCustomer"]
    attributes: PatchCustomerAttributes


# =============================================================================
# Accounts
# =============================================================================
class Account(UnitResource):
    type: Literal["depositAccount"]

    @property
    def balance(self) -> Optional[int]:
        return self.attributes.get("balance")

    @property
    def available(self) -> Optional[int]:
        return self.attributes.get("available")


class CreateDepositAccountAttributes(_StrictModel):
    deposit_product: str = Field(..., alias="depositProduct", min_length=1)
    idempotency_key: Optional[str] = Field(None, alias="idempotencyKey")
    tags: Optional[Tags] = None


class CreateDepositAccountRelationships(_StrictModel):
    customer: Relationship


class CreateDepositAccountRequest(_StrictModel):
    type: Literal["depositAccount"] = "depositAccount"
    attributes: CreateDepositAccountAttributes
    relationships: CreateDepositAccountRelationships


class PatchDepositAccountAttributes(_StrictModel):
    deposit_product: Optional[str] = Field(None, alias="depositProduct")
    tags: Optional[Tags] = None


class PatchDepositAccountRequest(_StrictModel):
    type: Literal["depositAccount"] = "depositAccount"
    attributes: PatchDepositAccountAttributes


class CloseAccountAttributes(_StrictModel):
    reason: Literal["ByCustomer", "Fraud"] = "ByCustomer"


class CloseAccountRequest(_StrictModel):
    type: Literal["accountClose"] = "accountClose"
    attributes: CloseAccountAttributes = Field(default_factory=CloseAccountAttributes)


# =============================================================================
# Cards
# =============================================================================
class Card(UnitResource):
    type: Literal["individualDebitCard", "businessDebitCard", "individualVirtualDebitCard", "businessVirtualDebitCard"]

    @property
    def last4_digits(self) -> Optional[str]:
        return self.attributes.get("last4Digits")


class CreateDebitCardAttributes(_StrictModel):
    shipping_address: Optional[Address] = Field(None, alias="shippingAddress")
    full_name: Optional[FullName] = Field(None, alias="fullName")
    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth")
    address: Optional[Address] = None
    phone: Optional[Phone] = None
    email: Optional[str] = None
    design: Optional[str] = None
    idempotency_key: Optional[str] = Field(None, alias="idempotencyKey")
    tags: Optional[Tags] = None


class CreateDebitCardRelationships(_StrictModel):
    account: Relationship
    customer: Optional[Relationship] = None


class CreateDebitCardRequest(_StrictModel):
    type: Literal[
        "individualDebitCard", "businessDebitCard", "individualVirtualDebitCard", "businessVirtualDebitCard"
    ] = "individualDebitCard"
    attributes: CreateDebitCardAttributes = Field(default_factory=CreateDebitCardAttributes)
    relationships: CreateDebitCardRelationships


# =============================================================================
# Transactions & authorizations
# =============================================================================
class Transaction(UnitResource):
    """Any of the ledger transaction types (``originatedAchTransaction``, ``bookTransaction``, ...)."""

    @property
    def amount(self) -> Optional[int]:
        return self.attributes.get("amount")

    @property
    def direction(self) -> Optional[str]:
        return self.attributes.get("direction")


class PatchTransactionAttributes(_StrictModel):
    tags: Tags


class PatchTransactionRequest(_StrictModel):
    type: str = Field(..., min_length=1)
    attributes: PatchTransactionAttributes


class Authorization(UnitResource):
    type: Literal["authorization"]

    @property
    def merchant(self) -> Dict[str, Any]:
        return dict(self.attributes.get("merchant") or {})

    @property
    def coordinates(self) -> Optional[Coordinates]:
        raw = self.attributes.get("coordinates")
        return Coordinates.model_validate(raw) if raw else None


# =============================================================================
# Counterparties
# =============================================================================
class AchCounterparty(UnitResource):
    type: Literal["achCounterparty"]


class CreateCounterpartyAttributes(_StrictModel):
    name: str = Field(..., min_length=1)
    routing_number: str = Field(..., alias="routingNumber", pattern=r"^\d{9}$")
    account_number: str = Field(..., alias="accountNumber", min_length=1, max_length=17)
    account_type: Literal["Checking", "Savings"] = Field(..., alias="accountType")
    type: Literal["Business", "Person", "Unknown"]
    permissions: Optional[Literal["CreditOnly", "DebitOnly", "CreditAndDebit"]] = None
    idempotency_key: Optional[str] = Field(None, alias="idempotencyKey")
    tags: Optional[Tags] = None


class CreateCounterpartyRelationships(_StrictModel):
    customer: Relationship


class CreateCounterpartyRequest(_StrictModel):
    type: Literal["achCounterparty"] = "achCounterparty"
    attributes: CreateCounterpartyAttributes
    relationships: CreateCounterpartyRelationships


class PatchCounterpartyAttributes(_StrictModel):
    plaid_processor_token: Optional[str] = Field(None, alias="plaidProcessorToken")
    verify_name: Optional[bool] = Field(None, alias="verifyName")
    permissions: Optional[Literal["CreditOnly", "DebitOnly", "CreditAndDebit"]] = None
    tags: Optional[Tags] = None


class PatchCounterpartyRequest(_StrictModel):
    type: Literal["counterparty"] = "counterparty"
    attributes: PatchCounterpartyAttributes


# =============================================================================
# Webhooks & events
# =============================================================================
WebhookContentType = Literal["Json", "JsonAPI"]


class Webhook(UnitResource):
    type: Literal["webhook"]

    @property
    def url(self) -> Optional[str]:
        return self.attributes.get("url")


class CreateWebhookAttributes(_StrictModel):
    label: str = Field(..., min_length=1)
    url: str = Field(..., pattern=r"^https?://")
    token: str = Field(..., min_length=1)
    content_type: WebhookContentType = Field(..., alias="contentType")
    delivery_mode: Optional[Literal["AtMostOnce", "AtLeastOnce"]] = Field(None, alias="deliveryMode")


class CreateWebhookRequest(_StrictModel):
    type: Literal["webhook"] = "webhook"
    attributes: CreateWebhookAttributes


class PatchWebhookAttributes(_StrictModel):
    label: Optional[str] = None
    url: Optional[str] = Field(None, pattern=r"^https?://")
    content_type: Optional[WebhookContentType] = Field(None, alias="contentType")
    token: Optional[str] = None


class PatchWebhookRequest(_StrictModel):
    type: Literal["webhook"] = "webhook"
    attributes: PatchWebhookAttributes


class Event(UnitResource):
    """Any event type (``customer.created``, ``payment.clearing``, ...)."""

    @property
    def occurred_at(self) -> Optional[datetime]:
        raw = self.attributes.get("createdAt")
        return _DATETIME.validate_python(raw) if isinstance(raw, str) else None


# =============================================================================
# Customer tokens
# =============================================================================
TokenChannel = Literal["sms", "call"]


class CustomerToken(UnitResource):
    id: Optional[str] = None   # token replies carry no resource id
    type: Literal["customerBearerToken"]

    @property
    def token(self) -> Optional[str]:
        return self.attributes.get("token")

    @property
    def expires_in(self) -> Optional[int]:
        return self.attributes.get("expiresIn")


class CustomerTokenVerification(UnitResource):
    id: Optional[str] = None
    type: Literal["customerTokenVerification"]

    @property
    def verification_token(self) -> Optional[str]:
        return self.attributes.get("verificationToken")


class CreateTokenAttributes(_StrictModel):
    scope: str = Field(..., min_length=1)
    verification_token: Optional[str] = Field(None, alias="verificationToken")
    verification_code: Optional[str] = Field(None, alias="verificationCode")
    expires_in: Optional[int] = Field(None, alias="expiresIn", gt=0)

    @field_validator("verification_code")
    @classmethod
    def _code_needs_token(cls, v: Optional[str], info) -> Optional[str]:
        if v is not None and not info.data.get("verification_token"):
            raise ValueError("verificationCode requires verificationToken")
        return v


class CreateTokenRequest(_StrictModel):
    type: Literal["customerToken"] = "customerToken"
    attributes: CreateTokenAttributes


class CreateTokenVerificationAttributes(_StrictModel):
    channel: TokenChannel


class CreateTokenVerificationRequest(_StrictModel):
    type: Literal["customerTokenVerification"] = "customerTokenVerification"
    attributes: CreateTokenVerificationAttributes


__all__ = [
    "UnitResource",
    "Application",
    "ApplicationDocument",
    "Customer",
    "CreateIndividualApplicationAttributes",
    "CreateIndividualApplicationRequest",
    "CreateBusinessApplicationAttributes",
    "CreateBusinessApplicationRequest",
    "CreateApplicationRequest",
    "PatchCustomerAttributes",
    "PatchCustomerRequest",
    "Account",
    "CreateDepositAccountAttributes",
    "CreateDepositAccountRelationships",
    "CreateDepositAccountRequest",
    "PatchDepositAccountAttributes",
    "PatchDepositAccountRequest",
    "CloseAccountAttributes",
    "CloseAccountRequest",
    "Card",
    "CreateDebitCardAttributes",
    "CreateDebitCardRelationships",
    "CreateDebitCardRequest",
    "Transaction",
    "PatchTransactionAttributes",
    "PatchTransactionRequest",
    "Authorization",
    "AchCounterparty",
    "CreateCounterpartyAttributes",
    "CreateCounterpartyRelationships",
    "CreateCounterpartyRequest",
    "PatchCounterpartyAttributes",
    "PatchCounterpartyRequest",
    "WebhookContentType",
    "Webhook",
    "CreateWebhookAttributes",
    "CreateWebhookRequest",
    "PatchWebhookAttributes",
    "PatchWebhookRequest",
    "Event",
    "TokenChannel",
    "CustomerToken",
    "CustomerTokenVerification",
    "CreateTokenAttributes",
    "CreateTokenRequest",
    "CreateTokenVerificationAttributes",
    "CreateTokenVerificationRequest",
]
