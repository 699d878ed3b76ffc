from __future__ import annotations
from datetime import date
from typing import Any, Dict, Generic, List, Literal, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Base models
# =============================================================================
class _APIModel(BaseModel):
    """
    Loose model that accepts extra fields so the SDK doesn't break
    when Unit adds response properties.
    """
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,   # allow using field names when aliases exist
        str_strip_whitespace=True,
    )

    def to_api(self) -> Dict[str, Any]:
        """Wire form: camelCase keys, ``None`` values dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _StrictModel(_APIModel):
    """
    Closed model: unknown keys are rejected.

    Used wherever a shape is selected by a discriminant and must not carry
    fields that belong to a sibling variant.
    """
    model_config = ConfigDict(extra="forbid")


Tags = Dict[str, str]

Direction = Literal["Credit", "Debit"]
AccountType = Literal["Checking", "Savings"]


# =============================================================================
# Relationships
# =============================================================================
class RelationshipData(_StrictModel):
    type: str
    id: str

    @field_validator("type", "id")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be a non-empty string")
        return v


class Relationship(_StrictModel):
    """A typed reference to another resource: ``{"data": {"type", "id"}}``."""
    data: RelationshipData

    @classmethod
    def of(cls, type_: str, id_: str) -> "Relationship":
        return cls(data=RelationshipData(type=type_, id=id_))

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def type(self) -> str:
        return self.data.type


class RelationshipArray(_StrictModel):
    data: List[RelationshipData]


# =============================================================================
# Shared value objects
# =============================================================================
class Counterparty(_StrictModel):
    """The external bank account on the other side of an ACH payment."""
    routing_number: str = Field(..., alias="routingNumber", pattern=r"^\d{9}$")
    account_number: str = Field(..., alias="accountNumber", min_length=1, max_length=17)
    account_type: AccountType = Field(..., alias="accountType")
    name: str = Field(..., min_length=1)


class Address(_StrictModel):
    street: str = Field(..., min_length=1)
    street2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: Optional[str] = None
    postal_code: str = Field(..., alias="postalCode", min_length=1)
    country: str = Field(..., min_length=2, max_length=2)

    @field_validator("country")
    @classmethod
    def _country_upper(cls, v: str) -> str:
        return v.upper()


class FullName(_StrictModel):
    first: str = Field(..., min_length=1)
    last: str = Field(..., min_length=1)


class Phone(_StrictModel):
    country_code: str = Field(..., alias="countryCode", pattern=r"^\d{1,3}$")
    number: str = Field(..., pattern=r"^\d{4,15}$")


class Coordinates(_StrictModel):
    longitude: float = Field(..., ge=-180, le=180)
    latitude: float = Field(..., ge=-90, le=90)


class BusinessContact(_StrictModel):
    full_name: FullName = Field(..., alias="fullName")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    phone: Phone


class AuthorizedUser(_StrictModel):
    full_name: FullName = Field(..., alias="fullName")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    phone: Phone


class Officer(_StrictModel):
    """Business officer; exactly one of ``ssn``/``passport`` is expected."""
    full_name: FullName = Field(..., alias="fullName")
    title: Optional[str] = None
    ssn: Optional[str] = Field(None, pattern=r"^\d{9}$")
    passport: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: date = Field(..., alias="dateOfBirth")
    address: Address
    phone: Phone
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    status: Optional[str] = None


class BeneficialOwner(_StrictModel):
    full_name: FullName = Field(..., alias="fullName")
    ssn: Optional[str] = Field(None, pattern=r"^\d{9}$")
    passport: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: date = Field(..., alias="dateOfBirth")
    address: Address
    phone: Phone
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    percentage: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[str] = None


# =============================================================================
# Errors (returned as values, never raised)
# =============================================================================
class UnitErrorPayload(_APIModel):
    status: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    details: Optional[str] = None
    code: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_str(cls, v: Any) -> Any:
        # some gateways send the HTTP status as a number
        return str(v) if isinstance(v, int) else v


class UnitError(_APIModel):
    """``{"errors": [...]}`` reply; always holds at least one entry."""
    errors: List[UnitErrorPayload] = Field(..., min_length=1)

    @property
    def status(self) -> Optional[str]:
        return self.errors[0].status

    @property
    def title(self) -> Optional[str]:
        return self.errors[0].title

    def __str__(self) -> str:
        first = self.errors[0]
        detail = f": {first.detail}" if first.detail else ""
        return f"[{first.status or '?'}] {first.title or 'error'}{detail}"


def is_error(response: Any) -> bool:
    """
    True when ``response`` is a remote error.

    Accepts a ``UnitError`` or a raw decoded body. A raw body counts as an
    error only if its top-level ``errors`` is a non-empty list; a missing key
    and an empty list both mean "not an error".
    """
    if isinstance(response, UnitError):
        return True
    if isinstance(response, Mapping):
        errors = response.get("errors")
        return isinstance(errors, list) and len(errors) > 0
    return False


# =============================================================================
# Response envelopes
# =============================================================================
T = TypeVar("T")


class UnitResponse(_APIModel, Generic[T]):
    """Single-resource document: ``{"data": {...}, "included": [...]}``."""
    data: T
    included: Optional[List[Dict[str, Any]]] = None


class UnitListResponse(_APIModel, Generic[T]):
    """Collection document: ``{"data": [...], "meta": {...}}``."""
    data: List[T]
    included: Optional[List[Dict[str, Any]]] = None
    meta: Optional[Dict[str, Any]] = None

    def __len__(self) -> int:
        return len(self.data)

    @property
    def total(self) -> Optional[int]:
        pagination = (self.meta or {}).get("pagination") or {}
        total = pagination.get("total")
        return int(total) if total is not None else None


class UnitEmptyResponse(_APIModel):
    """Reply of operations that return no document (e.g. DELETE)."""
    pass


__all__ = [
    "Tags",
    "Direction",
    "AccountType",
    "RelationshipData",
    "Relationship",
    "RelationshipArray",
    "Counterparty",
    "Address",
    "FullName",
    "Phone",
    "Coordinates",
    "BusinessContact",
    "AuthorizedUser",
    "Officer",
    "BeneficialOwner",
    "UnitErrorPayload",
    "UnitError",
    "is_error",
    "UnitResponse",
    "UnitListResponse",
    "UnitEmptyResponse",
]
