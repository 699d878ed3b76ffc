"""
Constructors for the small value objects that request bodies embed.

Each function takes keyword arguments in Python naming, validates them and
returns the typed model; dump it with ``.to_api()`` for the wire form.
"""

from __future__ import annotations
from datetime import date
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .errors import UnitValidationError
from .models.common import (
    Address,
    AuthorizedUser,
    BeneficialOwner,
    BusinessContact,
    Coordinates,
    Counterparty,
    FullName,
    Officer,
    Phone,
    Relationship,
)

M = TypeVar("M", bound=BaseModel)


def _build(model: Type[M], label: str, **fields: Any) -> M:
    try:
        return model.model_validate({k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise UnitValidationError.from_pydantic(label, e) from e


def create_relationship(type: str, id: str) -> Relationship:
    return _build(Relationship, "relationship", data={"type": type, "id": id})


def create_address(
    street: str,
    city: str,
    postal_code: str,
    country: str,
    *,
    state: Optional[str] = None,
    street2: Optional[str] = None,
) -> Address:
    return _build(
        Address,
        "address",
        street=street,
        street2=street2,
        city=city,
        state=state,
        postal_code=postal_code,
        country=country,
    )


def create_full_name(first: str, last: str) -> FullName:
    return _build(FullName, "full name", first=first, last=last)


def create_phone(country_code: str, number: str) -> Phone:
    """``country_code`` without the leading ``+``, e.g. ``"1"``."""
    return _build(Phone, "phone", country_code=str(country_code).lstrip("+"), number=number)


def create_coordinates(longitude: float, latitude: float) -> Coordinates:
    return _build(Coordinates, "coordinates", longitude=longitude, latitude=latitude)


def create_counterparty(
    routing_number: str,
    account_number: str,
    account_type: str,
    name: str,
) -> Counterparty:
    """Inline ACH counterparty; ``account_type`` is ``Checking`` or ``Savings``."""
    return _build(
        Counterparty,
        "counterparty",
        routing_number=routing_number,
        account_number=account_number,
        account_type=account_type,
        name=name,
    )


def create_business_contact(full_name: FullName, email: str, phone: Phone) -> BusinessContact:
    return _build(BusinessContact, "business contact", full_name=full_name, email=email, phone=phone)


def create_authorized_user(full_name: FullName, email: str, phone: Phone) -> AuthorizedUser:
    return _build(AuthorizedUser, "authorized user", full_name=full_name, email=email, phone=phone)


def create_officer(
    full_name: FullName,
    date_of_birth: Union[date, str],
    address: Address,
    phone: Phone,
    email: str,
    *,
    title: Optional[str] = None,
    ssn: Optional[str] = None,
    passport: Optional[str] = None,
    nationality: Optional[str] = None,
    status: Optional[str] = None,
) -> Officer:
    """
    Business officer. Exactly one of ``ssn`` / ``passport`` must be given;
    ``nationality`` goes with ``passport``.
    """
    if (ssn is None) == (passport is None):
        raise UnitValidationError("officer needs exactly one of ssn or passport")
    return _build(
        Officer,
        "officer",
        full_name=full_name,
        title=title,
        ssn=ssn,
        passport=passport,
        nationality=nationality,
        date_of_birth=date_of_birth,
        address=address,
        phone=phone,
        email=email,
        status=status,
    )


def create_beneficial_owner(
    full_name: FullName,
    date_of_birth: Union[date, str],
    address: Address,
    phone: Phone,
    email: str,
    *,
    ssn: Optional[str] = None,
    passport: Optional[str] = None,
    nationality: Optional[str] = None,
    percentage: Optional[int] = None,
    status: Optional[str] = None,
) -> BeneficialOwner:
    if (ssn is None) == (passport is None):
        raise UnitValidationError("beneficial owner needs exactly one of ssn or passport")
    return _build(
        BeneficialOwner,
        "beneficial owner",
        full_name=full_name,
        ssn=ssn,
        passport=passport,
        nationality=nationality,
        date_of_birth=date_of_birth,
        address=address,
        phone=phone,
        email=email,
        percentage=percentage,
        status=status,
    )


__all__ = [
    "create_relationship",
    "create_address",
    "create_full_name",
    "create_phone",
    "create_coordinates",
    "create_counterparty",
    "create_business_contact",
    "create_authorized_user",
    "create_officer",
    "create_beneficial_owner",
]
