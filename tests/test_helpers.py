"""Tests for the typed value-object constructors."""

from datetime import date

import pytest

from unit import helpers
from unit.errors import UnitValidationError


def jane_parts():
    return dict(
        full_name=helpers.create_full_name("Jane", "Doe"),
        date_of_birth=date(1980, 5, 17),
        address=helpers.create_address("20 Ingram St", "Forest Hills", "11375", "US", state="NY"),
        phone=helpers.create_phone("+1", "5555555555"),
        email="jane@example.com",
    )


class TestSimpleObjects:
    def test_relationship(self):
        rel = helpers.create_relationship("depositAccount", "10001")
        assert rel.to_api() == {"data": {"type": "depositAccount", "id": "10001"}}

    def test_relationship_needs_id(self):
        with pytest.raises(UnitValidationError):
            helpers.create_relationship("depositAccount", "")

    def test_address(self):
        addr = helpers.create_address("20 Ingram St", "Forest Hills", "11375", "us")
        assert addr.to_api() == {"street": "20 Ingram St", "city": "Forest Hills", "postalCode": "11375", "country": "US"}

    def test_address_bad_country(self):
        with pytest.raises(UnitValidationError):
            helpers.create_address("20 Ingram St", "Forest Hills", "11375", "USA")

    def test_phone_strips_plus(self):
        assert helpers.create_phone("+1", "5555555555").to_api() == {"countryCode": "1", "number": "5555555555"}

    def test_coordinates(self):
        assert helpers.create_coordinates(-73.9, 40.7).latitude == 40.7
        with pytest.raises(UnitValidationError):
            helpers.create_coordinates(200, 0)

    def test_counterparty(self):
        cp = helpers.create_counterparty("812345678", "1000000001", "Savings", "Jane Doe")
        assert cp.to_api()["accountType"] == "Savings"

    @pytest.mark.parametrize(
        "args",
        [
            ("81234567", "1000000001", "Checking", "Jane"),
            ("812345678", "1" * 18, "Checking", "Jane"),
            ("812345678", "1000000001", "Brokerage", "Jane"),
        ],
    )
    def test_counterparty_rejections(self, args):
        with pytest.raises(UnitValidationError):
            helpers.create_counterparty(*args)

    def test_business_contact(self):
        parts = jane_parts()
        contact = helpers.create_business_contact(parts["full_name"], parts["email"], parts["phone"])
        assert contact.to_api()["fullName"] == {"first": "Jane", "last": "Doe"}

    def test_authorized_user_bad_email(self):
        parts = jane_parts()
        with pytest.raises(UnitValidationError):
            helpers.create_authorized_user(parts["full_name"], "not-an-email", parts["phone"])


class TestPeople:
    def test_officer_with_ssn(self):
        officer = helpers.create_officer(**jane_parts(), ssn="721074426", title="CEO")
        wire = officer.to_api()
        assert wire["dateOfBirth"] == "1980-05-17"
        assert wire["ssn"] == "721074426"
        assert "passport" not in wire

    def test_officer_needs_exactly_one_id(self):
        with pytest.raises(UnitValidationError):
            helpers.create_officer(**jane_parts())
        with pytest.raises(UnitValidationError):
            helpers.create_officer(**jane_parts(), ssn="721074426", passport="X1")

    def test_beneficial_owner_with_passport(self):
        owner = helpers.create_beneficial_owner(**jane_parts(), passport="X1234567", nationality="GB", percentage=40)
        assert owner.percentage == 40
        assert owner.nationality == "GB"

    def test_beneficial_owner_percentage_range(self):
        with pytest.raises(UnitValidationError):
            helpers.create_beneficial_owner(**jane_parts(), ssn="721074426", percentage=120)
