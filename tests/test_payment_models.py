"""Tests for the payment resource union."""

import json
from datetime import date

import pytest

from unit.errors import UnitValidationError
from unit.models import AchPayment, BookPayment, parse_payment, payment_kind


class TestVariants:
    def test_ach_payment(self, ach_payment_data):
        payment = parse_payment(ach_payment_data)
        assert isinstance(payment, AchPayment)
        assert payment_kind(payment) == "achPayment"
        assert payment.attributes.amount_cents == 500
        assert payment.attributes.counterparty.routing_number == "812345678"
        assert payment.attributes.settlement_date == date(2024, 3, 4)
        assert payment.relationships.counterparty.id == "77"

    def test_book_payment(self, book_payment_data):
        payment = parse_payment(book_payment_data)
        assert isinstance(payment, BookPayment)
        assert payment_kind(payment) == "bookPayment"
        assert payment.relationships.counterparty_account.id == "10002"
        assert payment.relationships.transaction.type == "transaction"

    def test_raw_json(self, book_payment_data):
        payment = parse_payment(json.dumps(book_payment_data))
        assert isinstance(payment, BookPayment)

    def test_tags_default_to_empty(self, book_payment_data):
        del book_payment_data["attributes"]["tags"]
        assert parse_payment(book_payment_data).attributes.tags == {}

    def test_book_description_up_to_fifty(self, book_payment_data):
        book_payment_data["attributes"]["description"] = "x" * 50
        assert isinstance(parse_payment(book_payment_data), BookPayment)


class TestRejections:
    def test_unknown_type(self, ach_payment_data):
        ach_payment_data["type"] = "wirePayment"
        with pytest.raises(UnitValidationError):
            parse_payment(ach_payment_data)

    def test_book_payment_with_ach_counterparty(self, book_payment_data, ach_payment_data):
        book_payment_data["attributes"]["counterparty"] = ach_payment_data["attributes"]["counterparty"]
        with pytest.raises(UnitValidationError):
            parse_payment(book_payment_data)

    def test_ach_payment_with_book_relationship(self, ach_payment_data):
        ach_payment_data["relationships"]["counterpartyAccount"] = {"data": {"type": "depositAccount", "id": "3"}}
        with pytest.raises(UnitValidationError):
            parse_payment(ach_payment_data)

    def test_ach_description_too_long(self, ach_payment_data):
        ach_payment_data["attributes"]["description"] = "x" * 11
        with pytest.raises(UnitValidationError):
            parse_payment(ach_payment_data)

    @pytest.mark.parametrize("status", ["Approved", "pending", ""])
    def test_status_outside_lifecycle(self, ach_payment_data, status):
        ach_payment_data["attributes"]["status"] = status
        with pytest.raises(UnitValidationError):
            parse_payment(ach_payment_data)

    def test_direction_outside_enum(self, ach_payment_data):
        ach_payment_data["attributes"]["direction"] = "Sideways"
        with pytest.raises(UnitValidationError):
            parse_payment(ach_payment_data)

    def test_non_numeric_amount(self, ach_payment_data):
        ach_payment_data["attributes"]["amount"] = "5.00"
        with pytest.raises(UnitValidationError):
            parse_payment(ach_payment_data)

    def test_missing_relationship(self, book_payment_data):
        del book_payment_data["relationships"]["transaction"]
        with pytest.raises(UnitValidationError) as exc:
            parse_payment(book_payment_data)
        assert exc.value.errors

    def test_payment_kind_of_other_object(self):
        with pytest.raises(TypeError):
            payment_kind({"type": "achPayment"})
